"""
TUI Color Definitions - Curses color pair management.

Dashboard text pairs plus the effect palette CursesSurface maps pixel colors
onto.
"""

from typing import List, Tuple

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from ..effects.conditions import Condition


class Colors:
    """Color pairs for curses."""
    NORMAL = 0
    STATUS_OK = 1
    STATUS_WARN = 2
    STATUS_ERROR = 3
    HEADER = 4
    SELECTED = 5
    MUTED = 6
    ACCENT = 7
    # Condition-tinted text
    TEXT_SUNNY = 8       # Warm yellow text for sunny
    TEXT_CLOUDY = 9      # Grey-white text for cloudy
    TEXT_RAIN = 10       # Blue-tinted text for rain
    TEXT_SNOW = 11       # White text for snow
    # Effect palette (nearest match for drawn pixel colors)
    FX_WHITE = 12
    FX_CYAN = 13
    FX_BLUE = 14
    FX_YELLOW = 15
    FX_RED = 16          # Deep amber/orange falls here
    FX_GREY = 17         # Cloud shadows
    FX_MAGENTA = 18
    FX_GREEN = 19

    # (approximate RGB of the terminal color, pair number)
    EFFECT_PALETTE: List[Tuple[Tuple[int, int, int], int]] = [
        ((255, 255, 255), FX_WHITE),
        ((135, 206, 235), FX_CYAN),
        ((30, 100, 220), FX_BLUE),
        ((250, 200, 60), FX_YELLOW),
        ((200, 90, 20), FX_RED),
        ((90, 100, 115), FX_GREY),
        ((200, 60, 200), FX_MAGENTA),
        ((40, 180, 60), FX_GREEN),
    ]

    @staticmethod
    def init_colors():
        """Initialize curses color pairs."""
        if not CURSES_AVAILABLE or curses is None:
            return
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(Colors.STATUS_OK, curses.COLOR_GREEN, -1)
        curses.init_pair(Colors.STATUS_WARN, curses.COLOR_YELLOW, -1)
        curses.init_pair(Colors.STATUS_ERROR, curses.COLOR_RED, -1)
        curses.init_pair(Colors.HEADER, curses.COLOR_CYAN, -1)
        curses.init_pair(Colors.SELECTED, curses.COLOR_BLACK, curses.COLOR_WHITE)
        curses.init_pair(Colors.MUTED, curses.COLOR_WHITE, -1)
        curses.init_pair(Colors.ACCENT, curses.COLOR_MAGENTA, -1)
        # Condition-tinted text
        curses.init_pair(Colors.TEXT_SUNNY, curses.COLOR_YELLOW, -1)
        curses.init_pair(Colors.TEXT_CLOUDY, curses.COLOR_WHITE, -1)
        curses.init_pair(Colors.TEXT_RAIN, curses.COLOR_CYAN, -1)
        curses.init_pair(Colors.TEXT_SNOW, curses.COLOR_WHITE, -1)
        # Effect palette
        curses.init_pair(Colors.FX_WHITE, curses.COLOR_WHITE, -1)
        curses.init_pair(Colors.FX_CYAN, curses.COLOR_CYAN, -1)
        curses.init_pair(Colors.FX_BLUE, curses.COLOR_BLUE, -1)
        curses.init_pair(Colors.FX_YELLOW, curses.COLOR_YELLOW, -1)
        curses.init_pair(Colors.FX_RED, curses.COLOR_RED, -1)
        curses.init_pair(Colors.FX_MAGENTA, curses.COLOR_MAGENTA, -1)
        curses.init_pair(Colors.FX_GREEN, curses.COLOR_GREEN, -1)
        # Grey: use a custom color where the terminal allows it
        try:
            if curses.can_change_color() and curses.COLORS >= 256:
                curses.init_color(100, 350, 390, 450)
                curses.init_pair(Colors.FX_GREY, 100, -1)
            else:
                curses.init_pair(Colors.FX_GREY, curses.COLOR_WHITE, -1)
        except curses.error:
            curses.init_pair(Colors.FX_GREY, curses.COLOR_WHITE, -1)

    @staticmethod
    def nearest_effect_pair(rgb) -> int:
        """Pair number of the palette color closest to rgb."""
        r, g, b = rgb[0], rgb[1], rgb[2]
        best_pair = Colors.FX_WHITE
        best_distance = None
        for (pr, pg, pb), pair in Colors.EFFECT_PALETTE:
            distance = (pr - r) ** 2 + (pg - g) ** 2 + (pb - b) ** 2
            if best_distance is None or distance < best_distance:
                best_pair, best_distance = pair, distance
        return best_pair

    @staticmethod
    def text_for_condition(condition: Condition, base_color: int) -> int:
        """Tint body text by the condition being shown."""
        return {
            Condition.SUNNY: Colors.TEXT_SUNNY,
            Condition.CLOUDY: Colors.TEXT_CLOUDY,
            Condition.RAINY: Colors.TEXT_RAIN,
            Condition.SNOWY: Colors.TEXT_SNOW,
        }.get(condition, base_color)
