"""
WeatherFX Dashboard - Terminal Weather Display

A terminal user interface showing current conditions and a seven-day
forecast on top of animated weather effects (rain, snow, clouds, sun rays).

Features:
- Current conditions for a city (live or demo data)
- Seven-day forecast strip; selecting a day switches the effect
- Cycling through default cities and searching any city
- Effect override, intensity and rendition controls

Usage:
    weatherfx dashboard
    weatherfx dashboard --city London --fps 20
    weatherfx dashboard --demo --variant lite

Keyboard Shortcuts:
    [←/→] Select forecast day
    [n/p] Next/previous city
    [/] Search city
    [w] Cycle weather effect
    [+/-] Effect intensity
    [v] Toggle scenic/lite effects
    [r] Refresh
    [?] Help
    [q] Quit
"""

import logging
import sys
import time
from datetime import datetime
from typing import List, Optional, Tuple

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from ..config import WeatherFXConfig
from ..effects.conditions import Condition, EffectVariant
from ..effects.engine import ParticleEngine
from ..effects.scheduler import FrameScheduler
from ..effects.terminal import CursesSurface
from ..utils.error_handling import ErrorCategory, safe_execute
from ..weather.models import DEFAULT_LOCATIONS, CurrentWeather, DisplayWeather, ForecastDay
from ..weather.protocol import WeatherSource, create_weather_source, resolve_display
from .colors import Colors

logger = logging.getLogger(__name__)

CONDITION_ICONS = {
    Condition.SUNNY: "☀",
    Condition.CLOUDY: "☁",
    Condition.RAINY: "☂",
    Condition.SNOWY: "❄",
    Condition.NONE: " ",
}


class Dashboard:
    """
    Terminal weather dashboard.

    Displays:
    - Header with city, data source and clock
    - Current (or selected day's) conditions
    - Forecast strip
    - Weather effects behind everything
    """

    INTENSITY_STEP = 0.5
    MAX_INTENSITY = 5.0
    FORECAST_CELL_WIDTH = 12

    def __init__(self, source: Optional[WeatherSource] = None,
                 config: Optional[WeatherFXConfig] = None,
                 city: Optional[str] = None, fps: Optional[int] = None,
                 variant: Optional[EffectVariant] = None,
                 refresh_interval: float = 600.0):
        self.config = config or WeatherFXConfig.from_env()
        self.source = source or create_weather_source(self.config)
        self.city = city or self.config.default_city
        self.fps = fps or self.config.fps
        self.refresh_interval = refresh_interval
        self.running = False
        self.screen = None
        self.show_help = False

        # Effects
        self.scheduler = FrameScheduler()
        self.surface = CursesSurface()
        self.engine = ParticleEngine(self.scheduler, surface=self.surface,
                                     variant=variant or self.config.variant)
        self.condition_override: Optional[Condition] = None
        self.intensity = 1.0
        self._effect_state: Optional[Tuple[Condition, float, EffectVariant]] = None

        # Data caches
        self.current: Optional[CurrentWeather] = None
        self.forecast: List[ForecastDay] = []
        self.selected_day = 0
        self.location_index = self._location_index_for(self.city)
        self.error_message = ""
        self.demo_mode = self.source.is_demo_mode()
        self._last_refresh = 0.0

        # Layout
        self.height = 0
        self.width = 0

    @staticmethod
    def _location_index_for(city: str) -> int:
        for i, location in enumerate(DEFAULT_LOCATIONS):
            if location.name.lower() == (city or "").lower():
                return i
        return 0

    # -- state ------------------------------------------------------------

    @property
    def display(self) -> Optional[DisplayWeather]:
        """Readings for the selected day, or None before the first load."""
        if self.current is None:
            return None
        return resolve_display(self.current, self.forecast, self.selected_day)

    @property
    def displayed_condition(self) -> Condition:
        """Condition driving the effects: the override, else the selected day's."""
        if self.condition_override is not None:
            return self.condition_override
        display = self.display
        return display.condition if display else Condition.NONE

    def _sync_effect(self):
        """Point the engine at the displayed condition if it changed."""
        state = (self.displayed_condition, self.intensity, self.engine.variant)
        if state == self._effect_state:
            return
        if self.engine.running:
            self.engine.on_condition_or_intensity_change(state[0], self.intensity)
        elif self.engine.start(state[0], self.intensity) is None:
            # Surface not bound yet; retried on the next sync
            return
        self._effect_state = state

    def _refresh_data(self):
        """Refresh current conditions and forecast for the current city."""
        with safe_execute("refreshing weather", ErrorCategory.PROVIDER) as result:
            result.value = self.source.get_report(self.city)

        self._last_refresh = time.monotonic()
        if not result.success:
            self.error_message = f"Refresh failed: {result.error.error}"
            return

        report = result.value
        self.current = report.current
        self.forecast = report.forecast
        self.demo_mode = report.demo
        self.selected_day = 0
        self.error_message = ""
        logger.info(f"Loaded weather for {report.current.city} "
                    f"({report.current.condition.value}, demo={report.demo})")
        self._sync_effect()

    # -- curses loop ------------------------------------------------------

    def run(self):
        """Run the dashboard."""
        if not CURSES_AVAILABLE:
            print("Error: curses library not available.")
            if sys.platform == 'win32':
                print("Try: pip install windows-curses")
            sys.exit(1)
        curses.wrapper(self._main_loop)

    def _main_loop(self, screen):
        """Main curses loop."""
        self.screen = screen
        self.running = True

        try:
            curses.curs_set(0)  # Hide cursor
        except curses.error:
            pass
        Colors.init_colors()
        screen.timeout(max(1, 1000 // self.fps))

        self._update_dimensions()
        self.surface.bind(screen)
        self._refresh_data()
        self._sync_effect()

        try:
            while self.running:
                try:
                    old_width, old_height = self.width, self.height
                    self._update_dimensions()
                    if (self.width, self.height) != (old_width, old_height):
                        self._handle_resize()

                    self._draw()

                    key = screen.getch()
                    self._handle_input(key)

                    if time.monotonic() - self._last_refresh >= self.refresh_interval:
                        self._refresh_data()
                except KeyboardInterrupt:
                    self.running = False
                except curses.error:
                    pass
        finally:
            self.engine.stop()

    def _update_dimensions(self):
        """Update terminal dimensions."""
        self.height, self.width = self.screen.getmaxyx()

    def _handle_resize(self):
        """Handle terminal resize."""
        self.engine.on_resize(self.width * self.surface.cell_width,
                              self.height * self.surface.cell_height)
        self.screen.clear()

    # -- input ------------------------------------------------------------

    def _handle_input(self, key: int):
        """Handle keyboard input."""
        if key == -1:
            return
        if self.show_help:
            self.show_help = False
            return

        if key == ord('q') or key == ord('Q'):
            self.running = False
        elif key == ord('r') or key == ord('R'):
            self._refresh_data()
        elif key == ord('?'):
            self.show_help = True
        elif key == ord('n') or key == ord('N'):
            self._change_location(1)
        elif key == ord('p') or key == ord('P'):
            self._change_location(-1)
        elif key == ord('/'):
            self._start_search()
        elif key == curses.KEY_LEFT:
            self._select_day(self.selected_day - 1)
        elif key == curses.KEY_RIGHT:
            self._select_day(self.selected_day + 1)
        elif key == ord('w') or key == ord('W'):
            self._cycle_condition()
        elif key in (ord('+'), ord('=')):
            self.intensity = min(self.MAX_INTENSITY, self.intensity + self.INTENSITY_STEP)
            self._sync_effect()
        elif key in (ord('-'), ord('_')):
            self.intensity = max(0.0, self.intensity - self.INTENSITY_STEP)
            self._sync_effect()
        elif key == ord('v') or key == ord('V'):
            self._toggle_variant()

    def _change_location(self, step: int):
        self.location_index = (self.location_index + step) % len(DEFAULT_LOCATIONS)
        self.city = DEFAULT_LOCATIONS[self.location_index].name
        self._refresh_data()

    def _select_day(self, index: int):
        if not self.forecast:
            return
        self.selected_day = max(0, min(len(self.forecast) - 1, index))
        self._sync_effect()

    def _cycle_condition(self):
        """Step the effect override: data-driven -> sunny -> cloudy -> rainy -> snowy -> data-driven."""
        order = Condition.cycle_order()
        if self.condition_override is None:
            self.condition_override = order[0]
        else:
            index = order.index(self.condition_override) + 1
            self.condition_override = order[index] if index < len(order) else None
        self._sync_effect()

    def _toggle_variant(self):
        variant = EffectVariant.LITE if self.engine.variant == EffectVariant.SCENIC else EffectVariant.SCENIC
        self.engine.set_variant(variant)
        if self.engine.running:
            self._effect_state = (self.displayed_condition, self.intensity, variant)
        else:
            self._sync_effect()

    def _start_search(self):
        """Prompt for a city name and load it."""
        curses.curs_set(1)  # Show cursor
        search_text = ""

        while True:
            self.screen.erase()
            self._addstr(0, 0, "City: ", Colors.HEADER)
            self._addstr(0, 6, search_text + "_", Colors.NORMAL)
            self._addstr(2, 0, "[Enter] Load  [ESC] Cancel", Colors.MUTED)
            self.screen.refresh()

            key = self.screen.getch()
            if key == 27:  # ESC
                search_text = ""
                break
            elif key in (curses.KEY_ENTER, 10, 13):
                break
            elif key in (curses.KEY_BACKSPACE, 127, 8):
                search_text = search_text[:-1]
            elif 32 <= key <= 126:  # Printable characters
                search_text += chr(key)

        curses.curs_set(0)  # Hide cursor
        if search_text.strip():
            self.city = search_text.strip()
            self._refresh_data()

    # -- drawing ----------------------------------------------------------

    def _draw(self):
        """Draw one frame: effects first, panels on top."""
        self.screen.erase()
        self.scheduler.tick(time.monotonic() * 1000)

        if self.show_help:
            self._draw_help()
        else:
            self._draw_header()
            self._draw_current_panel()
            self._draw_forecast_panel()
            self._draw_footer()

        self.screen.refresh()

    def _draw_header(self):
        """Draw the header bar."""
        if self.current is not None:
            place = f"{self.current.city}, {self.current.country}"
        else:
            place = self.city
        header = f" WEATHERFX | {place}"
        if self.demo_mode:
            header += " | DEMO DATA"
        clock = datetime.now().strftime("%a %H:%M ")
        effect = f"{self.displayed_condition.display_name} x{self.intensity:g} ({self.engine.variant.value})"
        if self.condition_override is not None:
            effect += " [override]"

        self._addstr(0, 0, header, Colors.HEADER, bold=True)
        self._addstr(0, max(len(header) + 2, self.width - len(clock) - len(effect) - 4), effect, Colors.ACCENT)
        self._addstr(0, max(0, self.width - len(clock) - 1), clock, Colors.MUTED)

    def _draw_current_panel(self):
        display = self.display
        if display is None:
            self._addstr(self.height // 2, 2, "Loading weather data...", Colors.MUTED)
            return

        title = "NOW" if self.selected_day == 0 or not self.forecast else self.forecast[self.selected_day].day.upper()
        lines = [
            f"{CONDITION_ICONS.get(display.condition, ' ')}  {display.temperature}°C  {display.description.title()}",
            "",
            f"Feels like {display.feels_like}°C",
            f"Humidity   {display.humidity}%",
            f"Wind       {display.wind_speed} km/h",
            f"Visibility {display.visibility} km",
        ]
        box_width = min(self.width - 4, max(len(line) for line in lines) + 6)
        box_height = len(lines) + 2
        y = max(2, (self.height - box_height) // 2 - 3)
        x = max(0, (self.width - box_width) // 2)
        self._draw_box(y, x, box_width, box_height, title)
        for i, line in enumerate(lines):
            self._addstr(y + 1 + i, x + 3, line, self._text_color(Colors.NORMAL), bold=(i == 0))

    def _draw_forecast_panel(self):
        if not self.forecast:
            return
        cell = self.FORECAST_CELL_WIDTH
        box_width = min(self.width - 2, cell * len(self.forecast) + 2)
        box_height = 5
        y = self.height - box_height - 2
        x = max(0, (self.width - box_width) // 2)
        if y < 2:
            return
        self._draw_box(y, x, box_width, box_height, "FORECAST")

        for i, day in enumerate(self.forecast):
            col = x + 1 + i * cell
            if col + cell > x + box_width:
                break
            color = Colors.SELECTED if i == self.selected_day else self._text_color(Colors.NORMAL)
            icon = CONDITION_ICONS.get(day.condition, " ")
            self._addstr(y + 1, col, day.day[:cell - 1].center(cell - 1), color)
            self._addstr(y + 2, col, f"{icon} {day.high}/{day.low}°".center(cell - 1), color)
            self._addstr(y + 3, col, f"{day.precipitation}% rain".center(cell - 1), color)

    def _draw_footer(self):
        """Draw the footer bar."""
        shortcuts = "[←→]Day [n/p]City [/]Search [w]Weather [+/-]Intensity [v]Style [r]Refresh [?]Help [q]Quit"
        if self.error_message:
            self._addstr(self.height - 2, 1, self.error_message, Colors.STATUS_ERROR)
        footer = f" {shortcuts} ".ljust(max(0, self.width - 1))
        self._addstr(self.height - 1, 0, footer, Colors.MUTED)

    def _draw_help(self):
        """Draw help overlay."""
        help_text = [
            "KEYBOARD SHORTCUTS",
            "",
            "  ←/→  Select forecast day",
            "  n/p  Next/previous city",
            "  /    Search for a city",
            "  w    Cycle weather effect (auto/sun/cloud/rain/snow)",
            "  +/-  Effect intensity",
            "  v    Toggle scenic/lite effects",
            "  r    Refresh data",
            "  q    Quit dashboard",
            "  ?    Toggle this help",
            "",
            "Press any key to close",
        ]

        box_width = max(len(line) for line in help_text) + 4
        box_height = len(help_text) + 2
        start_y = max(0, (self.height - box_height) // 2)
        start_x = max(0, (self.width - box_width) // 2)

        self._draw_box(start_y, start_x, box_width, box_height, "HELP")
        for i, line in enumerate(help_text):
            self._addstr(start_y + 1 + i, start_x + 2, line, Colors.NORMAL)

    def _draw_box(self, y: int, x: int, width: int, height: int, title: str):
        """Draw a box with title."""
        try:
            attr = curses.color_pair(self._text_color(Colors.HEADER))
            self.screen.attron(attr)
            self.screen.addch(y, x, curses.ACS_ULCORNER)
            self.screen.addch(y, x + width - 1, curses.ACS_URCORNER)
            self.screen.addch(y + height - 1, x, curses.ACS_LLCORNER)
            self.screen.addch(y + height - 1, x + width - 1, curses.ACS_LRCORNER)
            for i in range(1, width - 1):
                self.screen.addch(y, x + i, curses.ACS_HLINE)
                self.screen.addch(y + height - 1, x + i, curses.ACS_HLINE)
            for i in range(1, height - 1):
                self.screen.addch(y + i, x, curses.ACS_VLINE)
                self.screen.addch(y + i, x + width - 1, curses.ACS_VLINE)
                # Blank the interior so text stays readable over the effects
                self.screen.addstr(y + i, x + 1, " " * (width - 2))
            self.screen.attroff(attr)

            if title:
                title_attr = curses.color_pair(self._text_color(Colors.HEADER)) | curses.A_BOLD
                self.screen.attron(title_attr)
                self.screen.addstr(y, x + 2, f" {title} "[:width - 4])
                self.screen.attroff(title_attr)
        except curses.error:
            pass

    def _text_color(self, base_color: int) -> int:
        return Colors.text_for_condition(self.displayed_condition, base_color)

    def _addstr(self, y: int, x: int, text: str, color: int = Colors.NORMAL, bold: bool = False):
        """Add string with color and bounds checking."""
        if y < 0 or y >= self.height or x >= self.width:
            return

        max_len = self.width - x - 1
        if max_len <= 0:
            return

        text = text[:max_len]
        try:
            attr = curses.color_pair(color)
            if bold:
                attr |= curses.A_BOLD
            self.screen.attron(attr)
            self.screen.addstr(y, x, text)
            self.screen.attroff(attr)
        except curses.error:
            pass


def run_dashboard(config: Optional[WeatherFXConfig] = None, city: Optional[str] = None,
                  fps: Optional[int] = None, variant: Optional[EffectVariant] = None):
    """
    Run the dashboard.

    Args:
        config: Settings (read from the environment when omitted)
        city: City to show first
        fps: Frame rate
        variant: Effect rendition
    """
    config = config or WeatherFXConfig.from_env()
    source = create_weather_source(config)
    if source.is_demo_mode():
        print("Using demo data. Set OPENWEATHER_API_KEY to use real data.")

    dashboard = Dashboard(source=source, config=config, city=city, fps=fps, variant=variant)
    dashboard.run()
