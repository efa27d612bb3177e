"""
Curses Drawing Surface - renders the pixel-space drawing calls as terminal cells.

Each terminal cell stands for a CELL_WIDTH x CELL_HEIGHT block of pixels. Draw
calls are rasterized into a cell buffer where the most opaque shape wins the
cell; present() writes the buffer to the curses window. The dashboard draws its
panels after present(), so text always sits on top of the effects.
"""

import logging
import math
from typing import Dict, Optional, Sequence, Tuple

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from ..tui.colors import Colors
from .surface import ColorStop, DrawingSurface, RGB, clamp_alpha, interpolate_stops

logger = logging.getLogger(__name__)

# (alpha, glyph, color pair)
Cell = Tuple[float, str, int]


class CursesSurface(DrawingSurface):
    """Terminal-cell implementation of DrawingSurface."""

    CELL_WIDTH = 8
    CELL_HEIGHT = 16

    # Below this a cell is not worth drawing
    MIN_ALPHA = 0.05
    DIM_BELOW = 0.34
    BOLD_ABOVE = 0.75

    SHADES = "░▒▓"

    def __init__(self, screen=None, rows: int = 0, cols: int = 0, top: int = 0, left: int = 0,
                 cell_width: int = CELL_WIDTH, cell_height: int = CELL_HEIGHT):
        self.screen = screen
        self.top = top
        self.left = left
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.rows = rows
        self.cols = cols
        if screen is not None and not (rows and cols):
            self.rows, self.cols = screen.getmaxyx()
        self._cells: Dict[Tuple[int, int], Cell] = {}

    def bind(self, screen, rows: Optional[int] = None, cols: Optional[int] = None):
        """Attach to a curses window, sizing to it unless told otherwise."""
        self.screen = screen
        max_rows, max_cols = screen.getmaxyx()
        self.rows = rows if rows is not None else max_rows
        self.cols = cols if cols is not None else max_cols
        self._cells.clear()

    @property
    def is_attached(self) -> bool:
        return self.screen is not None and self.rows > 0 and self.cols > 0

    @property
    def width(self) -> int:
        return self.cols * self.cell_width

    @property
    def height(self) -> int:
        return self.rows * self.cell_height

    def resize(self, width: int, height: int):
        self.cols = max(1, int(width) // self.cell_width)
        self.rows = max(1, int(height) // self.cell_height)
        self._cells.clear()

    def resize_cells(self, rows: int, cols: int):
        """Resize in terminal cells."""
        self.resize(cols * self.cell_width, rows * self.cell_height)

    def clear(self):
        self._cells.clear()

    def cells(self) -> Dict[Tuple[int, int], Cell]:
        """Copy of the buffered (row, col) -> (alpha, glyph, pair) cells."""
        return dict(self._cells)

    # -- rasterization ----------------------------------------------------

    def _cell_of(self, x: float, y: float) -> Tuple[int, int]:
        return int(math.floor(y / self.cell_height)), int(math.floor(x / self.cell_width))

    def _plot(self, row: int, col: int, glyph: str, color, alpha: float):
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            return
        alpha = clamp_alpha(alpha)
        if alpha < self.MIN_ALPHA:
            return
        existing = self._cells.get((row, col))
        if existing is None or alpha > existing[0]:
            self._cells[(row, col)] = (alpha, glyph, Colors.nearest_effect_pair(color))

    def _shade(self, alpha: float) -> str:
        if alpha < 0.2:
            return self.SHADES[0]
        if alpha < 0.5:
            return self.SHADES[1]
        return self.SHADES[2]

    @staticmethod
    def _disc_glyph(radius: float) -> str:
        if radius < 2:
            return "·"
        if radius < 4:
            return "*"
        if radius < 8:
            return "o"
        return "O"

    def _stroke_glyph(self, dx: float, dy: float) -> str:
        # Compare slope in cell units, not pixels
        cx = dx / self.cell_width
        cy = dy / self.cell_height
        if abs(cy) >= 2 * abs(cx):
            return "|"
        if abs(cx) >= 2 * abs(cy):
            return "-"
        return "\\" if (cx > 0) == (cy > 0) else "/"

    def _disc_cells(self, cx: float, cy: float, radius: float):
        """Cells whose centers fall inside the disc, or the center cell for small discs."""
        row0, col0 = self._cell_of(cx, cy)
        if radius < min(self.cell_width, self.cell_height) / 2:
            yield row0, col0, 0.0
            return
        row_span = int(math.ceil(radius / self.cell_height)) + 1
        col_span = int(math.ceil(radius / self.cell_width)) + 1
        for row in range(max(0, row0 - row_span), min(self.rows, row0 + row_span + 1)):
            center_y = (row + 0.5) * self.cell_height
            for col in range(max(0, col0 - col_span), min(self.cols, col0 + col_span + 1)):
                center_x = (col + 0.5) * self.cell_width
                distance = math.hypot(center_x - cx, center_y - cy)
                if distance <= radius:
                    yield row, col, distance / radius

    def fill_circle(self, cx, cy, radius, color, alpha=1.0):
        if radius <= 0:
            return
        # Discs bigger than a cell read better as shading than as letters
        large = radius >= self.cell_height
        for row, col, _ in self._disc_cells(cx, cy, radius):
            glyph = self._shade(alpha) if large else self._disc_glyph(radius)
            self._plot(row, col, glyph, color, alpha)

    def _walk(self, x1, y1, x2, y2):
        length = math.hypot(x2 - x1, y2 - y1)
        steps = max(1, int(length / (min(self.cell_width, self.cell_height) / 2)))
        for i in range(steps + 1):
            t = i / steps
            yield t, x1 + (x2 - x1) * t, y1 + (y2 - y1) * t

    def stroke_line(self, x1, y1, x2, y2, color, width=1.0, alpha=1.0, round_cap=False):
        glyph = self._stroke_glyph(x2 - x1, y2 - y1)
        for _, x, y in self._walk(x1, y1, x2, y2):
            row, col = self._cell_of(x, y)
            self._plot(row, col, glyph, color, alpha)

    def gradient_line(self, x1, y1, x2, y2, stops: Sequence[ColorStop], width=1.0, alpha=1.0):
        glyph = self._stroke_glyph(x2 - x1, y2 - y1)
        for t, x, y in self._walk(x1, y1, x2, y2):
            r, g, b, a = interpolate_stops(stops, t)
            row, col = self._cell_of(x, y)
            self._plot(row, col, glyph, (r, g, b), a * alpha)

    def radial_glow(self, cx, cy, radius, stops: Sequence[ColorStop]):
        if radius <= 0:
            return
        for row, col, t in self._disc_cells(cx, cy, radius):
            r, g, b, a = interpolate_stops(stops, t)
            self._plot(row, col, self._shade(a), (r, g, b), a)

    def soft_circle(self, cx, cy, radius, color: RGB, alpha=1.0, blur=8.0):
        if radius <= 0:
            return
        # The blur halo fades linearly to zero over `blur` pixels past the edge
        outer = radius + max(0.0, blur)
        for row, col, t in self._disc_cells(cx, cy, outer):
            distance = t * outer
            fade = 1.0 if distance <= radius else 1.0 - (distance - radius) / max(blur, 1e-6)
            a = alpha * fade
            self._plot(row, col, self._shade(a), color, a)

    # -- output -----------------------------------------------------------

    def _attr(self, alpha: float, pair: int) -> int:
        attr = curses.color_pair(pair)
        if alpha < self.DIM_BELOW:
            attr |= curses.A_DIM
        elif alpha > self.BOLD_ABOVE:
            attr |= curses.A_BOLD
        return attr

    def present(self):
        if self.screen is None or curses is None:
            return
        for (row, col), (alpha, glyph, pair) in self._cells.items():
            try:
                self.screen.addstr(self.top + row, self.left + col, glyph, self._attr(alpha, pair))
            except curses.error:
                # Bottom-right cell and cells past a shrinking window
                pass
