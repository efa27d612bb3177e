"""
Drawing Surfaces - the pixel targets the effects engine paints on.

DrawingSurface is the small drawing vocabulary the particle rules and ambient
effects use (discs, strokes, gradient strokes, radial glows, blurred discs).
RasterSurface implements it on a Pillow RGBA image with canvas-style
"global alpha" compositing: each shape is painted on its own transparent
layer and alpha-composited onto the frame, so overlapping translucent shapes
accumulate the way they do on an HTML canvas.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFilter

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, float]
# (offset in [0, 1], (r, g, b, alpha))
ColorStop = Tuple[float, RGBA]


def clamp_alpha(alpha: float) -> float:
    """Clamp an opacity to [0, 1]; NaN becomes fully transparent."""
    if alpha != alpha:
        return 0.0
    return max(0.0, min(1.0, float(alpha)))


def interpolate_stops(stops: Sequence[ColorStop], t: float) -> RGBA:
    """Linear interpolation through color stops, like a canvas gradient."""
    if not stops:
        return (0, 0, 0, 0.0)
    t = max(0.0, min(1.0, t))
    if t <= stops[0][0]:
        return stops[0][1]
    for (o0, c0), (o1, c1) in zip(stops, stops[1:]):
        if t <= o1:
            span = (o1 - o0) or 1.0
            f = (t - o0) / span
            return (
                int(round(c0[0] + (c1[0] - c0[0]) * f)),
                int(round(c0[1] + (c1[1] - c0[1]) * f)),
                int(round(c0[2] + (c1[2] - c0[2]) * f)),
                c0[3] + (c1[3] - c0[3]) * f,
            )
    return stops[-1][1]


class DrawingSurface(ABC):
    """
    Abstract 2D drawing target with a pixel width/height that can change.

    Coordinates are floats in pixel space; colors are RGB tuples and alpha is
    the compositing opacity in [0, 1].
    """

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @property
    def is_attached(self) -> bool:
        """Whether the surface can be drawn on yet."""
        return True

    @abstractmethod
    def resize(self, width: int, height: int):
        """Resize the backing store. Content is discarded, like a canvas resize."""

    @abstractmethod
    def clear(self):
        """Clear the whole surface."""

    @abstractmethod
    def fill_circle(self, cx: float, cy: float, radius: float, color: RGB, alpha: float = 1.0):
        pass

    @abstractmethod
    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, color: RGB,
                    width: float = 1.0, alpha: float = 1.0, round_cap: bool = False):
        pass

    @abstractmethod
    def gradient_line(self, x1: float, y1: float, x2: float, y2: float,
                      stops: Sequence[ColorStop], width: float = 1.0, alpha: float = 1.0):
        """Stroke whose color follows `stops` from (x1, y1) to (x2, y2)."""

    @abstractmethod
    def radial_glow(self, cx: float, cy: float, radius: float, stops: Sequence[ColorStop]):
        """Filled disc whose color follows `stops` from the center outward."""

    @abstractmethod
    def soft_circle(self, cx: float, cy: float, radius: float, color: RGB,
                    alpha: float = 1.0, blur: float = 8.0):
        """Blurred disc, used for glows."""

    def present(self):
        """Flush the finished frame to its destination (no-op by default)."""


class RasterSurface(DrawingSurface):
    """Pillow-backed RGBA raster surface."""

    # Segments used to approximate gradient strokes
    GRADIENT_SEGMENTS = 16

    def __init__(self, width: int, height: int, background: Optional[RGB] = None):
        self._width = max(1, int(width))
        self._height = max(1, int(height))
        self.background = background
        self.image = self._blank()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _blank(self) -> Image.Image:
        if self.background is not None:
            fill = (self.background[0], self.background[1], self.background[2], 255)
        else:
            fill = (0, 0, 0, 0)
        return Image.new("RGBA", (self._width, self._height), fill)

    def resize(self, width: int, height: int):
        self._width = max(1, int(width))
        self._height = max(1, int(height))
        self.image = self._blank()

    def clear(self):
        self.image = self._blank()

    def snapshot(self) -> Image.Image:
        """Copy of the current frame."""
        return self.image.copy()

    @staticmethod
    def _rgba(color, alpha: float) -> Tuple[int, int, int, int]:
        return (int(color[0]), int(color[1]), int(color[2]), int(round(clamp_alpha(alpha) * 255)))

    def _composite(self, left: float, top: float, right: float, bottom: float,
                   paint: Callable[[ImageDraw.ImageDraw, int, int], None],
                   post: Optional[Callable[[Image.Image], Image.Image]] = None):
        """Paint on a transparent layer covering the box, then composite the visible part."""
        left_i, top_i = int(math.floor(left)), int(math.floor(top))
        right_i, bottom_i = int(math.ceil(right)) + 1, int(math.ceil(bottom)) + 1

        clip_left, clip_top = max(left_i, 0), max(top_i, 0)
        clip_right, clip_bottom = min(right_i, self._width), min(bottom_i, self._height)
        if clip_right <= clip_left or clip_bottom <= clip_top:
            return

        layer = Image.new("RGBA", (right_i - left_i, bottom_i - top_i), (0, 0, 0, 0))
        paint(ImageDraw.Draw(layer), left_i, top_i)
        if post is not None:
            layer = post(layer)

        source = (clip_left - left_i, clip_top - top_i, clip_right - left_i, clip_bottom - top_i)
        self.image.alpha_composite(layer, dest=(clip_left, clip_top), source=source)

    def fill_circle(self, cx, cy, radius, color, alpha=1.0):
        if radius <= 0 or clamp_alpha(alpha) == 0.0:
            return
        fill = self._rgba(color, alpha)

        def paint(draw, ox, oy):
            draw.ellipse((cx - radius - ox, cy - radius - oy, cx + radius - ox, cy + radius - oy), fill=fill)

        self._composite(cx - radius, cy - radius, cx + radius, cy + radius, paint)

    def stroke_line(self, x1, y1, x2, y2, color, width=1.0, alpha=1.0, round_cap=False):
        if clamp_alpha(alpha) == 0.0:
            return
        fill = self._rgba(color, alpha)
        w = max(1, int(round(width)))
        pad = w / 2.0 + 1

        def paint(draw, ox, oy):
            draw.line((x1 - ox, y1 - oy, x2 - ox, y2 - oy), fill=fill, width=w)
            if round_cap and w > 2:
                r = w / 2.0
                for px, py in ((x1, y1), (x2, y2)):
                    draw.ellipse((px - r - ox, py - r - oy, px + r - ox, py + r - oy), fill=fill)

        self._composite(min(x1, x2) - pad, min(y1, y2) - pad, max(x1, x2) + pad, max(y1, y2) + pad, paint)

    def gradient_line(self, x1, y1, x2, y2, stops, width=1.0, alpha=1.0):
        w = max(1, int(round(width)))
        pad = w / 2.0 + 1
        segments = self.GRADIENT_SEGMENTS

        def paint(draw, ox, oy):
            for i in range(segments):
                t0 = i / segments
                t1 = (i + 1) / segments
                r, g, b, a = interpolate_stops(stops, (t0 + t1) / 2)
                draw.line(
                    (x1 + (x2 - x1) * t0 - ox, y1 + (y2 - y1) * t0 - oy,
                     x1 + (x2 - x1) * t1 - ox, y1 + (y2 - y1) * t1 - oy),
                    fill=self._rgba((r, g, b), a * alpha),
                    width=w,
                )

        self._composite(min(x1, x2) - pad, min(y1, y2) - pad, max(x1, x2) + pad, max(y1, y2) + pad, paint)

    def radial_glow(self, cx, cy, radius, stops):
        if radius <= 0:
            return
        rings = max(8, min(64, int(radius / 3)))

        def paint(draw, ox, oy):
            # Outer rings first; each inner ring overwrites the pixels it covers
            for i in range(rings, 0, -1):
                r = radius * i / rings
                color = interpolate_stops(stops, i / rings)
                draw.ellipse((cx - r - ox, cy - r - oy, cx + r - ox, cy + r - oy),
                             fill=self._rgba(color[:3], color[3]))

        self._composite(cx - radius, cy - radius, cx + radius, cy + radius, paint)

    def soft_circle(self, cx, cy, radius, color, alpha=1.0, blur=8.0):
        if radius <= 0 or clamp_alpha(alpha) == 0.0:
            return
        fill = self._rgba(color, alpha)
        pad = radius + blur * 3

        def paint(draw, ox, oy):
            draw.ellipse((cx - radius - ox, cy - radius - oy, cx + radius - ox, cy + radius - oy), fill=fill)

        def soften(layer):
            return layer.filter(ImageFilter.GaussianBlur(blur))

        self._composite(cx - pad, cy - pad, cx + pad, cy + pad, paint, post=soften if blur > 0 else None)
