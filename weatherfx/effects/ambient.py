"""
Ambient Effects - procedural, non-particle animations (sun rays, drifting clouds).

Each effect owns its own phase counter and advances it by a fixed amount per
frame, so two engines on the same page animate independently. Phases grow
without bound; drawing positions are periodic via modulo/trig.
"""

import math
from typing import List, Sequence, Tuple

from .surface import ColorStop, DrawingSurface, interpolate_stops

# Nominal display refresh used to turn CSS-style second periods into frames
FRAME_SECONDS = 1.0 / 60.0


class AmbientEffect:
    """Base class for ambient effects."""

    name = "ambient"

    def __init__(self):
        self.phase = 0.0

    def advance(self):
        """Advance one frame."""
        raise NotImplementedError

    def draw(self, surface: DrawingSurface):
        raise NotImplementedError


class Sunburst(AmbientEffect):
    """
    Rotating sunburst: an outer ring of 16 long rays, an inner ring of 8 shorter
    rays turning the other way at half speed, and a warm radial glow.
    """

    name = "sunburst"
    ROTATION_STEP = 0.3  # degrees per frame

    OUTER_RAYS = 16
    OUTER_WIDTH = 12
    OUTER_START = 120
    OUTER_REACH = 0.55   # fraction of min(width, height)
    OUTER_STOPS = [
        (0.0, (251, 191, 36, 0.6)),   # Warm amber
        (0.3, (245, 158, 11, 0.5)),   # Golden
        (0.7, (217, 119, 6, 0.3)),    # Darker amber
        (1.0, (180, 83, 9, 0.0)),
    ]

    INNER_RAYS = 8
    INNER_WIDTH = 8
    INNER_START = 100
    INNER_REACH = 0.35
    INNER_STOPS = [
        (0.0, (245, 158, 11, 0.5)),
        (0.5, (217, 119, 6, 0.4)),
        (1.0, (180, 83, 9, 0.0)),
    ]

    GLOW_RADIUS = 180
    GLOW_STOPS = [
        (0.0, (251, 191, 36, 0.3)),
        (0.3, (245, 158, 11, 0.25)),
        (0.7, (217, 119, 6, 0.15)),
        (1.0, (180, 83, 9, 0.0)),
    ]

    @property
    def rotation(self) -> float:
        return self.phase

    def advance(self):
        self.phase += self.ROTATION_STEP

    def draw(self, surface: DrawingSurface):
        cx = surface.width / 2
        cy = surface.height / 2
        short_side = min(surface.width, surface.height)

        self._draw_ring(surface, cx, cy, self.OUTER_RAYS, 360 / self.OUTER_RAYS, self.phase,
                        self.OUTER_START, short_side * self.OUTER_REACH, self.OUTER_WIDTH, self.OUTER_STOPS)
        self._draw_ring(surface, cx, cy, self.INNER_RAYS, 360 / self.INNER_RAYS,
                        180 / self.INNER_RAYS - self.phase * 0.5,
                        self.INNER_START, short_side * self.INNER_REACH, self.INNER_WIDTH, self.INNER_STOPS)

        surface.radial_glow(cx, cy, self.GLOW_RADIUS, self.GLOW_STOPS)

    @staticmethod
    def _tail_stops(stops: Sequence[ColorStop], start: float, length: float) -> List[ColorStop]:
        """Re-base a center-anchored gradient onto the stroke from `start` to `length`."""
        if length <= start:
            return [(0.0, interpolate_stops(stops, 1.0))]
        t0 = start / length
        tail = [(0.0, interpolate_stops(stops, t0))]
        tail.extend(((o - t0) / (1 - t0), c) for o, c in stops if o > t0)
        return tail

    @classmethod
    def _draw_ring(cls, surface, cx, cy, count, spacing, offset, start, length, width, stops):
        # Stroke starts partway out, but the gradient is measured from the center
        visible = cls._tail_stops(stops, start, length)
        for i in range(count):
            angle = math.radians(i * spacing + offset)
            cos_a, sin_a = math.cos(angle), math.sin(angle)
            surface.gradient_line(
                cx + cos_a * start, cy + sin_a * start,
                cx + cos_a * length, cy + sin_a * length,
                visible, width=width,
            )


class SunGlow(AmbientEffect):
    """Three concentric blurred discs at the center, pulsing out of step."""

    name = "sun_glow"

    # (radius, color, alpha, blur, period seconds, delay seconds)
    LAYERS: List[Tuple[float, Tuple[int, int, int], float, float, float, float]] = [
        (192, (253, 230, 138), 0.10, 48, 8.0, 0.0),
        (128, (254, 215, 170), 0.15, 32, 6.0, 1.0),
        (80, (254, 240, 138), 0.20, 16, 4.0, 2.0),
    ]

    def advance(self):
        self.phase += FRAME_SECONDS

    @staticmethod
    def pulse(elapsed: float, period: float, delay: float) -> float:
        """Opacity multiplier: 1 -> 0.5 -> 1 over one period, held at 1 before the delay."""
        if elapsed < delay:
            return 1.0
        return 0.75 + 0.25 * math.cos(2 * math.pi * (elapsed - delay) / period)

    def draw(self, surface: DrawingSurface):
        cx = surface.width / 2
        cy = surface.height / 2
        for radius, color, alpha, blur, period, delay in self.LAYERS:
            surface.soft_circle(cx, cy, radius, color,
                                alpha=alpha * self.pulse(self.phase, period, delay), blur=blur)


class PulsingRays(AmbientEffect):
    """Eight fixed rays from the center, each pulsing with a staggered delay."""

    name = "pulsing_rays"
    RAYS = 8
    PERIOD = 3.0
    STAGGER = 0.2
    WIDTH = 4
    REACH = 0.4  # fraction of height
    STOPS = [
        (0.0, (254, 240, 138, 0.0)),
        (0.5, (254, 240, 138, 0.3)),
        (1.0, (254, 240, 138, 0.0)),
    ]

    def advance(self):
        self.phase += FRAME_SECONDS

    def draw(self, surface: DrawingSurface):
        cx = surface.width / 2
        cy = surface.height / 2
        length = surface.height * self.REACH
        for i in range(self.RAYS):
            # 0 degrees points straight up
            angle = math.radians(i * 360 / self.RAYS - 90)
            alpha = SunGlow.pulse(self.phase, self.PERIOD, i * self.STAGGER)
            surface.gradient_line(
                cx, cy,
                cx + math.cos(angle) * length, cy + math.sin(angle) * length,
                self.STOPS, width=self.WIDTH, alpha=alpha,
            )


class DriftingClouds(AmbientEffect):
    """
    Fixed set of cloud shapes drifting right on a shared, ever-growing offset.

    Clouds never recycle: each wraps modulo (width + 200) so it slides back in
    from the left edge.
    """

    name = "drifting_clouds"
    OFFSET_STEP = 0.2
    WRAP_MARGIN = 200
    BASE_SIZE = 50

    # (x fraction, y fraction, scale, speed)
    CLOUDS = [
        (0.1, 0.2, 1.2, 0.3),
        (0.3, 0.15, 0.8, 0.2),
        (0.6, 0.25, 1.0, 0.25),
        (0.8, 0.18, 0.9, 0.35),
        (0.15, 0.4, 0.7, 0.15),
        (0.45, 0.35, 1.1, 0.28),
        (0.75, 0.42, 0.85, 0.22),
        (0.05, 0.6, 0.95, 0.18),
        (0.35, 0.55, 0.75, 0.32),
        (0.65, 0.58, 1.05, 0.26),
        (0.75, 0.42, 0.85, 0.22),
        (0.05, 0.6, 0.95, 0.18),
        (0.35, 0.55, 0.75, 0.32),
        (0.65, 0.58, 1.05, 0.26),
    ]

    SHADOW = ((74, 85, 104), 0.3)
    BODY = ((160, 174, 192), 0.8)
    HIGHLIGHT = ((226, 232, 240), 0.6)
    SHADOW_OFFSET = 4

    @property
    def offset(self) -> float:
        return self.phase

    def advance(self):
        self.phase += self.OFFSET_STEP

    def positions(self, width: int, height: int) -> List[Tuple[float, float, float]]:
        """Current (x, y, scale) of every cloud."""
        span = width + self.WRAP_MARGIN
        half = self.WRAP_MARGIN / 2
        return [
            (((fx * width + self.phase * speed) % span) - half, fy * height, scale)
            for fx, fy, scale, speed in self.CLOUDS
        ]

    @classmethod
    def puffs(cls, x: float, y: float, scale: float) -> List[Tuple[float, float, float]]:
        """The five overlapping circles (x, y, radius) a cloud is built from."""
        s = cls.BASE_SIZE * scale
        return [
            (x, y, s),
            (x - s * 0.6, y + s * 0.3, s * 0.8),
            (x + s * 0.6, y + s * 0.3, s * 0.8),
            (x - s * 0.3, y - s * 0.4, s * 0.7),
            (x + s * 0.3, y - s * 0.4, s * 0.7),
        ]

    def draw(self, surface: DrawingSurface):
        for x, y, scale in self.positions(surface.width, surface.height):
            circles = self.puffs(x, y, scale)
            color, alpha = self.SHADOW
            for px, py, r in circles:
                surface.fill_circle(px + self.SHADOW_OFFSET, py + self.SHADOW_OFFSET, r, color, alpha)
            color, alpha = self.BODY
            for px, py, r in circles:
                surface.fill_circle(px, py, r, color, alpha)
            color, alpha = self.HIGHLIGHT
            for px, py, r in circles:
                surface.fill_circle(px - r * 0.3, py - r * 0.3, r * 0.4, color, alpha)
