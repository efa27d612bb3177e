"""
Particle Rules - per-condition spawn/update/draw/recycle behavior.

The rule table RULES[variant][condition] is the single place that decides how
a condition looks: how many particles it gets, how each one is sampled, moved,
drawn and recycled, and which ambient effects accompany it.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Type, Union

from .ambient import AmbientEffect, DriftingClouds, PulsingRays, Sunburst, SunGlow
from .conditions import Condition, EffectVariant
from .surface import DrawingSurface

logger = logging.getLogger(__name__)

# Particles spawn on this line, just above the visible area
SPAWN_LINE = -10.0

# Intensity is a multiplier on the base count; anything above this is clamped
MAX_INTENSITY = 20.0

# Palette
RAIN_LIGHT = (135, 206, 235)   # #87CEEB
RAIN_MID = (70, 130, 180)      # #4682B4
RAIN_DEEP = (30, 144, 255)     # #1E90FF
SPLASH = (173, 216, 230)       # #ADD8E6
WHITE = (255, 255, 255)
SPARKLE = (227, 242, 253)      # #E3F2FD


@dataclass
class Particle:
    """One visual unit. Only x and y change after spawn."""
    x: float
    y: float
    speed: float
    size: float
    opacity: float


@dataclass
class RainDrop(Particle):
    angle: float = 0.0       # Horizontal slant per unit of speed


@dataclass
class SnowFlake(Particle):
    drift: float = 0.0       # Horizontal drift per frame


@dataclass
class CloudPuff(Particle):
    direction: float = 0.0   # Heading in radians


def _between(rng: random.Random, low: float, high: float) -> float:
    return low + rng.random() * (high - low)


class ConditionRule:
    """Behavior for one condition in one variant. The default renders nothing."""

    base_count = 0
    ambient: Tuple[Type[AmbientEffect], ...] = ()

    def __init__(self, condition: Condition, ambient: Tuple[Type[AmbientEffect], ...] = ()):
        self.condition = condition
        if ambient:
            self.ambient = ambient

    def spawn(self, rng: random.Random, width: int, height: int) -> Particle:
        raise NotImplementedError(f"{self.condition.value} has no particles")

    def update(self, p: Particle, width: int, height: int):
        pass

    def draw(self, surface: DrawingSurface, p: Particle, rng: random.Random):
        pass

    def should_recycle(self, p: Particle, width: int, height: int) -> bool:
        return False

    def make_ambient(self) -> List[AmbientEffect]:
        """Fresh ambient effect instances with zeroed phase."""
        return [factory() for factory in self.ambient]


class RainRule(ConditionRule):
    """Falling streaks with a y-dependent wave and optional slant."""

    def __init__(self, base_count: int, speed: Tuple[float, float], size: Tuple[float, float],
                 opacity: Tuple[float, float], slant: float, wave: float,
                 side_margin: Optional[float], scenic: bool, bottom_margin: float = 10.0):
        super().__init__(Condition.RAINY)
        self.base_count = base_count
        self.speed = speed
        self.size = size
        self.opacity = opacity
        self.slant = slant
        self.wave = wave
        self.side_margin = side_margin
        self.bottom_margin = bottom_margin
        self.scenic = scenic

    def spawn(self, rng, width, height):
        return RainDrop(
            x=rng.random() * width,
            y=SPAWN_LINE,
            speed=_between(rng, *self.speed),
            size=_between(rng, *self.size),
            opacity=_between(rng, *self.opacity),
            angle=_between(rng, -self.slant, self.slant) if self.slant else 0.0,
        )

    def update(self, p, width, height):
        p.y += p.speed
        p.x += math.sin(p.y * 0.01) * self.wave + p.angle * p.speed

    def draw(self, surface, p, rng):
        if self.scenic:
            tail_y = p.y + p.size * 6
            surface.gradient_line(
                p.x, p.y, p.x - 3, tail_y,
                [(0.0, RAIN_LIGHT + (1.0,)), (0.5, RAIN_MID + (1.0,)), (1.0, RAIN_DEEP + (1.0,))],
                width=p.size, alpha=p.opacity,
            )
            if rng.random() < 0.1:
                surface.fill_circle(p.x, tail_y, p.size * 0.5, SPLASH, alpha=p.opacity * 0.5)
        else:
            surface.stroke_line(p.x, p.y, p.x, p.y + p.size * 3, RAIN_LIGHT,
                                width=p.size, alpha=p.opacity)

    def should_recycle(self, p, width, height):
        if p.y > height + self.bottom_margin:
            return True
        if self.side_margin is not None:
            return p.x < -self.side_margin or p.x > width + self.side_margin
        return False


class SnowRule(ConditionRule):
    """Slow flakes with a per-flake drift and optional sway and sparkle."""

    def __init__(self, base_count: int, sway: float, side_margin: Optional[float],
                 sparkle: bool, bottom_margin: float = 10.0):
        super().__init__(Condition.SNOWY)
        self.base_count = base_count
        self.sway = sway
        self.side_margin = side_margin
        self.bottom_margin = bottom_margin
        self.sparkle = sparkle

    def spawn(self, rng, width, height):
        return SnowFlake(
            x=rng.random() * width,
            y=SPAWN_LINE,
            speed=_between(rng, 1, 4),
            size=_between(rng, 2, 6),
            opacity=_between(rng, 0.7, 1.0),
            drift=_between(rng, -1, 1),
        )

    def update(self, p, width, height):
        p.y += p.speed
        p.x += p.drift
        if self.sway:
            p.x += math.sin(p.y * 0.005) * self.sway

    def draw(self, surface, p, rng):
        surface.fill_circle(p.x, p.y, p.size, WHITE, alpha=p.opacity)
        if self.sparkle:
            surface.stroke_line(p.x - p.size, p.y, p.x + p.size, p.y, SPARKLE, width=1, alpha=p.opacity)
            surface.stroke_line(p.x, p.y - p.size, p.x, p.y + p.size, SPARKLE, width=1, alpha=p.opacity)

    def should_recycle(self, p, width, height):
        if p.y > height + self.bottom_margin:
            return True
        if self.side_margin is not None:
            return p.x < -self.side_margin or p.x > width + self.side_margin
        return False


class CloudPuffRule(ConditionRule):
    """Large faint discs wandering in a random direction."""

    def __init__(self, base_count: int):
        super().__init__(Condition.CLOUDY)
        self.base_count = base_count

    def spawn(self, rng, width, height):
        return CloudPuff(
            x=rng.random() * width,
            y=rng.random() * height,
            speed=_between(rng, 0.5, 1.5),
            size=_between(rng, 20, 60),
            opacity=_between(rng, 0.1, 0.3),
            direction=rng.random() * math.pi * 2,
        )

    def update(self, p, width, height):
        p.x += math.cos(p.direction) * p.speed
        p.y += math.sin(p.direction) * p.speed

    def draw(self, surface, p, rng):
        surface.fill_circle(p.x, p.y, p.size, WHITE, alpha=p.opacity)

    def should_recycle(self, p, width, height):
        return (p.x < -p.size or p.x > width + p.size or
                p.y < -p.size or p.y > height + p.size)


RULES: Dict[EffectVariant, Dict[Condition, ConditionRule]] = {
    EffectVariant.SCENIC: {
        Condition.RAINY: RainRule(200, speed=(12, 27), size=(1.5, 3.5), opacity=(0.7, 1.0),
                                  slant=0.1, wave=2.0, side_margin=50, scenic=True),
        Condition.SNOWY: SnowRule(100, sway=0.5, side_margin=50, sparkle=True),
        Condition.CLOUDY: ConditionRule(Condition.CLOUDY, ambient=(DriftingClouds,)),
        Condition.SUNNY: ConditionRule(Condition.SUNNY, ambient=(Sunburst, SunGlow)),
        Condition.NONE: ConditionRule(Condition.NONE),
    },
    EffectVariant.LITE: {
        Condition.RAINY: RainRule(150, speed=(5, 15), size=(1, 3), opacity=(0.6, 1.0),
                                  slant=0.0, wave=0.5, side_margin=None, scenic=False),
        Condition.SNOWY: SnowRule(100, sway=0.0, side_margin=None, sparkle=False),
        Condition.CLOUDY: CloudPuffRule(20),
        Condition.SUNNY: ConditionRule(Condition.SUNNY, ambient=(PulsingRays,)),
        Condition.NONE: ConditionRule(Condition.NONE),
    },
}


def get_rule(condition: Union[Condition, str, None],
             variant: Union[EffectVariant, str, None] = EffectVariant.SCENIC) -> ConditionRule:
    """Look up the rule for a condition label in a variant."""
    return RULES[EffectVariant.parse(variant)][Condition.parse(condition)]


def effective_intensity(intensity) -> float:
    """Clamp intensity to [0, MAX_INTENSITY]; negative, NaN, inf or junk become 0."""
    try:
        value = float(intensity)
    except (TypeError, ValueError):
        logger.debug(f"Unparsable intensity {intensity!r}, rendering no particles")
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return min(value, MAX_INTENSITY)


def particle_count(condition, intensity=1.0, variant=EffectVariant.SCENIC) -> int:
    """Population size: floor(base count * effective intensity)."""
    rule = get_rule(condition, variant)
    return int(math.floor(rule.base_count * effective_intensity(intensity)))
