"""
Weather effects: particle engine, ambient effects and drawing surfaces.

Basic Usage:
    from weatherfx.effects import FrameScheduler, ParticleEngine, RasterSurface

    scheduler = FrameScheduler()
    engine = ParticleEngine(scheduler, surface=RasterSurface(800, 600))
    handle = engine.start("rainy", intensity=1.5)
    scheduler.tick()          # once per displayed frame
    handle.stop()
"""

from .conditions import Condition, EffectVariant
from .particles import (
    Particle,
    RainDrop,
    SnowFlake,
    CloudPuff,
    ConditionRule,
    RULES,
    get_rule,
    effective_intensity,
    particle_count,
)
from .ambient import AmbientEffect, Sunburst, SunGlow, PulsingRays, DriftingClouds
from .scheduler import FrameScheduler
from .engine import ParticleEngine, EngineHandle
from .surface import DrawingSurface, RasterSurface

__all__ = [
    "Condition",
    "EffectVariant",
    "Particle",
    "RainDrop",
    "SnowFlake",
    "CloudPuff",
    "ConditionRule",
    "RULES",
    "get_rule",
    "effective_intensity",
    "particle_count",
    "AmbientEffect",
    "Sunburst",
    "SunGlow",
    "PulsingRays",
    "DriftingClouds",
    "FrameScheduler",
    "ParticleEngine",
    "EngineHandle",
    "DrawingSurface",
    "RasterSurface",
]
