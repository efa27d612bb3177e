"""
Particle Effects Engine - the per-frame render loop for weather effects.

One engine owns one drawing surface, one particle population and the ambient
effects for the current condition. Each frame it clears the surface, advances
and draws the ambient effects, then updates, draws and (when they leave the
visible area) respawns every particle in place, and finally asks the scheduler
for the next frame. At most one frame request is outstanding at any time.
"""

import logging
import random
from typing import List, Optional, Tuple, Union

from .ambient import AmbientEffect
from .conditions import Condition, EffectVariant
from .particles import ConditionRule, Particle, effective_intensity, get_rule
from .scheduler import FrameScheduler
from .surface import DrawingSurface

logger = logging.getLogger(__name__)


class EngineHandle:
    """Stop handle returned by ParticleEngine.start()."""

    def __init__(self, engine: 'ParticleEngine', generation: int):
        self._engine = engine
        self._generation = generation

    @property
    def running(self) -> bool:
        """True while the loop this handle started is still the active one."""
        return self._engine.running and self._engine._generation == self._generation

    def stop(self):
        """Stop the loop this handle started. A later start() owns the engine now."""
        if self._engine._generation == self._generation:
            self._engine.stop()


class ParticleEngine:
    """Condition-driven particle and ambient-effect animator."""

    def __init__(self, scheduler: FrameScheduler, surface: Optional[DrawingSurface] = None,
                 variant: Union[EffectVariant, str] = EffectVariant.SCENIC,
                 rng: Optional[random.Random] = None):
        self.scheduler = scheduler
        self.surface = surface
        self._variant = EffectVariant.parse(variant)
        self.rng = rng or random.Random()

        self._condition = Condition.NONE
        self._intensity = 1.0
        self._rule: ConditionRule = get_rule(Condition.NONE, self._variant)
        self._particles: List[Particle] = []
        self._ambient: List[AmbientEffect] = []

        self._request_id: Optional[int] = None
        self._running = False
        self._generation = 0
        self.frame_count = 0

    # -- introspection --------------------------------------------------

    @property
    def particles(self) -> Tuple[Particle, ...]:
        return tuple(self._particles)

    @property
    def condition(self) -> Condition:
        return self._condition

    @property
    def intensity(self) -> float:
        return self._intensity

    @property
    def variant(self) -> EffectVariant:
        return self._variant

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ambient_effects(self) -> Tuple[AmbientEffect, ...]:
        return tuple(self._ambient)

    # -- lifecycle --------------------------------------------------------

    def attach(self, surface: DrawingSurface):
        """Bind the drawing surface once the host has created it."""
        self.surface = surface

    def start(self, condition: Union[Condition, str, None], intensity=1.0,
              size: Optional[Tuple[int, int]] = None) -> Optional[EngineHandle]:
        """
        Begin animating a condition.

        Returns None without starting when no surface is ready. Starting an
        already running engine restarts it with the new condition.
        """
        if self.surface is None or not self.surface.is_attached:
            logger.debug("Drawing surface not ready, effects not started")
            return None

        self._cancel_pending()
        if size is not None:
            self.surface.resize(*size)

        self._configure(condition, intensity)
        self._running = True
        self._generation += 1
        self._request_next()
        logger.debug(f"Effects started: {self._condition.value} x{self._intensity} "
                     f"({len(self._particles)} particles, {self._variant.value})")
        return EngineHandle(self, self._generation)

    def stop(self):
        """Cancel the pending frame. Safe to call repeatedly."""
        self._cancel_pending()
        if self._running:
            logger.debug("Effects stopped")
        self._running = False

    def on_resize(self, width: int, height: int):
        """Resize the surface; particles re-enter the new bounds as they recycle."""
        if self.surface is None:
            return
        if (width, height) != (self.surface.width, self.surface.height):
            self.surface.resize(width, height)

    def on_condition_or_intensity_change(self, condition: Union[Condition, str, None], intensity=1.0):
        """Rebuild the population for a new condition or intensity."""
        self._configure(condition, intensity)
        if self._running:
            self._cancel_pending()
            self._request_next()

    def set_variant(self, variant: Union[EffectVariant, str]):
        """Switch rendition, rebuilding the current condition's population."""
        self._variant = EffectVariant.parse(variant)
        self.on_condition_or_intensity_change(self._condition, self._intensity)

    # -- frame loop -------------------------------------------------------

    def render_frame(self, timestamp: float = 0.0):
        """Draw one frame and schedule the next."""
        self._request_id = None
        if not self._running or self.surface is None:
            return

        surface = self.surface
        width, height = surface.width, surface.height
        rule = self._rule

        surface.clear()

        for effect in self._ambient:
            effect.advance()
            effect.draw(surface)

        particles = self._particles
        for i in range(len(particles)):
            p = particles[i]
            rule.update(p, width, height)
            rule.draw(surface, p, self.rng)
            if rule.should_recycle(p, width, height):
                particles[i] = rule.spawn(self.rng, width, height)

        surface.present()
        self.frame_count += 1
        self._request_next()

    def _configure(self, condition, intensity):
        self._condition = Condition.parse(condition)
        self._intensity = effective_intensity(intensity)
        self._rule = get_rule(self._condition, self._variant)
        self._ambient = self._rule.make_ambient()

        count = int(self._rule.base_count * self._intensity)
        if self.surface is not None and count:
            width, height = self.surface.width, self.surface.height
            self._particles = [self._rule.spawn(self.rng, width, height) for _ in range(count)]
        else:
            self._particles = []

    def _request_next(self):
        if self._running and self._request_id is None:
            self._request_id = self.scheduler.request_frame(self.render_frame)

    def _cancel_pending(self):
        if self._request_id is not None:
            self.scheduler.cancel_frame(self._request_id)
            self._request_id = None
