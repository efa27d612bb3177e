"""
Weather Conditions - the closed set of states that drive every visual effect.

Hosts pass either a Condition or a raw label ("rainy", "Snow", ...). Labels that
don't name a condition resolve to Condition.NONE, which renders nothing.
"""

import logging
from enum import Enum
from typing import Union

logger = logging.getLogger(__name__)


class Condition(Enum):
    """Canonical weather conditions understood by the effects engine."""
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    SNOWY = "snowy"
    NONE = "none"      # No particles, no ambient effect

    @property
    def display_name(self) -> str:
        """Get display name for the condition."""
        return {
            Condition.SUNNY: "Sunny",
            Condition.CLOUDY: "Cloudy",
            Condition.RAINY: "Rain",
            Condition.SNOWY: "Snow",
            Condition.NONE: "Clear",
        }.get(self, self.value.title())

    @classmethod
    def parse(cls, value: Union['Condition', str, None]) -> 'Condition':
        """Resolve a condition or label, falling back to NONE for anything unknown."""
        if isinstance(value, Condition):
            return value
        if isinstance(value, str):
            label = value.strip().lower()
            for condition in cls:
                if condition.value == label:
                    return condition
        logger.debug(f"Unrecognized condition {value!r}, rendering no effect")
        return cls.NONE

    @classmethod
    def cycle_order(cls) -> list:
        """Conditions a user can cycle through (NONE excluded)."""
        return [cls.SUNNY, cls.CLOUDY, cls.RAINY, cls.SNOWY]


class EffectVariant(Enum):
    """Two renditions of the effect set.

    SCENIC draws ambient clouds and a rotating sunburst; LITE uses cloud-puff
    particles and a ring of pulsing rays.
    """
    SCENIC = "scenic"
    LITE = "lite"

    @classmethod
    def parse(cls, value: Union['EffectVariant', str, None]) -> 'EffectVariant':
        if isinstance(value, EffectVariant):
            return value
        if isinstance(value, str):
            label = value.strip().lower()
            for variant in cls:
                if variant.value == label:
                    return variant
        logger.debug(f"Unrecognized effect variant {value!r}, using scenic")
        return cls.SCENIC
