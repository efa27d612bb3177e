"""
Configuration - settings loaded from environment variables.

Environment:
    OPENWEATHER_API_KEY     OpenWeatherMap API key (demo data when unset)
    WEATHERFX_BASE_URL      API base URL
    WEATHERFX_TIMEOUT       HTTP timeout in seconds
    WEATHERFX_DEFAULT_CITY  City shown at startup
    WEATHERFX_FPS           Dashboard frame rate
    WEATHERFX_VARIANT       Effect rendition: scenic or lite
    WEATHERFX_LOG_LEVEL     DEBUG, INFO, WARNING, ERROR
    WEATHERFX_LOG_FILE      Log file path
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .effects.conditions import EffectVariant
from .weather.client import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)


@dataclass
class WeatherFXConfig:
    """Runtime configuration."""
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0             # Seconds per HTTP request
    default_city: str = "New York"
    fps: int = 30                     # Dashboard frames per second
    variant: EffectVariant = EffectVariant.SCENIC
    log_level: str = "INFO"
    log_file: Optional[str] = None
    demo: bool = False                # Force demo data

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'WeatherFXConfig':
        """Build a config from the environment. Malformed values keep their defaults."""
        env = os.environ if environ is None else environ
        config = cls()

        config.api_key = env.get('OPENWEATHER_API_KEY') or None
        config.base_url = env.get('WEATHERFX_BASE_URL') or config.base_url
        config.default_city = env.get('WEATHERFX_DEFAULT_CITY') or config.default_city
        config.log_file = env.get('WEATHERFX_LOG_FILE') or None

        config.timeout = _parse_number(env, 'WEATHERFX_TIMEOUT', float, config.timeout,
                                       valid=lambda v: v > 0)
        config.fps = _parse_number(env, 'WEATHERFX_FPS', int, config.fps,
                                   valid=lambda v: 1 <= v <= 120)

        if env.get('WEATHERFX_VARIANT'):
            config.variant = EffectVariant.parse(env['WEATHERFX_VARIANT'])

        level = (env.get('WEATHERFX_LOG_LEVEL') or config.log_level).upper()
        if level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            config.log_level = level
        else:
            logger.warning(f"Ignoring invalid WEATHERFX_LOG_LEVEL={level!r}")

        return config

    def to_dict(self) -> Dict:
        return {
            'api_key_configured': bool(self.api_key),
            'base_url': self.base_url,
            'timeout': self.timeout,
            'default_city': self.default_city,
            'fps': self.fps,
            'variant': self.variant.value,
            'log_level': self.log_level,
            'log_file': self.log_file,
            'demo': self.demo,
        }


def _parse_number(env: Mapping[str, str], name: str, kind, default, valid=None):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = kind(raw)
    except ValueError:
        value = None
    if value is None or (valid is not None and not valid(value)):
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    return value
