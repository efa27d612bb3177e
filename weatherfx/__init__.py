"""
WeatherFX - Weather Dashboard with Animated Weather Effects

Current conditions and a seven-day forecast in the terminal, with rain,
snow, clouds and sun rays animated behind the readings.

Basic Usage:
    from weatherfx import FrameScheduler, ParticleEngine, RasterSurface

    scheduler = FrameScheduler()
    engine = ParticleEngine(scheduler, surface=RasterSurface(800, 600))
    handle = engine.start("snowy", intensity=2)
    for _ in range(60):
        scheduler.tick()
    handle.stop()

Weather Data:
    from weatherfx import WeatherFXConfig, create_weather_source

    source = create_weather_source(WeatherFXConfig.from_env())
    report = source.get_report("London")
"""

__version__ = "1.0.0"

# Effects
from .effects.conditions import Condition, EffectVariant
from .effects.engine import ParticleEngine, EngineHandle
from .effects.scheduler import FrameScheduler
from .effects.surface import DrawingSurface, RasterSurface

# Weather data
from .weather.models import CurrentWeather, ForecastDay, Location, DEFAULT_LOCATIONS
from .weather.protocol import (
    WeatherSource,
    DemoWeatherSource,
    LiveWeatherSource,
    FallbackWeatherSource,
    create_weather_source,
    resolve_display,
)
from .weather.client import OpenWeatherClient, WeatherError

# Configuration
from .config import WeatherFXConfig

__all__ = [
    # Version
    "__version__",
    # Effects
    "Condition",
    "EffectVariant",
    "ParticleEngine",
    "EngineHandle",
    "FrameScheduler",
    "DrawingSurface",
    "RasterSurface",
    # Weather
    "CurrentWeather",
    "ForecastDay",
    "Location",
    "DEFAULT_LOCATIONS",
    "WeatherSource",
    "DemoWeatherSource",
    "LiveWeatherSource",
    "FallbackWeatherSource",
    "create_weather_source",
    "resolve_display",
    "OpenWeatherClient",
    "WeatherError",
    # Config
    "WeatherFXConfig",
]
