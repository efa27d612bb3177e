"""
Weather data: models, OpenWeatherMap client, demo data and weather sources.
"""

from .models import (
    Coordinates,
    Location,
    CurrentWeather,
    ForecastDay,
    DisplayWeather,
    WeatherReport,
    DEFAULT_LOCATIONS,
)
from .forecast import map_condition, ms_to_kmh, meters_to_km, parse_current, group_forecast_by_day
from .client import (
    OpenWeatherClient,
    WeatherError,
    ConfigurationError,
    InvalidRequestError,
    LocationNotFoundError,
    ProviderError,
)
from .protocol import (
    WeatherSource,
    DemoWeatherSource,
    LiveWeatherSource,
    FallbackWeatherSource,
    create_weather_source,
    resolve_display,
)

__all__ = [
    "Coordinates",
    "Location",
    "CurrentWeather",
    "ForecastDay",
    "DisplayWeather",
    "WeatherReport",
    "DEFAULT_LOCATIONS",
    "map_condition",
    "ms_to_kmh",
    "meters_to_km",
    "parse_current",
    "group_forecast_by_day",
    "OpenWeatherClient",
    "WeatherError",
    "ConfigurationError",
    "InvalidRequestError",
    "LocationNotFoundError",
    "ProviderError",
    "WeatherSource",
    "DemoWeatherSource",
    "LiveWeatherSource",
    "FallbackWeatherSource",
    "create_weather_source",
    "resolve_display",
]
