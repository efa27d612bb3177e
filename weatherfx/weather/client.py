"""
OpenWeatherMap Client - HTTP access to current conditions and forecasts.

Uses urllib with a bounded timeout. Transient network failures are retried
with backoff; HTTP error statuses are not.
"""

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Optional

from ..utils.error_handling import ErrorCategory, with_error_handling
from .forecast import group_forecast_by_day, parse_current
from .models import Coordinates, CurrentWeather, ForecastDay

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
PLACEHOLDER_API_KEY = "your_openweathermap_api_key_here"


class WeatherError(Exception):
    """Base class for weather lookup failures."""


class ConfigurationError(WeatherError):
    """No usable API key is configured."""


class InvalidRequestError(WeatherError):
    """Neither a city nor coordinates were given."""


class LocationNotFoundError(WeatherError):
    """The provider does not know the requested place."""


class ProviderError(WeatherError):
    """The provider failed: bad status, malformed payload or unreachable."""


def has_usable_key(api_key: Optional[str]) -> bool:
    """True for a non-empty key that isn't the sample placeholder."""
    return bool(api_key) and api_key.strip() != PLACEHOLDER_API_KEY


class OpenWeatherClient:
    """Thin client for the /weather and /forecast endpoints (metric units)."""

    def __init__(self, api_key: Optional[str], base_url: str = DEFAULT_BASE_URL, timeout: float = 10.0):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def build_url(self, endpoint: str, params: Dict[str, Any]) -> str:
        query = dict(params)
        query['appid'] = self.api_key
        query['units'] = 'metric'
        return f"{self.base_url}/{endpoint}?{urllib.parse.urlencode(query)}"

    @with_error_handling(
        category=ErrorCategory.NETWORK,
        operation="openweather request",
        reraise=True,
        retry_count=2,
        retry_delay=0.5,
        retry_exceptions=(urllib.error.URLError, TimeoutError),
    )
    def _request(self, url: str) -> Any:
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as response:
                body = response.read().decode('utf-8')
        except urllib.error.HTTPError as e:
            # HTTPError is a URLError; convert it so it is not retried
            if e.code == 404:
                raise LocationNotFoundError("City not found")
            raise ProviderError(f"Weather API error: {e.code}")
        try:
            return json.loads(body)
        except ValueError as e:
            raise ProviderError(f"Malformed response from weather API: {e}")

    def _get(self, endpoint: str, params: Dict[str, Any]) -> Any:
        if not has_usable_key(self.api_key):
            raise ConfigurationError("OpenWeatherMap API key not configured")
        url = self.build_url(endpoint, params)
        logger.debug(f"GET {self.base_url}/{endpoint} {sorted(params)}")
        try:
            return self._request(url)
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            raise ProviderError(f"Weather API unreachable: {e}")

    def get_current(self, city: Optional[str] = None,
                    coordinates: Optional[Coordinates] = None) -> CurrentWeather:
        """
        Current conditions by city name, or by coordinates when no city is given.

        Raises:
            ConfigurationError, InvalidRequestError, LocationNotFoundError, ProviderError
        """
        if city:
            params = {'q': city}
        elif coordinates is not None:
            params = {'lat': coordinates.lat, 'lon': coordinates.lon}
        else:
            raise InvalidRequestError("City name or coordinates are required")

        payload = self._get('weather', params)
        try:
            return parse_current(payload)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError(f"Unexpected current weather payload: {e!r}")

    def get_forecast(self, coordinates: Optional[Coordinates]) -> List[ForecastDay]:
        """Daily forecast (up to seven days) for coordinates."""
        if coordinates is None:
            raise InvalidRequestError("Coordinates are required for forecast")

        payload = self._get('forecast', {'lat': coordinates.lat, 'lon': coordinates.lon})
        try:
            return group_forecast_by_day(payload['list'])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError(f"Unexpected forecast payload: {e!r}")
