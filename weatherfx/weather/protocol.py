"""
Weather Source Protocol

Defines the abstract interface the dashboard and CLI read weather through,
plus the live, demo and fallback implementations.

Usage:
    from weatherfx.weather.protocol import create_weather_source

    source = create_weather_source(config)
    report = source.get_report("London")
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from .client import OpenWeatherClient, WeatherError, has_usable_key
from .demo import demo_current, demo_forecast
from .models import CurrentWeather, DisplayWeather, ForecastDay, WeatherReport

logger = logging.getLogger(__name__)


class WeatherSource(ABC):
    """
    Abstract interface for weather lookups.

    Implement this class to feed the dashboard from any provider.
    """

    @abstractmethod
    def get_current(self, city: str) -> CurrentWeather:
        """
        Get current conditions for a city.

        Raises:
            WeatherError subclasses when the lookup fails
        """
        pass

    @abstractmethod
    def get_forecast(self, current: CurrentWeather) -> List[ForecastDay]:
        """Get the daily forecast for the place `current` describes."""
        pass

    def is_demo_mode(self) -> bool:
        """
        Check if serving demo data.

        Returns:
            True if the last record came from demo data
        """
        return False

    def get_report(self, city: str) -> WeatherReport:
        """Current conditions and forecast in one call."""
        current = self.get_current(city)
        forecast = self.get_forecast(current)
        return WeatherReport(current=current, forecast=forecast, demo=self.is_demo_mode())


class DemoWeatherSource(WeatherSource):
    """
    Demo implementation that returns fixed data.

    Used when no API key is configured.
    """

    def get_current(self, city: str) -> CurrentWeather:
        return demo_current(city)

    def get_forecast(self, current: CurrentWeather) -> List[ForecastDay]:
        return demo_forecast()

    def is_demo_mode(self) -> bool:
        return True


class LiveWeatherSource(WeatherSource):
    """OpenWeatherMap-backed source. A failed forecast falls back to demo days."""

    def __init__(self, client: OpenWeatherClient):
        self.client = client

    def get_current(self, city: str) -> CurrentWeather:
        return self.client.get_current(city=city)

    def get_forecast(self, current: CurrentWeather) -> List[ForecastDay]:
        try:
            return self.client.get_forecast(current.coordinates)
        except WeatherError as e:
            logger.warning(f"Forecast unavailable for {current.city}, using demo forecast: {e}")
            return demo_forecast()


class FallbackWeatherSource(WeatherSource):
    """Try the primary source; on failure serve the demo record for the same city."""

    def __init__(self, primary: WeatherSource, fallback: Optional[WeatherSource] = None):
        self.primary = primary
        self.fallback = fallback or DemoWeatherSource()
        self.last_error: Optional[WeatherError] = None
        self._serving_fallback = False

    def get_current(self, city: str) -> CurrentWeather:
        try:
            current = self.primary.get_current(city)
        except WeatherError as e:
            logger.warning(f"Live weather failed for {city!r}, falling back to demo data: {e}")
            self.last_error = e
            self._serving_fallback = True
            return self.fallback.get_current(city)
        self.last_error = None
        self._serving_fallback = False
        return current

    def get_forecast(self, current: CurrentWeather) -> List[ForecastDay]:
        if self._serving_fallback:
            return self.fallback.get_forecast(current)
        return self.primary.get_forecast(current)

    def is_demo_mode(self) -> bool:
        return self._serving_fallback


def create_weather_source(config) -> WeatherSource:
    """
    Pick a source for the configuration.

    Demo when forced or when no usable API key is set; otherwise live with
    demo fallback.
    """
    if getattr(config, 'demo', False):
        logger.info("Demo mode requested")
        return DemoWeatherSource()
    if not has_usable_key(config.api_key):
        logger.info("Using demo data. Set OPENWEATHER_API_KEY to use real data.")
        return DemoWeatherSource()
    client = OpenWeatherClient(config.api_key, base_url=config.base_url, timeout=config.timeout)
    return FallbackWeatherSource(LiveWeatherSource(client), DemoWeatherSource())


def resolve_display(current: CurrentWeather, forecast: List[ForecastDay], selected_day: int) -> DisplayWeather:
    """
    Readings to show for the selected forecast day.

    Day 0 (or an out-of-range day) shows current conditions. Other days take
    temperature, condition and description from the forecast, keep today's
    humidity/wind/visibility, and estimate feels-like as temp + 2.
    """
    if selected_day <= 0 or selected_day >= len(forecast):
        return DisplayWeather(
            temperature=current.temperature,
            condition=current.condition,
            description=current.description,
            humidity=current.humidity,
            wind_speed=current.wind_speed,
            visibility=current.visibility,
            feels_like=current.feels_like,
        )
    day = forecast[selected_day]
    return DisplayWeather(
        temperature=day.temp,
        condition=day.condition,
        description=day.description,
        humidity=current.humidity,
        wind_speed=current.wind_speed,
        visibility=current.visibility,
        feels_like=day.temp + 2,
    )
