"""
Demo Weather Data - fixed readings used when no API key is configured or the
live provider is unreachable.
"""

import copy
from typing import Dict, List

from ..effects.conditions import Condition
from .models import Coordinates, CurrentWeather, ForecastDay

DEMO_FALLBACK_CITY = "New York"

DEMO_WEATHER: Dict[str, CurrentWeather] = {
    "New York": CurrentWeather(
        city="New York", country="US", temperature=22, condition=Condition.CLOUDY,
        description="Partly Cloudy", humidity=65, wind_speed=12, visibility=8,
        feels_like=25, coordinates=Coordinates(40.7128, -74.006),
    ),
    "London": CurrentWeather(
        city="London", country="UK", temperature=15, condition=Condition.RAINY,
        description="Light Rain", humidity=80, wind_speed=15, visibility=6,
        feels_like=13, coordinates=Coordinates(51.5074, -0.1278),
    ),
    "Tokyo": CurrentWeather(
        city="Tokyo", country="JP", temperature=28, condition=Condition.SUNNY,
        description="Clear Sky", humidity=55, wind_speed=8, visibility=10,
        feels_like=31, coordinates=Coordinates(35.6762, 139.6503),
    ),
    "Sydney": CurrentWeather(
        city="Sydney", country="AU", temperature=25, condition=Condition.SUNNY,
        description="Sunny", humidity=60, wind_speed=10, visibility=12,
        feels_like=27, coordinates=Coordinates(-33.8688, 151.2093),
    ),
    "Paris": CurrentWeather(
        city="Paris", country="FR", temperature=18, condition=Condition.CLOUDY,
        description="Overcast", humidity=70, wind_speed=6, visibility=9,
        feels_like=20, coordinates=Coordinates(48.8566, 2.3522),
    ),
}

DEMO_FORECAST: List[ForecastDay] = [
    ForecastDay("Today", "Today", 22, 25, 18, Condition.CLOUDY, "Partly Cloudy", 20),
    ForecastDay("Tomorrow", "Tue", 26, 28, 20, Condition.SUNNY, "Sunny", 0),
    ForecastDay("Wed 29", "Wed", 19, 22, 16, Condition.RAINY, "Light Rain", 80),
    ForecastDay("Thu 30", "Thu", 23, 26, 19, Condition.CLOUDY, "Overcast", 40),
    ForecastDay("Fri 31", "Fri", 29, 32, 24, Condition.SUNNY, "Clear Sky", 10),
    ForecastDay("Sat 1", "Sat", 16, 19, 12, Condition.SNOWY, "Light Snow", 60),
    ForecastDay("Sun 2", "Sun", 21, 24, 17, Condition.RAINY, "Showers", 70),
]


def demo_current(city: str) -> CurrentWeather:
    """Demo reading for a city (case-insensitive); unknown cities get New York's."""
    wanted = (city or "").strip().lower()
    for name, weather in DEMO_WEATHER.items():
        if name.lower() == wanted:
            return copy.deepcopy(weather)
    return copy.deepcopy(DEMO_WEATHER[DEMO_FALLBACK_CITY])


def demo_forecast() -> List[ForecastDay]:
    return copy.deepcopy(DEMO_FORECAST)
