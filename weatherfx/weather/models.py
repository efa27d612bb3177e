"""
Weather Data Models - Data classes for dashboard display.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..effects.conditions import Condition


@dataclass
class Coordinates:
    """Latitude/longitude in decimal degrees."""
    lat: float
    lon: float


@dataclass
class Location:
    """A named place the dashboard can cycle through."""
    name: str
    country: str
    coordinates: Coordinates


@dataclass
class CurrentWeather:
    """Current conditions for a city, in metric units."""
    city: str
    country: str
    temperature: int          # Celsius
    condition: Condition
    description: str
    humidity: int             # Percent
    wind_speed: int           # km/h
    visibility: int           # km
    feels_like: int           # Celsius
    coordinates: Coordinates
    pressure: Optional[int] = None   # hPa
    uv_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['condition'] = self.condition.value
        return data


@dataclass
class ForecastDay:
    """One day of the multi-day forecast."""
    date: str                 # "Today", "Tomorrow", "Oct 29"
    day: str                  # "Today", "Tomorrow", "Wed"
    temp: int
    high: int
    low: int
    condition: Condition
    description: str
    precipitation: int = 0    # Percent chance

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['condition'] = self.condition.value
        return data


@dataclass
class DisplayWeather:
    """What the dashboard shows for the selected day."""
    temperature: int
    condition: Condition
    description: str
    humidity: int
    wind_speed: int
    visibility: int
    feels_like: int


@dataclass
class WeatherReport:
    """Current conditions plus forecast, as returned by a WeatherSource."""
    current: CurrentWeather
    forecast: List[ForecastDay] = field(default_factory=list)
    demo: bool = False


DEFAULT_LOCATIONS: List[Location] = [
    Location("New York", "US", Coordinates(40.7128, -74.006)),
    Location("London", "UK", Coordinates(51.5074, -0.1278)),
    Location("Tokyo", "JP", Coordinates(35.6762, 139.6503)),
    Location("Sydney", "AU", Coordinates(-33.8688, 151.2093)),
    Location("Paris", "FR", Coordinates(48.8566, 2.3522)),
]
