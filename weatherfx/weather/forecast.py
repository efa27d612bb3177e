"""
Forecast Conversions - OpenWeatherMap payloads to dashboard models.

Pure functions: condition mapping, unit conversion, parsing of the /weather
payload and day-bucketing of the 3-hourly /forecast list.
"""

import logging
import math
from collections import OrderedDict
from datetime import date, datetime, tzinfo
from typing import Any, Dict, List, Optional

from ..effects.conditions import Condition
from .models import Coordinates, CurrentWeather, ForecastDay

logger = logging.getLogger(__name__)

MAX_FORECAST_DAYS = 7

# Fixed English labels so output does not depend on the process locale
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

CONDITION_MAP = {
    'clear': Condition.SUNNY,
    'clouds': Condition.CLOUDY,
    'mist': Condition.CLOUDY,
    'fog': Condition.CLOUDY,
    'haze': Condition.CLOUDY,
    'rain': Condition.RAINY,
    'drizzle': Condition.RAINY,
    'thunderstorm': Condition.RAINY,
    'snow': Condition.SNOWY,
}


def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side, as weather displays expect."""
    return int(math.floor(value + 0.5))


def map_condition(main: Optional[str]) -> Condition:
    """Map a provider 'main' group (Clear, Clouds, Rain...) to a Condition. Unknown -> SUNNY."""
    if not main:
        return Condition.SUNNY
    return CONDITION_MAP.get(main.strip().lower(), Condition.SUNNY)


def ms_to_kmh(speed: float) -> int:
    return round_half_up(speed * 3.6)


def meters_to_km(distance: float) -> int:
    return round_half_up(distance / 1000)


def parse_current(payload: Dict[str, Any]) -> CurrentWeather:
    """
    Build CurrentWeather from a /weather response (metric units).

    Raises KeyError/TypeError/IndexError when required fields are missing.
    """
    weather = payload['weather'][0]
    main = payload['main']
    return CurrentWeather(
        city=payload['name'],
        country=payload.get('sys', {}).get('country', ''),
        temperature=round_half_up(main['temp']),
        condition=map_condition(weather.get('main')),
        description=weather.get('description', ''),
        humidity=int(main.get('humidity', 0)),
        wind_speed=ms_to_kmh(payload.get('wind', {}).get('speed', 0)),
        visibility=meters_to_km(payload.get('visibility', 0)),
        feels_like=round_half_up(main.get('feels_like', main['temp'])),
        pressure=main.get('pressure'),
        coordinates=Coordinates(
            lat=payload['coord']['lat'],
            lon=payload['coord']['lon'],
        ),
    )


def _day_labels(index: int, day: date):
    if index == 0:
        return "Today", "Today"
    if index == 1:
        return "Tomorrow", "Tomorrow"
    return f"{MONTHS[day.month - 1]} {day.day}", WEEKDAYS[day.weekday()]


def group_forecast_by_day(items: List[Dict[str, Any]], tz: Optional[tzinfo] = None) -> List[ForecastDay]:
    """
    Bucket 3-hourly forecast entries by calendar day.

    Days are taken in order of first appearance, at most seven. The high/low
    are the day's extremes; temp and condition come from the middle sample;
    precipitation is the highest probability-of-precipitation in the day.

    Args:
        items: The 'list' array of a /forecast response
        tz: Timezone for calendar days (local time when None)
    """
    buckets: "OrderedDict[date, List[Dict[str, Any]]]" = OrderedDict()
    for item in items:
        day = datetime.fromtimestamp(item['dt'], tz).date()
        buckets.setdefault(day, []).append(item)

    result = []
    for index, (day, samples) in enumerate(list(buckets.items())[:MAX_FORECAST_DAYS]):
        temps = [sample['main']['temp'] for sample in samples]
        middle = samples[len(samples) // 2]
        weather = middle['weather'][0]
        pop = max(float(sample.get('pop', 0) or 0) for sample in samples)
        date_label, day_label = _day_labels(index, day)

        result.append(ForecastDay(
            date=date_label,
            day=day_label,
            temp=round_half_up(temps[len(temps) // 2]),
            high=round_half_up(max(temps)),
            low=round_half_up(min(temps)),
            condition=map_condition(weather.get('main')),
            description=weather.get('description', ''),
            precipitation=round_half_up(pop * 100),
        ))

    logger.debug(f"Grouped {len(items)} forecast entries into {len(result)} days")
    return result
