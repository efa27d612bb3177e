"""
Tests for OpenWeatherMap payload conversion.
"""

from datetime import datetime, timedelta, timezone

import pytest

from weatherfx.effects.conditions import Condition
from weatherfx.weather.forecast import (
    MAX_FORECAST_DAYS,
    group_forecast_by_day,
    map_condition,
    meters_to_km,
    ms_to_kmh,
    parse_current,
    round_half_up,
)


def sample(when, temp, main="Clear", description="clear sky", pop=0.0):
    return {
        'dt': int(when.timestamp()),
        'main': {'temp': temp},
        'weather': [{'main': main, 'description': description}],
        'pop': pop,
    }


CURRENT_PAYLOAD = {
    'name': 'London',
    'sys': {'country': 'GB'},
    'coord': {'lat': 51.51, 'lon': -0.13},
    'weather': [{'main': 'Drizzle', 'description': 'light intensity drizzle'}],
    'main': {'temp': 21.5, 'feels_like': 20.4, 'humidity': 81, 'pressure': 1012},
    'wind': {'speed': 5},
    'visibility': 10000,
}


class TestConversions:
    """Tests for unit conversion and condition mapping."""

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (2.4, 2),
        (-2.5, -2),
        (-2.6, -3),
        (0, 0),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.unit
    def test_units(self):
        assert ms_to_kmh(5) == 18
        assert ms_to_kmh(3.47) == 12
        assert meters_to_km(10000) == 10
        assert meters_to_km(7500) == 8

    @pytest.mark.unit
    @pytest.mark.parametrize("main,expected", [
        ("Clear", Condition.SUNNY),
        ("Clouds", Condition.CLOUDY),
        ("Mist", Condition.CLOUDY),
        ("Fog", Condition.CLOUDY),
        ("Haze", Condition.CLOUDY),
        ("Rain", Condition.RAINY),
        ("Drizzle", Condition.RAINY),
        ("Thunderstorm", Condition.RAINY),
        ("Snow", Condition.SNOWY),
        ("Tornado", Condition.SUNNY),
        (None, Condition.SUNNY),
        ("", Condition.SUNNY),
    ])
    def test_map_condition(self, main, expected):
        assert map_condition(main) == expected


class TestParseCurrent:
    """Tests for /weather payload parsing."""

    @pytest.mark.unit
    def test_parse_current(self):
        current = parse_current(CURRENT_PAYLOAD)
        assert current.city == "London"
        assert current.country == "GB"
        assert current.temperature == 22
        assert current.feels_like == 20
        assert current.condition == Condition.RAINY
        assert current.description == "light intensity drizzle"
        assert current.humidity == 81
        assert current.wind_speed == 18
        assert current.visibility == 10
        assert current.pressure == 1012
        assert current.coordinates.lat == 51.51

    @pytest.mark.unit
    def test_missing_fields_raise(self):
        with pytest.raises(KeyError):
            parse_current({'name': 'Nowhere', 'weather': [{}]})

    @pytest.mark.unit
    def test_to_dict_uses_condition_value(self):
        data = parse_current(CURRENT_PAYLOAD).to_dict()
        assert data['condition'] == "rainy"
        assert data['coordinates'] == {'lat': 51.51, 'lon': -0.13}


class TestGroupForecast:
    """Tests for bucketing 3-hourly samples into days."""

    @pytest.fixture
    def items(self):
        monday = datetime(2024, 10, 28, 0, tzinfo=timezone.utc)
        items = []
        for day_offset, temps, main, pops in [
            (0, [10, 14.5, 12], "Clouds", [0.2, 0.55, 0.0]),
            (1, [20, 22, 18], "Clear", [0, 0, 0]),
            (2, [5, 7, 6], "Snow", [0.9, 0.4, 0.1]),
        ]:
            for i, temp in enumerate(temps):
                when = monday + timedelta(days=day_offset, hours=3 * i)
                items.append(sample(when, temp, main=main, description=main.lower(), pop=pops[i]))
        return items

    @pytest.mark.unit
    def test_days_and_labels(self, items):
        days = group_forecast_by_day(items, tz=timezone.utc)
        assert [d.date for d in days] == ["Today", "Tomorrow", "Oct 30"]
        assert [d.day for d in days] == ["Today", "Tomorrow", "Wed"]

    @pytest.mark.unit
    def test_temperatures(self, items):
        today = group_forecast_by_day(items, tz=timezone.utc)[0]
        assert today.temp == 15
        assert today.high == 15
        assert today.low == 10

    @pytest.mark.unit
    def test_condition_and_precipitation(self, items):
        days = group_forecast_by_day(items, tz=timezone.utc)
        assert days[0].condition == Condition.CLOUDY
        assert days[0].precipitation == 55
        assert days[1].precipitation == 0
        assert days[2].condition == Condition.SNOWY
        assert days[2].precipitation == 90

    @pytest.mark.unit
    def test_at_most_seven_days(self):
        start = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
        items = [sample(start + timedelta(days=i), 10 + i) for i in range(9)]
        days = group_forecast_by_day(items, tz=timezone.utc)
        assert len(days) == MAX_FORECAST_DAYS
        assert days[-1].high == 16

    @pytest.mark.unit
    def test_missing_pop_counts_as_zero(self):
        item = sample(datetime(2024, 1, 1, tzinfo=timezone.utc), 3)
        del item['pop']
        assert group_forecast_by_day([item], tz=timezone.utc)[0].precipitation == 0

    @pytest.mark.unit
    def test_empty(self):
        assert group_forecast_by_day([]) == []
