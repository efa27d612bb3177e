"""
Tests for the OpenWeatherMap client.

urlopen is patched throughout; nothing here touches the network.
"""

import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from weatherfx.effects.conditions import Condition
from weatherfx.weather.client import (
    PLACEHOLDER_API_KEY,
    ConfigurationError,
    InvalidRequestError,
    LocationNotFoundError,
    OpenWeatherClient,
    ProviderError,
    has_usable_key,
)
from weatherfx.weather.models import Coordinates

URLOPEN = "weatherfx.weather.client.urllib.request.urlopen"
SLEEP = "weatherfx.utils.error_handling.time.sleep"

CURRENT = {
    'name': 'Paris',
    'sys': {'country': 'FR'},
    'coord': {'lat': 48.85, 'lon': 2.35},
    'weather': [{'main': 'Clouds', 'description': 'broken clouds'}],
    'main': {'temp': 17.2, 'feels_like': 16.8, 'humidity': 72},
    'wind': {'speed': 3},
    'visibility': 9000,
}


def response(payload):
    """A urlopen() result usable as a context manager."""
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode('utf-8')
    resp = MagicMock()
    resp.read.return_value = body
    cm = MagicMock()
    cm.__enter__.return_value = resp
    cm.__exit__.return_value = False
    return cm


def http_error(code):
    return urllib.error.HTTPError("https://example.invalid", code, "error", {}, None)


@pytest.fixture
def client():
    return OpenWeatherClient("test-key", base_url="https://api.example.com/data/2.5/", timeout=5)


class TestKeys:
    """Tests for API key checks."""

    @pytest.mark.unit
    def test_has_usable_key(self):
        assert has_usable_key("abc123")
        assert not has_usable_key("")
        assert not has_usable_key(None)
        assert not has_usable_key(PLACEHOLDER_API_KEY)

    @pytest.mark.unit
    def test_missing_key_raises_before_request(self):
        client = OpenWeatherClient(None)
        with patch(URLOPEN) as urlopen:
            with pytest.raises(ConfigurationError):
                client.get_current("Paris")
            urlopen.assert_not_called()

    @pytest.mark.unit
    def test_placeholder_key_rejected(self):
        with pytest.raises(ConfigurationError):
            OpenWeatherClient(PLACEHOLDER_API_KEY).get_current("Paris")


class TestRequests:
    """Tests for URL building and response handling."""

    @pytest.mark.unit
    def test_build_url(self, client):
        url = client.build_url("weather", {'q': "New York"})
        assert url.startswith("https://api.example.com/data/2.5/weather?")
        assert "q=New+York" in url
        assert "appid=test-key" in url
        assert "units=metric" in url

    @pytest.mark.unit
    def test_get_current_by_city(self, client):
        with patch(URLOPEN, return_value=response(CURRENT)) as urlopen:
            current = client.get_current("Paris")
        assert current.city == "Paris"
        assert current.condition == Condition.CLOUDY
        assert current.temperature == 17
        assert current.wind_speed == 11
        url = urlopen.call_args[0][0]
        assert "q=Paris" in url
        assert urlopen.call_args[1]['timeout'] == 5

    @pytest.mark.unit
    def test_get_current_by_coordinates(self, client):
        with patch(URLOPEN, return_value=response(CURRENT)) as urlopen:
            client.get_current(coordinates=Coordinates(48.85, 2.35))
        url = urlopen.call_args[0][0]
        assert "lat=48.85" in url
        assert "lon=2.35" in url

    @pytest.mark.unit
    def test_get_current_needs_city_or_coordinates(self, client):
        with pytest.raises(InvalidRequestError):
            client.get_current()

    @pytest.mark.unit
    def test_not_found(self, client):
        with patch(URLOPEN, side_effect=http_error(404)) as urlopen:
            with pytest.raises(LocationNotFoundError):
                client.get_current("Atlantis")
        assert urlopen.call_count == 1

    @pytest.mark.unit
    def test_http_error_is_not_retried(self, client):
        with patch(URLOPEN, side_effect=http_error(500)) as urlopen, patch(SLEEP):
            with pytest.raises(ProviderError, match="500"):
                client.get_current("Paris")
        assert urlopen.call_count == 1

    @pytest.mark.unit
    def test_transient_failure_is_retried(self, client):
        side_effect = [urllib.error.URLError("reset"), response(CURRENT)]
        with patch(URLOPEN, side_effect=side_effect) as urlopen, patch(SLEEP) as sleep:
            current = client.get_current("Paris")
        assert current.city == "Paris"
        assert urlopen.call_count == 2
        sleep.assert_called_once_with(0.5)

    @pytest.mark.unit
    def test_unreachable_after_retries(self, client):
        with patch(URLOPEN, side_effect=urllib.error.URLError("down")) as urlopen, patch(SLEEP):
            with pytest.raises(ProviderError, match="unreachable"):
                client.get_current("Paris")
        assert urlopen.call_count == 3

    @pytest.mark.unit
    def test_malformed_json(self, client):
        with patch(URLOPEN, return_value=response(b"<html>oops</html>")):
            with pytest.raises(ProviderError):
                client.get_current("Paris")

    @pytest.mark.unit
    def test_unexpected_payload(self, client):
        with patch(URLOPEN, return_value=response({'cod': 200})):
            with pytest.raises(ProviderError):
                client.get_current("Paris")


class TestForecast:
    """Tests for the forecast endpoint."""

    @pytest.mark.unit
    def test_get_forecast(self, client):
        payload = {'list': [
            {'dt': 1730000000, 'main': {'temp': 12.0},
             'weather': [{'main': 'Rain', 'description': 'light rain'}], 'pop': 0.8},
            {'dt': 1730010800, 'main': {'temp': 14.0},
             'weather': [{'main': 'Rain', 'description': 'moderate rain'}], 'pop': 0.9},
        ]}
        with patch(URLOPEN, return_value=response(payload)) as urlopen:
            days = client.get_forecast(Coordinates(1.0, 2.0))
        assert 1 <= len(days) <= 2
        assert days[0].date == "Today"
        assert days[0].condition == Condition.RAINY
        assert "/forecast?" in urlopen.call_args[0][0]

    @pytest.mark.unit
    def test_forecast_requires_coordinates(self, client):
        with pytest.raises(InvalidRequestError):
            client.get_forecast(None)

    @pytest.mark.unit
    def test_forecast_payload_without_list(self, client):
        with patch(URLOPEN, return_value=response({'cod': '200'})):
            with pytest.raises(ProviderError):
                client.get_forecast(Coordinates(1.0, 2.0))
