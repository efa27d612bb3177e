"""
Tests for environment configuration and logging setup.
"""

import logging

import pytest

from weatherfx.config import WeatherFXConfig
from weatherfx.effects.conditions import EffectVariant
from weatherfx.logging_config import configure_logging
from weatherfx.weather.client import DEFAULT_BASE_URL


class TestWeatherFXConfig:
    """Tests for WeatherFXConfig.from_env."""

    @pytest.mark.unit
    def test_defaults(self):
        config = WeatherFXConfig.from_env({})
        assert config.api_key is None
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == 10.0
        assert config.default_city == "New York"
        assert config.fps == 30
        assert config.variant == EffectVariant.SCENIC
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.demo is False

    @pytest.mark.unit
    def test_values_from_environment(self):
        config = WeatherFXConfig.from_env({
            'OPENWEATHER_API_KEY': 'abc',
            'WEATHERFX_BASE_URL': 'http://localhost:9000',
            'WEATHERFX_TIMEOUT': '2.5',
            'WEATHERFX_DEFAULT_CITY': 'Tokyo',
            'WEATHERFX_FPS': '60',
            'WEATHERFX_VARIANT': 'lite',
            'WEATHERFX_LOG_LEVEL': 'debug',
            'WEATHERFX_LOG_FILE': '/tmp/wfx.log',
        })
        assert config.api_key == 'abc'
        assert config.base_url == 'http://localhost:9000'
        assert config.timeout == 2.5
        assert config.default_city == 'Tokyo'
        assert config.fps == 60
        assert config.variant == EffectVariant.LITE
        assert config.log_level == 'DEBUG'
        assert config.log_file == '/tmp/wfx.log'

    @pytest.mark.unit
    @pytest.mark.parametrize("name,value,attr,default", [
        ('WEATHERFX_TIMEOUT', 'soon', 'timeout', 10.0),
        ('WEATHERFX_TIMEOUT', '-1', 'timeout', 10.0),
        ('WEATHERFX_FPS', '0', 'fps', 30),
        ('WEATHERFX_FPS', '500', 'fps', 30),
        ('WEATHERFX_FPS', '29.97', 'fps', 30),
        ('WEATHERFX_LOG_LEVEL', 'chatty', 'log_level', 'INFO'),
    ])
    def test_invalid_values_keep_defaults(self, caplog, name, value, attr, default):
        with caplog.at_level(logging.WARNING, logger='weatherfx.config'):
            config = WeatherFXConfig.from_env({name: value})
        assert getattr(config, attr) == default
        assert name in caplog.text

    @pytest.mark.unit
    def test_empty_api_key_is_none(self):
        assert WeatherFXConfig.from_env({'OPENWEATHER_API_KEY': ''}).api_key is None

    @pytest.mark.unit
    def test_to_dict_hides_key(self):
        data = WeatherFXConfig(api_key='secret').to_dict()
        assert data['api_key_configured'] is True
        assert 'secret' not in data.values()
        assert data['variant'] == 'scenic'


class TestConfigureLogging:
    """Tests for log handler installation."""

    @pytest.mark.unit
    def test_stream_handler_by_default(self):
        handler = configure_logging("warning")
        logger = logging.getLogger('weatherfx')
        assert isinstance(handler, logging.StreamHandler)
        assert logger.handlers == [handler]
        assert logger.level == logging.WARNING

    @pytest.mark.unit
    def test_file_handler(self, tmp_path):
        path = tmp_path / "logs" / "weatherfx.log"
        handler = configure_logging("DEBUG", path)
        logging.getLogger('weatherfx.test').debug("hello from the test")
        handler.flush()
        assert isinstance(handler, logging.FileHandler)
        assert "hello from the test" in path.read_text(encoding='utf-8')

    @pytest.mark.unit
    def test_reconfigure_replaces_handler(self, tmp_path):
        configure_logging("INFO")
        configure_logging("INFO", tmp_path / "a.log")
        assert len(logging.getLogger('weatherfx').handlers) == 1

    @pytest.mark.unit
    def test_unwritable_log_file_falls_back(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        handler = configure_logging("INFO", blocker / "weatherfx.log")
        assert isinstance(handler, logging.NullHandler)
