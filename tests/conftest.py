"""
Shared fixtures for weatherfx tests.
"""

import logging
import os
import random
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from weatherfx.effects.scheduler import FrameScheduler
from weatherfx.effects.surface import DrawingSurface


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, isolated tests")
    config.addinivalue_line("markers", "integration: tests that drive several modules together")


class RecordingSurface(DrawingSurface):
    """DrawingSurface that records every call instead of drawing."""

    def __init__(self, width=800, height=600, attached=True):
        self._width = width
        self._height = height
        self._attached = attached
        self.calls = []

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def is_attached(self):
        return self._attached

    def resize(self, width, height):
        self._width = width
        self._height = height
        self.calls.append(('resize', width, height))

    def clear(self):
        self.calls.append(('clear',))

    def fill_circle(self, cx, cy, radius, color, alpha=1.0):
        self.calls.append(('fill_circle', cx, cy, radius, color, alpha))

    def stroke_line(self, x1, y1, x2, y2, color, width=1.0, alpha=1.0, round_cap=False):
        self.calls.append(('stroke_line', x1, y1, x2, y2, color, width, alpha))

    def gradient_line(self, x1, y1, x2, y2, stops, width=1.0, alpha=1.0):
        self.calls.append(('gradient_line', x1, y1, x2, y2, tuple(stops), width, alpha))

    def radial_glow(self, cx, cy, radius, stops):
        self.calls.append(('radial_glow', cx, cy, radius, tuple(stops)))

    def soft_circle(self, cx, cy, radius, color, alpha=1.0, blur=8.0):
        self.calls.append(('soft_circle', cx, cy, radius, color, alpha, blur))

    def present(self):
        self.calls.append(('present',))

    def names(self):
        return [call[0] for call in self.calls]

    def reset(self):
        self.calls = []


@pytest.fixture
def surface():
    return RecordingSurface(800, 600)


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_surface():
    """Factory for RecordingSurface with a custom size or attach state."""
    return RecordingSurface


@pytest.fixture(autouse=True)
def restore_weatherfx_logger():
    """Undo handler changes made by configure_logging() during a test."""
    logger = logging.getLogger('weatherfx')
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
