"""
Tests for the particle rule table.
"""

import math
import random

import pytest

from weatherfx.effects.ambient import DriftingClouds, PulsingRays, Sunburst, SunGlow
from weatherfx.effects.conditions import Condition, EffectVariant
from weatherfx.effects.particles import (
    MAX_INTENSITY,
    RULES,
    SPAWN_LINE,
    CloudPuff,
    CloudPuffRule,
    ConditionRule,
    RainDrop,
    RainRule,
    SnowFlake,
    SnowRule,
    effective_intensity,
    get_rule,
    particle_count,
)


class TestEffectiveIntensity:
    """Tests for intensity clamping."""

    @pytest.mark.unit
    @pytest.mark.parametrize("raw,expected", [
        (1, 1.0),
        (0.5, 0.5),
        ("2", 2.0),
        (0, 0.0),
        (-3, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        ("lots", 0.0),
        (None, 0.0),
    ])
    def test_effective_intensity(self, raw, expected):
        assert effective_intensity(raw) == expected

    @pytest.mark.unit
    def test_large_intensity_is_clamped(self):
        assert effective_intensity(1000) == MAX_INTENSITY


class TestParticleCount:
    """Tests for population sizing."""

    @pytest.mark.unit
    def test_base_counts(self):
        assert particle_count("rainy", 1) == 200
        assert particle_count("snowy", 1) == 100
        assert particle_count("rainy", 1, EffectVariant.LITE) == 150
        assert particle_count("cloudy", 1, EffectVariant.LITE) == 20

    @pytest.mark.unit
    def test_count_is_floored(self):
        assert particle_count("rainy", 0.5) == 100
        assert particle_count("snowy", 0.255) == 25
        assert particle_count("rainy", 1.5, "lite") == 225

    @pytest.mark.unit
    @pytest.mark.parametrize("condition", ["sunny", "cloudy", "none", "hail"])
    def test_scenic_conditions_without_particles(self, condition):
        assert particle_count(condition, 5) == 0

    @pytest.mark.unit
    def test_invalid_intensity_gives_no_particles(self):
        assert particle_count("rainy", -1) == 0
        assert particle_count("snowy", float("nan")) == 0


class TestRuleTable:
    """Tests for RULES lookups."""

    @pytest.mark.unit
    def test_every_variant_covers_every_condition(self):
        for variant in EffectVariant:
            assert set(RULES[variant]) == set(Condition)

    @pytest.mark.unit
    def test_get_rule_parses_labels(self):
        assert isinstance(get_rule("rainy"), RainRule)
        assert isinstance(get_rule("SNOWY", "lite"), SnowRule)
        assert isinstance(get_rule("cloudy", "lite"), CloudPuffRule)
        assert get_rule("fog") is RULES[EffectVariant.SCENIC][Condition.NONE]

    @pytest.mark.unit
    def test_ambient_factories(self):
        assert get_rule("sunny").ambient == (Sunburst, SunGlow)
        assert get_rule("cloudy").ambient == (DriftingClouds,)
        assert get_rule("sunny", "lite").ambient == (PulsingRays,)
        assert get_rule("rainy").ambient == ()

    @pytest.mark.unit
    def test_make_ambient_returns_fresh_instances(self):
        rule = get_rule("sunny")
        first = rule.make_ambient()
        second = rule.make_ambient()
        assert [type(e) for e in first] == [Sunburst, SunGlow]
        assert first[0] is not second[0]
        assert all(e.phase == 0 for e in first)

    @pytest.mark.unit
    def test_default_rule_cannot_spawn(self, rng):
        with pytest.raises(NotImplementedError):
            ConditionRule(Condition.NONE).spawn(rng, 800, 600)


class TestRainRule:
    """Tests for rain spawn, motion and recycling."""

    @pytest.mark.unit
    def test_spawn_ranges_scenic(self, rng):
        rule = get_rule("rainy")
        for _ in range(200):
            p = rule.spawn(rng, 800, 600)
            assert isinstance(p, RainDrop)
            assert 0 <= p.x < 800
            assert p.y == SPAWN_LINE
            assert 12 <= p.speed <= 27
            assert 1.5 <= p.size <= 3.5
            assert 0.7 <= p.opacity <= 1.0
            assert -0.1 <= p.angle <= 0.1

    @pytest.mark.unit
    def test_spawn_ranges_lite(self, rng):
        rule = get_rule("rainy", "lite")
        for _ in range(200):
            p = rule.spawn(rng, 400, 300)
            assert 0 <= p.x < 400
            assert 5 <= p.speed <= 15
            assert 1 <= p.size <= 3
            assert p.angle == 0.0

    @pytest.mark.unit
    def test_update_moves_down_and_only_touches_position(self, rng):
        rule = get_rule("rainy")
        p = rule.spawn(rng, 800, 600)
        speed, size, opacity, angle = p.speed, p.size, p.opacity, p.angle
        last_y = p.y
        for _ in range(10):
            rule.update(p, 800, 600)
            assert p.y > last_y
            last_y = p.y
        assert (p.speed, p.size, p.opacity, p.angle) == (speed, size, opacity, angle)

    @pytest.mark.unit
    def test_update_applies_wave(self):
        rule = get_rule("rainy", "lite")
        p = RainDrop(x=100, y=0, speed=10, size=2, opacity=1)
        rule.update(p, 800, 600)
        assert p.y == 10
        assert p.x == pytest.approx(100 + math.sin(0.1) * 0.5)

    @pytest.mark.unit
    def test_recycle_below_bottom(self):
        rule = get_rule("rainy")
        assert not rule.should_recycle(RainDrop(x=10, y=610, speed=1, size=1, opacity=1), 800, 600)
        assert rule.should_recycle(RainDrop(x=10, y=610.5, speed=1, size=1, opacity=1), 800, 600)

    @pytest.mark.unit
    def test_scenic_recycles_beyond_sides(self):
        rule = get_rule("rainy")
        assert rule.should_recycle(RainDrop(x=-51, y=0, speed=1, size=1, opacity=1), 800, 600)
        assert rule.should_recycle(RainDrop(x=851, y=0, speed=1, size=1, opacity=1), 800, 600)
        assert not rule.should_recycle(RainDrop(x=-49, y=0, speed=1, size=1, opacity=1), 800, 600)

    @pytest.mark.unit
    def test_lite_ignores_sides(self):
        rule = get_rule("rainy", "lite")
        assert not rule.should_recycle(RainDrop(x=-500, y=0, speed=1, size=1, opacity=1), 800, 600)

    @pytest.mark.unit
    def test_scenic_draw_streak(self, surface):
        rule = get_rule("rainy")
        p = RainDrop(x=100, y=50, speed=10, size=2, opacity=0.8)

        class NoSplash(random.Random):
            def random(self):
                return 0.5

        rule.draw(surface, p, NoSplash())
        assert surface.names() == ['gradient_line']
        _, x1, y1, x2, y2, stops, width, alpha = surface.calls[0]
        assert (x1, y1, x2, y2) == (100, 50, 97, 62)
        assert width == 2
        assert alpha == 0.8
        assert len(stops) == 3

    @pytest.mark.unit
    def test_scenic_draw_splash(self, surface):
        rule = get_rule("rainy")
        p = RainDrop(x=100, y=50, speed=10, size=2, opacity=0.8)

        class AlwaysSplash(random.Random):
            def random(self):
                return 0.0

        rule.draw(surface, p, AlwaysSplash())
        assert surface.names() == ['gradient_line', 'fill_circle']
        assert surface.calls[1][1:4] == (100, 62, 1.0)

    @pytest.mark.unit
    def test_lite_draw_line(self, surface, rng):
        rule = get_rule("rainy", "lite")
        rule.draw(surface, RainDrop(x=10, y=20, speed=5, size=2, opacity=0.6), rng)
        assert surface.calls == [('stroke_line', 10, 20, 10, 26, (135, 206, 235), 2, 0.6)]


class TestSnowRule:
    """Tests for snow spawn, motion and drawing."""

    @pytest.mark.unit
    def test_spawn_ranges(self, rng):
        rule = get_rule("snowy")
        for _ in range(200):
            p = rule.spawn(rng, 800, 600)
            assert isinstance(p, SnowFlake)
            assert p.y == SPAWN_LINE
            assert 1 <= p.speed <= 4
            assert 2 <= p.size <= 6
            assert 0.7 <= p.opacity <= 1.0
            assert -1 <= p.drift <= 1

    @pytest.mark.unit
    def test_update_drift_and_sway(self):
        scenic = get_rule("snowy")
        lite = get_rule("snowy", "lite")
        a = SnowFlake(x=100, y=100, speed=2, size=3, opacity=1, drift=0.5)
        b = SnowFlake(x=100, y=100, speed=2, size=3, opacity=1, drift=0.5)
        scenic.update(a, 800, 600)
        lite.update(b, 800, 600)
        assert a.y == b.y == 102
        assert b.x == 100.5
        assert a.x == pytest.approx(100.5 + math.sin(102 * 0.005) * 0.5)

    @pytest.mark.unit
    def test_scenic_draw_has_sparkle(self, surface, rng):
        get_rule("snowy").draw(surface, SnowFlake(x=5, y=5, speed=1, size=3, opacity=1), rng)
        assert surface.names() == ['fill_circle', 'stroke_line', 'stroke_line']

    @pytest.mark.unit
    def test_lite_draw_is_plain_disc(self, surface, rng):
        get_rule("snowy", "lite").draw(surface, SnowFlake(x=5, y=5, speed=1, size=3, opacity=1), rng)
        assert surface.names() == ['fill_circle']


class TestCloudPuffRule:
    """Tests for lite cloud puffs."""

    @pytest.mark.unit
    def test_spawn_anywhere_on_surface(self, rng):
        rule = get_rule("cloudy", "lite")
        for _ in range(100):
            p = rule.spawn(rng, 800, 600)
            assert isinstance(p, CloudPuff)
            assert 0 <= p.x < 800
            assert 0 <= p.y < 600
            assert 20 <= p.size <= 60
            assert 0.1 <= p.opacity <= 0.3

    @pytest.mark.unit
    def test_update_follows_direction(self):
        rule = get_rule("cloudy", "lite")
        p = CloudPuff(x=100, y=100, speed=1, size=30, opacity=0.2, direction=0.0)
        rule.update(p, 800, 600)
        assert p.x == pytest.approx(101)
        assert p.y == pytest.approx(100)

    @pytest.mark.unit
    def test_recycle_when_fully_outside(self):
        rule = get_rule("cloudy", "lite")
        assert rule.should_recycle(CloudPuff(x=-31, y=100, speed=1, size=30, opacity=0.2), 800, 600)
        assert rule.should_recycle(CloudPuff(x=100, y=631, speed=1, size=30, opacity=0.2), 800, 600)
        assert not rule.should_recycle(CloudPuff(x=-29, y=100, speed=1, size=30, opacity=0.2), 800, 600)
