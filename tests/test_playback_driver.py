"""
Tests for the playback driver and the bias to speed mapping.
"""
import math

import pytest

from curve_model import CurveModel
from easing import identity
from playback_driver import PlaybackDriver, speed_from_bias
from time_sources import SimulatedTicker


class FakeTimeSource:
    """Time source with fixed position recording rate writes and seeks."""

    def __init__(self, current_time=0.0, duration=1000.0):
        self.current_time = current_time
        self.duration = duration
        self.rates = []
        self.seeks = []

    def set_playback_rate(self, speed):
        self.rates.append(speed)

    def seek(self, position_ms):
        self.seeks.append(position_ms)
        self.current_time = position_ms


class TestSpeedFromBias:
    def test_reference_values(self):
        assert speed_from_bias(0.5, 6) == pytest.approx(4.0)
        assert speed_from_bias(-0.5, 6) == pytest.approx(0.25)

    def test_baseline(self):
        assert speed_from_bias(0.0, 6) == 1.0

    def test_extremes(self):
        assert speed_from_bias(1.0, 6) == pytest.approx(7.0)
        assert speed_from_bias(-1.0, 6) == pytest.approx(1 / 7)

    def test_reciprocal_symmetry(self):
        for y in (0.1, 0.3, 0.8):
            assert speed_from_bias(y) * speed_from_bias(-y) == pytest.approx(1.0)


class TestTick:
    def test_flat_curve_plays_at_baseline(self):
        source = FakeTimeSource(current_time=250)
        driver = PlaybackDriver(CurveModel(), source)
        assert driver.tick() == 1.0
        assert source.rates == [1.0]
        assert driver.last_time == 0.25

    def test_curve_above_midline_is_faster(self):
        # Negative y is drawn above the midline
        source = FakeTimeSource(current_time=500)
        driver = PlaybackDriver(CurveModel([(0, -0.5), (1, -0.5)]), source, max_speed=6)
        assert driver.tick() == pytest.approx(4.0)
        assert driver.last_speed == pytest.approx(4.0)

    def test_curve_below_midline_is_slower(self):
        source = FakeTimeSource(current_time=500)
        driver = PlaybackDriver(CurveModel([(0, 0.5), (1, 0.5)]), source, max_speed=6)
        assert driver.tick() == pytest.approx(0.25)

    def test_follows_curve_over_time(self):
        model = CurveModel([(0, 0), (1, -1)], easing=identity)
        source = FakeTimeSource(duration=1000)
        driver = PlaybackDriver(model, source, max_speed=6)

        speeds = []
        for position in (0, 500, 1000):
            source.current_time = position
            speeds.append(driver.tick())
        assert speeds == pytest.approx([1.0, 4.0, 7.0])

    @pytest.mark.parametrize("duration", [0, -10, math.nan, math.inf])
    def test_bad_duration_skips_tick(self, duration):
        source = FakeTimeSource(current_time=100, duration=duration)
        driver = PlaybackDriver(CurveModel(), source)
        assert driver.tick() is None
        assert source.rates == []

    def test_time_past_end_skips_tick(self):
        source = FakeTimeSource(current_time=1500, duration=1000)
        driver = PlaybackDriver(CurveModel(), source, enforce_trim=False)
        assert driver.tick() is None
        assert source.rates == []

    def test_nan_time_skips_tick(self):
        source = FakeTimeSource(current_time=math.nan)
        driver = PlaybackDriver(CurveModel(), source)
        assert driver.tick() is None
        assert source.rates == []

    def test_previous_speed_kept_when_skipped(self):
        source = FakeTimeSource(current_time=500)
        driver = PlaybackDriver(CurveModel([(0, -0.5), (1, -0.5)]), source)
        driver.tick()
        source.duration = 0
        assert driver.tick() is None
        assert driver.last_speed == pytest.approx(4.0)


class TestTrim:
    @pytest.fixture
    def trimmed(self):
        model = CurveModel()
        model.move_point(model.first, 0.2, 0)
        model.move_point(model.last, 0.8, 0)
        return model

    def test_before_window_seeks_to_start(self, trimmed):
        source = FakeTimeSource(current_time=100)
        driver = PlaybackDriver(trimmed, source)
        assert driver.tick() is None
        assert source.seeks == [pytest.approx(200)]
        assert source.rates == []

    def test_after_window_loops_to_start(self, trimmed):
        source = FakeTimeSource(current_time=900)
        driver = PlaybackDriver(trimmed, source)
        driver.tick()
        assert source.seeks == [pytest.approx(200)]

        # Next frame plays from inside the window
        assert driver.tick() == 1.0
        assert source.rates == [1.0]

    def test_inside_window_plays(self, trimmed):
        source = FakeTimeSource(current_time=500)
        driver = PlaybackDriver(trimmed, source)
        assert driver.tick() == 1.0
        assert source.seeks == []

    def test_trim_not_enforced(self, trimmed):
        source = FakeTimeSource(current_time=100)
        driver = PlaybackDriver(trimmed, source, enforce_trim=False)
        assert driver.tick() is None
        assert source.seeks == []
        assert source.rates == []

    def test_clock_keeps_running_outside_window(self, trimmed, fake_clock):
        ticker = SimulatedTicker(1000, clock=fake_clock)
        driver = PlaybackDriver(trimmed, ticker, enforce_trim=False)

        results = []
        for _ in range(20):
            fake_clock.advance_ms(16)
            results.append(driver.tick())

        # Skipped until the clock reaches the window at 200 ms, then played
        assert results[:12] == [None] * 12
        assert results[-1] == 1.0
        assert ticker.current_time == pytest.approx(320)

    def test_clock_keeps_last_rate_past_window_end(self, fake_clock):
        model = CurveModel([(0, -0.5), (0.5, -0.5), (1, -0.5)])
        model.move_point(model.last, 0.6, -0.5)
        ticker = SimulatedTicker(1000, clock=fake_clock)
        driver = PlaybackDriver(model, ticker, max_speed=6, enforce_trim=False)

        results = []
        for _ in range(20):
            fake_clock.advance_ms(16)
            results.append(driver.tick())

        # 4x from the first tick: out of the window past 600 ms, looped back after 1000 ms
        assert None in results
        assert results[-1] == pytest.approx(4.0)
        assert ticker.playback_rate == pytest.approx(4.0)
        assert ticker.current_time == pytest.approx(232)
