"""Tests for confluence detection."""

import pytest

from app.schemas.indicators import (
    EnrichedLevels,
    Level,
    OpeningRange,
    RsiSettings,
    SignalKind,
)
from app.services.indicators.calculations import build_levels, compute_rsi
from app.services.indicators.confluence import analyze_confluence


@pytest.fixture
def levels():
    """Levels from an opening range of 100 / 95."""
    return build_levels(OpeningRange(high=100, low=95))


def _closes_ending_at(close, period, filler=98.0):
    """period filler closes followed by one close that owns rsi[0]."""
    return [filler] * period + [close]


class TestAnalyzeConfluence:
    """Tests for analyze_confluence."""

    def test_resistance_rejection_at_r1(self, make_candles, levels):
        """Candle closing exactly at R1 with RSI 72 (overbought 70)."""
        settings = RsiSettings()
        r1 = levels.resistance[0]
        candles = make_candles(_closes_ending_at(r1.value, settings.period))

        signals = analyze_confluence(candles, levels, [72.0], settings)

        assert len(signals) == 1
        signal = signals[0]
        assert signal.type == SignalKind.RESISTANCE_REJECTION
        assert signal.level == r1
        assert signal.candle == candles[-1]
        assert signal.rsi == 72.0
        assert "R1" in signal.message

    def test_threshold_is_inclusive(self, make_candles, levels):
        settings = RsiSettings()
        candles = make_candles(_closes_ending_at(levels.resistance[0].value, settings.period))

        assert len(analyze_confluence(candles, levels, [70.0], settings)) == 1

    def test_price_at_level_without_momentum(self, make_candles, levels):
        settings = RsiSettings()
        candles = make_candles(_closes_ending_at(levels.resistance[0].value, settings.period))

        assert analyze_confluence(candles, levels, [69.9], settings) == []

    def test_momentum_without_price_at_level(self, make_candles, levels):
        settings = RsiSettings()
        candles = make_candles(_closes_ending_at(101.0, settings.period))

        assert analyze_confluence(candles, levels, [95.0], settings) == []

    def test_support_bounce(self, make_candles, levels):
        settings = RsiSettings(oversold=30)
        s1 = levels.support[0]
        candles = make_candles(_closes_ending_at(s1.value, settings.period))

        signals = analyze_confluence(candles, levels, [25.0], settings)

        assert len(signals) == 1
        assert signals[0].type == SignalKind.SUPPORT_BOUNCE
        assert signals[0].level == s1

    def test_support_needs_oversold(self, make_candles, levels):
        settings = RsiSettings(oversold=30)
        candles = make_candles(_closes_ending_at(levels.support[0].value, settings.period))

        assert analyze_confluence(candles, levels, [35.0], settings) == []

    def test_resistance_ignores_oversold_reading(self, make_candles, levels):
        settings = RsiSettings()
        candles = make_candles(_closes_ending_at(levels.resistance[0].value, settings.period))

        assert analyze_confluence(candles, levels, [10.0], settings) == []

    def test_within_tolerance(self, make_candles, levels):
        settings = RsiSettings()
        r1 = levels.resistance[0].value
        near = r1 * (1 + 0.0009)
        far = r1 * (1 + 0.002)

        assert len(analyze_confluence(make_candles(_closes_ending_at(near, 14)), levels, [80.0], settings)) == 1
        assert analyze_confluence(make_candles(_closes_ending_at(far, 14)), levels, [80.0], settings) == []

    def test_rsi_offset_by_period(self, make_candles, levels):
        """rsi[0] belongs to candle `period`, not candle 0."""
        settings = RsiSettings(period=3)
        r1 = levels.resistance[0].value
        # Candle 0 sits on R1 but has no RSI value
        candles = make_candles([r1, 98.0, 98.0, 98.0, r1])

        signals = analyze_confluence(candles, levels, [50.0, 90.0], settings)

        assert len(signals) == 1
        assert signals[0].candle == candles[4]
        assert signals[0].rsi == 90.0

    def test_multiple_levels_nearest_first(self, make_candles):
        settings = RsiSettings(period=2)
        levels = EnrichedLevels(
            resistance=[Level(name="R1", value=100.0), Level(name="R2", value=100.05)],
            support=[Level(name="S1", value=90.0), Level(name="S2", value=89.0)],
        )
        candles = make_candles([95.0, 95.0, 100.04])

        signals = analyze_confluence(candles, levels, [80.0], settings)

        assert [s.level.name for s in signals] == ["R2", "R1"]
        assert all(s.candle == candles[2] for s in signals)

    def test_signals_in_time_order(self, make_candles, levels):
        settings = RsiSettings(period=2)
        r1 = levels.resistance[0].value
        s1 = levels.support[0].value
        candles = make_candles([98.0, 98.0, r1, 98.0, s1])

        signals = analyze_confluence(candles, levels, [75.0, 50.0, 20.0], settings)

        assert [s.type for s in signals] == [
            SignalKind.RESISTANCE_REJECTION,
            SignalKind.SUPPORT_BOUNCE,
        ]
        assert signals[0].candle.time < signals[1].candle.time

    def test_no_levels(self, rising_candles):
        assert analyze_confluence(rising_candles, None, [80.0] * 5, RsiSettings(period=5)) == []

    def test_empty_rsi(self, rising_candles, levels):
        assert analyze_confluence(rising_candles, levels, [], RsiSettings(period=5)) == []

    def test_empty_candles(self, levels):
        assert analyze_confluence([], levels, [80.0], RsiSettings()) == []

    def test_rising_session_no_touch(self, make_candles):
        """Price grinds up through nothing: RSI is 100 but no level is touched."""
        candles = make_candles([100.0 + 0.01 * i for i in range(30)])
        settings = RsiSettings(period=5)
        levels = build_levels(OpeningRange(high=200, low=190))

        assert analyze_confluence(candles, levels, compute_rsi(candles, settings), settings) == []
