"""Shared fixtures for the intraday engine tests."""

import pytest

from app.schemas.market import Candle

SESSION_OPEN = 1_700_000_100  # 09:15 IST bar, seconds since epoch


def build_candles(closes, start=SESSION_OPEN, step=60, wick=0.5):
    """One-minute candles around the given closes."""
    return [
        Candle(
            time=start + i * step,
            open=close,
            high=close + wick,
            low=close - wick,
            close=close,
            volume=1000,
        )
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def make_candles():
    """Factory for one-minute candles from a list of closes."""
    return build_candles


@pytest.fixture
def rising_candles(make_candles):
    """10 candles closing 100 -> 109."""
    return make_candles([100.0 + i for i in range(10)])
