"""
Technical Indicator Calculations

Pure Python/NumPy implementations of the intraday indicators.
All math is deterministic.
"""

import numpy as np
from typing import Optional, Sequence

from app.schemas.market import Candle
from app.schemas.indicators import (
    EnrichedLevels,
    Level,
    OpeningRange,
    RsiSettings,
)

OPENING_WINDOW_SECONDS = 300
LEVEL_FRACTIONS = (0.382, 0.618)


def _closes(candles: Sequence[Candle]) -> np.ndarray:
    """Close prices as a float array."""
    return np.array([c.close for c in candles], dtype=float)


# =============================================================================
# OPENING RANGE
# =============================================================================


def first_range(
    candles: Sequence[Candle], window_seconds: int = OPENING_WINDOW_SECONDS
) -> Optional[OpeningRange]:
    """
    High/low of the opening window [t0, t0 + window_seconds).

    t0 is the first candle's timestamp. If no candle lands in the window
    (only possible with out-of-order input), the first candle alone is used.
    Returns None for an empty series.
    """
    if not candles:
        return None

    start = candles[0].time
    end = start + window_seconds
    in_window = [c for c in candles if start <= c.time < end]

    if not in_window:
        in_window = [candles[0]]

    return OpeningRange(
        high=max(c.high for c in in_window),
        low=min(c.low for c in in_window),
    )


# =============================================================================
# SUPPORT/RESISTANCE
# =============================================================================


def build_levels(
    opening_range: Optional[OpeningRange],
    fractions: Sequence[float] = LEVEL_FRACTIONS,
) -> Optional[EnrichedLevels]:
    """
    Project resistance above the range high and support below the range low.

    R_i = high + span * f_i, S_i = low - span * f_i, span = high - low.
    Fractions are applied in ascending order, so R1 < R2 and S1 > S2
    whenever span > 0. A flat range (span == 0) collapses every level onto
    high/low.
    """
    if opening_range is None:
        return None

    high = opening_range.high
    low = opening_range.low
    span = high - low

    ordered = sorted(fractions)
    resistance = [
        Level(name=f"R{i}", value=high + span * f) for i, f in enumerate(ordered, 1)
    ]
    support = [
        Level(name=f"S{i}", value=low - span * f) for i, f in enumerate(ordered, 1)
    ]

    return EnrichedLevels(support=support, resistance=resistance)


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        # Flat market reads neutral, pure gains read 100
        return 100.0 if avg_gain > 0 else 50.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def compute_rsi(candles: Sequence[Candle], settings: RsiSettings) -> list[float]:
    """
    Relative Strength Index with Wilder smoothing.

    Seeded with the simple mean of the first `period` gains/losses, then
    avg = (avg * (smoothing - 1) + value) / smoothing for every later bar.

    Returns len(candles) - period values (empty when there are not enough
    candles). Output index k corresponds to candle index k + period.
    """
    period = settings.period
    smoothing = settings.smoothing

    if len(candles) <= period:
        return []

    closes = _closes(candles)

    # Calculate price changes
    deltas = np.diff(closes)

    # Separate gains and losses
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average
    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))

    result = [_rsi_value(avg_gain, avg_loss)]

    # Subsequent RSI values using smoothed averages
    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (smoothing - 1) + gains[i]) / smoothing
        avg_loss = (avg_loss * (smoothing - 1) + losses[i]) / smoothing
        result.append(_rsi_value(float(avg_gain), float(avg_loss)))

    return result
