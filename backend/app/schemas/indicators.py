"""
CONTRACT 2: Indicator Engine

Input: validated Candles + RsiSettings
Output: IntradayAnalysis

This module performs ALL mathematical calculations.
Pure Python/NumPy - deterministic and reproducible.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
import math

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.market import Candle


# =============================================================================
# ENUMS
# =============================================================================


class SignalKind(str, Enum):
    RESISTANCE_REJECTION = "resistance-rejection"
    SUPPORT_BOUNCE = "support-bounce"


class LevelSide(str, Enum):
    RESISTANCE = "resistance"
    SUPPORT = "support"


# =============================================================================
# SETTINGS: RsiSettings
# =============================================================================

DEFAULT_PERIOD = 14
DEFAULT_SMOOTHING = 14
DEFAULT_OVERBOUGHT = 70.0
DEFAULT_OVERSOLD = 30.0
MAX_WINDOW = 50


class RsiSettings(BaseModel):
    """
    Effective RSI configuration for one analysis.

    Immutable. Build it through parse_rsi_settings() so that request
    parameters are clamped/defaulted instead of rejected.
    """

    model_config = ConfigDict(frozen=True)

    period: int = Field(default=DEFAULT_PERIOD, ge=2, le=MAX_WINDOW)
    smoothing: int = Field(default=DEFAULT_SMOOTHING, ge=1, le=MAX_WINDOW)
    overbought: float = Field(default=DEFAULT_OVERBOUGHT, gt=0, lt=100)
    oversold: float = Field(default=DEFAULT_OVERSOLD, gt=0, lt=100)


def _to_number(value: Any) -> float:
    """Coerce a raw parameter to float; anything unusable becomes NaN."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return math.nan
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def _parse_window(value: Any, minimum: int, default: int) -> int:
    number = _to_number(value)
    if not math.isfinite(number):
        return default
    window = math.floor(number)
    if window < minimum:
        return default
    return min(window, MAX_WINDOW)


def _parse_threshold(value: Any, default: float) -> float:
    number = _to_number(value)
    if math.isfinite(number) and 0 < number < 100:
        return number
    return default


def parse_rsi_settings(
    period: Any = None,
    overbought: Any = None,
    oversold: Any = None,
    smoothing: Any = None,
) -> RsiSettings:
    """
    Build RsiSettings from loosely-typed request parameters.

    Total and idempotent:
        - period: floored, must be > 1, clamped to <= 50, else 14
        - smoothing: floored, must be >= 1, clamped to <= 50, else 14
        - overbought / oversold: must lie in (0, 100), else 70 / 30

    Each field falls back independently; this never raises.
    """
    return RsiSettings(
        period=_parse_window(period, 2, DEFAULT_PERIOD),
        smoothing=_parse_window(smoothing, 1, DEFAULT_SMOOTHING),
        overbought=_parse_threshold(overbought, DEFAULT_OVERBOUGHT),
        oversold=_parse_threshold(oversold, DEFAULT_OVERSOLD),
    )


# =============================================================================
# OUTPUT: Levels
# =============================================================================


class OpeningRange(BaseModel):
    """High/low band of the opening window."""

    model_config = ConfigDict(frozen=True)

    high: float
    low: float


class Level(BaseModel):
    """Single projected price level (R1, R2, S1, S2)."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: float


class EnrichedLevels(BaseModel):
    """Support and resistance levels, each ordered nearest-to-price first."""

    model_config = ConfigDict(frozen=True)

    support: list[Level]
    resistance: list[Level]


# =============================================================================
# OUTPUT: Confluence
# =============================================================================


class ConfluenceSignal(BaseModel):
    """Price at a level while RSI confirms the move."""

    model_config = ConfigDict(frozen=True)

    type: SignalKind
    level: Level
    candle: Candle
    rsi: float = Field(..., ge=0, le=100, description="Aligned RSI reading")
    message: str


# =============================================================================
# OUTPUT: IntradayAnalysis (Complete Response)
# =============================================================================


class IntradayAnalysis(BaseModel):
    """
    Complete intraday analysis bundle.
    Returned by: Indicator Service
    Consumed by: Presentation layer (charts, level cards, signal list)

    rsi[k] lines up with candles[k + rsi_settings.period].
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    timestamp: datetime
    candles: list[Candle]
    levels: Optional[EnrichedLevels] = None
    first_range: Optional[OpeningRange] = None
    rsi: list[float]
    rsi_settings: RsiSettings
    confluence: list[ConfluenceSignal]


# =============================================================================
# INPUT: AnalyzeRequest
# =============================================================================


class AnalyzeRequest(BaseModel):
    """
    Analyse caller-supplied bars without fetching upstream.

    Records are loosely typed on purpose; invalid ones are dropped.
    RSI parameters go through parse_rsi_settings().
    """

    symbol: str = "^NSEI"
    records: list[Any] = Field(default_factory=list)
    period: Optional[Any] = None
    overbought: Optional[Any] = None
    oversold: Optional[Any] = None
    smoothing: Optional[Any] = None

    def rsi_settings(self) -> RsiSettings:
        return parse_rsi_settings(
            period=self.period,
            overbought=self.overbought,
            oversold=self.oversold,
            smoothing=self.smoothing,
        )
