"""
Nifty Confluence Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from app.schemas.market import (
    ChartRequest,
    Candle,
    validate_candles,
)
from app.schemas.indicators import (
    AnalyzeRequest,
    ConfluenceSignal,
    EnrichedLevels,
    IntradayAnalysis,
    Level,
    OpeningRange,
    RsiSettings,
    SignalKind,
    parse_rsi_settings,
)

__all__ = [
    # Market
    "ChartRequest",
    "Candle",
    "validate_candles",
    # Indicators
    "AnalyzeRequest",
    "ConfluenceSignal",
    "EnrichedLevels",
    "IntradayAnalysis",
    "Level",
    "OpeningRange",
    "RsiSettings",
    "SignalKind",
    "parse_rsi_settings",
]
