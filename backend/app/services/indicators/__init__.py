"""
Indicator Engine Service

CONTRACT:
    Input:  AnalyzeRequest (candidate bar records + raw RSI parameters)
    Output: IntradayAnalysis

RESPONSIBILITIES:
    - Validate bars (drop incomplete / non-finite records)
    - Extract the five-minute opening range
    - Project support/resistance levels from the range
    - Calculate Wilder RSI
    - Detect price/level/RSI confluence

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from app.services.indicators.interface import IndicatorServiceInterface
from app.services.indicators.service import IndicatorService, get_indicator_service
from app.services.indicators.calculations import build_levels, compute_rsi, first_range
from app.services.indicators.confluence import analyze_confluence

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
    "build_levels",
    "compute_rsi",
    "first_range",
    "analyze_confluence",
]
