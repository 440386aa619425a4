"""
Indicator Engine Service Implementation

Runs the intraday pipeline over one batch of bars:
candles -> {opening range -> levels} + {RSI} -> confluence.
Pure Python/NumPy calculations, no state kept between calls.
"""

from datetime import datetime
from typing import Any, Iterable, Optional, Sequence
import logging

from app.core.config import settings as app_settings
from app.schemas.market import validate_candles
from app.schemas.indicators import AnalyzeRequest, IntradayAnalysis, RsiSettings
from app.services.indicators.interface import IndicatorServiceInterface
from app.services.indicators.calculations import build_levels, compute_rsi, first_range
from app.services.indicators.confluence import analyze_confluence

logger = logging.getLogger(__name__)


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Window length, level fractions and confluence tolerance come from
    application settings unless given explicitly.
    """

    def __init__(
        self,
        window_seconds: Optional[int] = None,
        level_fractions: Optional[Sequence[float]] = None,
        tolerance: Optional[float] = None,
    ):
        self._window_seconds = window_seconds or app_settings.opening_window_seconds
        self._level_fractions = tuple(level_fractions or app_settings.level_fractions)
        self._tolerance = tolerance if tolerance is not None else app_settings.confluence_tolerance

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: AnalyzeRequest) -> IntradayAnalysis:
        """Analyse the bars carried by the request."""
        return self.analyze(
            input_data.records,
            input_data.rsi_settings(),
            input_data.symbol,
        )

    def analyze(
        self,
        records: Iterable[Any],
        settings: RsiSettings,
        symbol: str,
    ) -> IntradayAnalysis:
        """Run the full pipeline over one batch of bars."""
        candles = validate_candles(records)

        opening_range = first_range(candles, self._window_seconds)
        levels = build_levels(opening_range, self._level_fractions)
        rsi_values = compute_rsi(candles, settings)
        confluence = analyze_confluence(
            candles, levels, rsi_values, settings, self._tolerance
        )

        logger.info(
            f"Analysed {symbol}: {len(candles)} candles, {len(rsi_values)} RSI values, "
            f"{len(confluence)} confluence signal(s)"
        )

        return IntradayAnalysis(
            symbol=symbol,
            timestamp=datetime.now(),
            candles=candles,
            levels=levels,
            first_range=opening_range,
            rsi=rsi_values,
            rsi_settings=settings,
            confluence=confluence,
        )

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
