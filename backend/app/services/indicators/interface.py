"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Any, Iterable

from app.services.base import BaseService
from app.schemas.indicators import AnalyzeRequest, IntradayAnalysis, RsiSettings


class IndicatorServiceInterface(BaseService[AnalyzeRequest, IntradayAnalysis]):
    """
    Indicator Engine Service Contract.

    INPUT: AnalyzeRequest
        - records: candidate bar records (loosely typed, may be partial)
        - period / overbought / oversold / smoothing: raw RSI parameters

    OUTPUT: IntradayAnalysis
        - candles, opening range, levels, RSI series, effective settings
          and confluence signals
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: AnalyzeRequest) -> IntradayAnalysis:
        """Analyse the bars carried by the request."""
        pass

    @abstractmethod
    def analyze(
        self,
        records: Iterable[Any],
        settings: RsiSettings,
        symbol: str,
    ) -> IntradayAnalysis:
        """
        Run the full pipeline over one batch of bars.

        Args:
            records: Candidate bar records; invalid ones are dropped
            settings: Effective RSI settings
            symbol: Symbol label for the result

        Returns:
            Complete intraday analysis (never raises for empty data)
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
