"""
Data Ingestion Service Implementation

Fetches intraday bars for the configured index from Yahoo Finance.
No mock fallback: an upstream failure surfaces to the caller as
ExternalAPIError so the API can report it distinctly.
"""

from datetime import datetime
from typing import Optional
import logging

from app.core.config import settings
from app.schemas.market import ChartRequest
from app.services.base import ExternalAPIError
from app.services.data_ingestion.interface import (
    DataIngestionServiceInterface,
    ChartFetchResult,
)
from app.services.data_ingestion.yahoo_adapter import SOURCE_NAME, YahooChartClient

logger = logging.getLogger(__name__)


class DataIngestionService(DataIngestionServiceInterface):
    """
    Data Ingestion Service.

    Wraps the Yahoo chart client and stamps fetch metadata.
    """

    def __init__(self, client: Optional[YahooChartClient] = None):
        self._client = client or YahooChartClient()

    @property
    def name(self) -> str:
        return "DataIngestionService"

    def default_request(self) -> ChartRequest:
        """Chart request for the configured symbol and session."""
        return ChartRequest(
            symbol=settings.yahoo_symbol,
            interval=settings.yahoo_interval,
            chart_range=settings.yahoo_range,
        )

    async def execute(self, input_data: ChartRequest) -> ChartFetchResult:
        """Fetch raw intraday bars."""
        start_time = datetime.now()

        records = await self._client.fetch_records(input_data)

        latency_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        logger.info(
            f"Got {len(records)} bar record(s) for {input_data.symbol} in {latency_ms}ms"
        )

        return ChartFetchResult(
            symbol=input_data.symbol,
            records=records,
            source=SOURCE_NAME,
            latency_ms=latency_ms,
        )

    async def close(self) -> None:
        """Release network resources."""
        await self._client.close()

    async def health_check(self) -> bool:
        """Check connectivity to the data source."""
        try:
            await self._client.fetch_chart(self.default_request())
            return True
        except ExternalAPIError:
            return False


# Singleton instance
_service_instance: Optional[DataIngestionService] = None


def get_data_ingestion_service() -> DataIngestionService:
    """Get or create data ingestion service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = DataIngestionService()
    return _service_instance
