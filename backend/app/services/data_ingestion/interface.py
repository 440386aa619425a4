"""
Data Ingestion Service Interface

Defines the contract for the data ingestion layer.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any

from app.services.base import BaseService
from app.schemas.market import ChartRequest


@dataclass
class ChartFetchResult:
    """Candidate bar records from one upstream fetch."""

    symbol: str
    records: list[dict[str, Any]]
    source: str
    latency_ms: int


class DataIngestionServiceInterface(BaseService[ChartRequest, ChartFetchResult]):
    """
    Data Ingestion Service Contract.

    INPUT: ChartRequest
        - symbol: Yahoo Finance symbol
        - interval / chart_range: bar size and session span

    OUTPUT: ChartFetchResult
        - records: unvalidated bar records (fields may be None)
        - source / latency_ms: fetch metadata

    Upstream failures are raised as ExternalAPIError.
    """

    @property
    def name(self) -> str:
        return "DataIngestionService"

    @abstractmethod
    async def execute(self, input_data: ChartRequest) -> ChartFetchResult:
        """Fetch raw intraday bars."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check connectivity to the data source."""
        pass
