"""
Data Ingestion Service

CONTRACT:
    Input:  ChartRequest
    Output: ChartFetchResult (candidate bar records)

RESPONSIBILITIES:
    - Fetch one-minute bars from the Yahoo Finance chart API
    - Flatten the response envelope into bar records
    - Report transport failures as ExternalAPIError

NO ANALYSIS - Pure data fetching and transformation.
"""

from app.services.data_ingestion.interface import (
    DataIngestionServiceInterface,
    ChartFetchResult,
)
from app.services.data_ingestion.service import (
    DataIngestionService,
    get_data_ingestion_service,
)

__all__ = [
    "DataIngestionServiceInterface",
    "ChartFetchResult",
    "DataIngestionService",
    "get_data_ingestion_service",
]
