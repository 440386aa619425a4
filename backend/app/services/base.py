"""
Service Contracts

Shared base for the chart fetcher and the indicator pipeline, plus the
error types the API layer maps to HTTP responses.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    A pipeline stage with one typed entry point.

    DataIngestionService turns a ChartRequest into raw bar records;
    IndicatorService turns an AnalyzeRequest into an IntradayAnalysis.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short label used in log lines and error messages."""

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Run the stage.

        Upstream failures surface as ServiceError subclasses; bad bar data
        never does, it is filtered out instead.
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the stage can currently serve a request."""


class ServiceError(Exception):
    """Raised by a stage; carries the stage name and structured details."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ExternalAPIError(ServiceError):
    """The chart provider could not be reached or answered with something unusable."""
