"""
CONTRACT 1: Data Ingestion Layer

Input: ChartRequest
Output: list of candidate bar records -> Candle

This module describes the intraday chart request sent upstream and the
validated price bar every downstream stage consumes.
"""

from typing import Any, Iterable
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


# =============================================================================
# INPUT: ChartRequest
# =============================================================================


class ChartRequest(BaseModel):
    """
    Request for an intraday chart.
    Sent by: Intraday API endpoint
    Received by: Data Ingestion Service
    """

    symbol: str = Field(default="^NSEI", description="Yahoo Finance symbol")
    interval: str = Field(default="1m", description="Bar interval")
    chart_range: str = Field(default="1d", description="Chart range (session span)")
    include_pre_post: bool = Field(
        default=False,
        description="Include pre/post market bars",
    )


# =============================================================================
# OUTPUT: Candle
# =============================================================================


class Candle(BaseModel):
    """Single price bar. Prices are finite and positive, volume finite and non-negative."""

    model_config = ConfigDict(frozen=True)

    time: int = Field(..., description="Seconds since epoch")
    open: float = Field(..., gt=0, allow_inf_nan=False)
    high: float = Field(..., gt=0, allow_inf_nan=False)
    low: float = Field(..., gt=0, allow_inf_nan=False)
    close: float = Field(..., gt=0, allow_inf_nan=False)
    volume: float = Field(..., ge=0, allow_inf_nan=False)

    @field_validator("time", "open", "high", "low", "close", "volume", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        # bool is an int subclass; True would otherwise read as 1
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value


def validate_candles(records: Iterable[Any]) -> list[Candle]:
    """
    Normalize candidate bar records into Candles.

    Records missing a field or carrying a non-finite / out-of-domain value are
    dropped rather than raised. Order is preserved as received: the upstream
    feed delivers ascending timestamps, and out-of-order or duplicate bars
    pass through untouched.
    """
    candles: list[Candle] = []
    dropped = 0

    for record in records:
        try:
            candles.append(Candle.model_validate(record))
        except ValidationError:
            dropped += 1

    if dropped:
        logger.debug(f"Dropped {dropped} invalid bar record(s), kept {len(candles)}")

    return candles
