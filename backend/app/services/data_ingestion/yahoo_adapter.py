"""
Yahoo Finance Chart Adapter

Fetches REAL intraday bars from the Yahoo Finance v8 chart API and
flattens its response envelope into candidate bar records.
"""

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import aiohttp

from app.core.config import settings
from app.schemas.market import ChartRequest
from app.services.base import ExternalAPIError

logger = logging.getLogger(__name__)

SOURCE_NAME = "Yahoo Finance"
BAR_FIELDS = ("open", "high", "low", "close", "volume")


def _pick(values: Any, index: int) -> Any:
    """values[index], or None when the array is missing or too short."""
    if not isinstance(values, list) or index >= len(values):
        return None
    return values[index]


def parse_chart_payload(payload: Any) -> list[dict[str, Any]]:
    """
    Flatten a chart response into candidate bar records.

    Tolerates any shape: a missing chart/result/quote block yields no
    records, short arrays yield None fields. Nothing is validated here;
    validate_candles() decides which records survive.
    """
    if not isinstance(payload, dict):
        return []

    chart = payload.get("chart")
    results = chart.get("result") if isinstance(chart, dict) else None
    if not isinstance(results, list) or not results:
        return []

    result = results[0]
    if not isinstance(result, dict):
        return []

    timestamps = result.get("timestamp") or []
    indicators = result.get("indicators")
    quotes = indicators.get("quote") if isinstance(indicators, dict) else None
    if not isinstance(timestamps, list) or not isinstance(quotes, list) or not quotes:
        return []

    quote_block = quotes[0]
    if not isinstance(quote_block, dict):
        return []

    records = []
    for index, timestamp in enumerate(timestamps):
        record = {"time": timestamp}
        for field in BAR_FIELDS:
            record[field] = _pick(quote_block.get(field), index)
        records.append(record)

    return records


class YahooChartClient:
    """
    Thin aiohttp client for the chart endpoint.

    Transport failures, non-200 responses and unreadable bodies are raised
    as ExternalAPIError; an empty chart is not an error.
    """

    def __init__(self, base_url: Optional[str] = None):
        self._base_url = (base_url or settings.yahoo_chart_url).rstrip("/")
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=settings.upstream_timeout_seconds),
                headers={"User-Agent": settings.yahoo_user_agent},
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def build_url(self, request: ChartRequest) -> str:
        return f"{self._base_url}/{quote(request.symbol, safe='')}"

    async def fetch_chart(self, request: ChartRequest) -> dict:
        """Fetch the raw chart JSON for a symbol."""
        session = await self._ensure_session()
        url = self.build_url(request)
        params = {
            "interval": request.interval,
            "range": request.chart_range,
            "includePrePost": "true" if request.include_pre_post else "false",
        }

        logger.info(f"Fetching {request.symbol} ({request.interval}/{request.chart_range}) from {SOURCE_NAME}...")

        try:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    logger.warning(f"{SOURCE_NAME} returned status {response.status} for {request.symbol}")
                    raise ExternalAPIError(
                        SOURCE_NAME,
                        "Failed to fetch market data",
                        {"status": response.status, "symbol": request.symbol},
                    )
                payload = await response.json(content_type=None)
        except ExternalAPIError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Error fetching {request.symbol} from {SOURCE_NAME}: {e}")
            raise ExternalAPIError(
                SOURCE_NAME,
                "Failed to fetch market data",
                {"symbol": request.symbol, "error": str(e)},
            ) from e

        if not isinstance(payload, dict):
            raise ExternalAPIError(
                SOURCE_NAME,
                "Unexpected response body",
                {"symbol": request.symbol},
            )

        return payload

    async def fetch_records(self, request: ChartRequest) -> list[dict[str, Any]]:
        """Fetch a chart and flatten it into candidate bar records."""
        payload = await self.fetch_chart(request)
        records = parse_chart_payload(payload)
        if not records:
            logger.warning(f"No bars returned for {request.symbol}")
        return records
