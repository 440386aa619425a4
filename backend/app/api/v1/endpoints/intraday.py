"""
Intraday Analysis API Endpoints

Opening-range levels, RSI and confluence signals for the session.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.schemas.indicators import AnalyzeRequest, IntradayAnalysis, parse_rsi_settings
from app.services.base import ExternalAPIError
from app.services.data_ingestion import get_data_ingestion_service
from app.services.indicators import get_indicator_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=IntradayAnalysis)
async def get_intraday_analysis(
    period: Optional[str] = Query(default=None, description="RSI period (2-50)"),
    overbought: Optional[str] = Query(default=None, description="Overbought threshold (0-100)"),
    oversold: Optional[str] = Query(default=None, description="Oversold threshold (0-100)"),
    smoothing: Optional[str] = Query(default=None, description="Wilder smoothing window (1-50)"),
):
    """
    Fetch today's one-minute bars and analyse them.

    Parameters are taken as raw strings; missing or invalid values fall back
    to the defaults (period=14, smoothing=14, overbought=70, oversold=30).

    Returns:
        - Validated candles
        - First five-minute range and projected S/R levels
        - RSI series (rsi[k] aligns with candles[k + period])
        - Confluence signals
    """
    settings = parse_rsi_settings(
        period=period,
        overbought=overbought,
        oversold=oversold,
        smoothing=smoothing,
    )

    data_service = get_data_ingestion_service()
    try:
        fetched = await data_service.execute(data_service.default_request())
    except ExternalAPIError as e:
        logger.error(f"Upstream fetch failed: {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch market data")

    indicator_service = get_indicator_service()
    try:
        analysis = indicator_service.analyze(fetched.records, settings, fetched.symbol)
    except Exception as e:
        logger.error(f"Intraday analysis failed for {fetched.symbol}: {e}")
        raise HTTPException(status_code=500, detail="Unexpected error")

    if not analysis.candles:
        raise HTTPException(status_code=404, detail="No candles returned")

    return analysis


@router.post("/analyze", response_model=IntradayAnalysis)
async def analyze_bars(request: AnalyzeRequest):
    """
    Analyse caller-supplied bars without fetching upstream.

    Invalid records are dropped; an empty batch returns an empty analysis.
    """
    indicator_service = get_indicator_service()
    return await indicator_service.execute(request)
