"""
Confluence Detection

Cross-references candles, projected levels and the RSI series.
A signal needs BOTH price at a level AND RSI beyond its threshold;
a plain touch of a level is not enough.
"""

from typing import Optional, Sequence

from app.schemas.market import Candle
from app.schemas.indicators import (
    ConfluenceSignal,
    EnrichedLevels,
    Level,
    LevelSide,
    RsiSettings,
    SignalKind,
)

CONFLUENCE_TOLERANCE = 0.001  # 0.1% of price


def _is_near(price: float, level: Level, tolerance: float) -> bool:
    return abs(price - level.value) <= tolerance * price


def _momentum_confirms(side: LevelSide, rsi_value: float, settings: RsiSettings) -> bool:
    if side == LevelSide.RESISTANCE:
        return rsi_value >= settings.overbought
    return rsi_value <= settings.oversold


def _build_signal(
    side: LevelSide, level: Level, candle: Candle, rsi_value: float
) -> ConfluenceSignal:
    if side == LevelSide.RESISTANCE:
        kind = SignalKind.RESISTANCE_REJECTION
        message = (
            f"Price {candle.close:.2f} testing resistance {level.name} "
            f"({level.value:.2f}) with RSI {rsi_value:.1f} overbought - "
            f"watch for rejection"
        )
    else:
        kind = SignalKind.SUPPORT_BOUNCE
        message = (
            f"Price {candle.close:.2f} testing support {level.name} "
            f"({level.value:.2f}) with RSI {rsi_value:.1f} oversold - "
            f"watch for bounce"
        )

    return ConfluenceSignal(
        type=kind,
        level=level,
        candle=candle,
        rsi=rsi_value,
        message=message,
    )


def analyze_confluence(
    candles: Sequence[Candle],
    levels: Optional[EnrichedLevels],
    rsi: Sequence[float],
    settings: RsiSettings,
    tolerance: float = CONFLUENCE_TOLERANCE,
) -> list[ConfluenceSignal]:
    """
    Emit a signal for every candle/level pair where price and RSI agree.

    rsi[k] is read against candles[k + settings.period]. Each candle is
    judged on its own (no state carried between bars).

    Ordering: candle time ascending, then distance from close to level
    (nearest first), then level order (resistance before support,
    nearest-to-range first).
    """
    if levels is None or not rsi:
        return []

    offset = settings.period
    sided_levels = [(LevelSide.RESISTANCE, level) for level in levels.resistance] + [
        (LevelSide.SUPPORT, level) for level in levels.support
    ]

    ranked: list[tuple[int, float, int, ConfluenceSignal]] = []

    for k, rsi_value in enumerate(rsi):
        index = k + offset
        if index >= len(candles):
            break

        candle = candles[index]
        for order, (side, level) in enumerate(sided_levels):
            if not _is_near(candle.close, level, tolerance):
                continue
            if not _momentum_confirms(side, rsi_value, settings):
                continue

            distance = abs(candle.close - level.value)
            ranked.append(
                (candle.time, distance, order, _build_signal(side, level, candle, rsi_value))
            )

    ranked.sort(key=lambda item: item[:3])
    return [item[3] for item in ranked]
