"""Normalization of raw exchange data into daily market descriptors.

Daily OHLCV bars and order-book snapshots are reduced to the categorical and
scaled fields of :class:`~seasonality.types.MarketDataPoint`. Fetching the raw
data is the caller's business; everything here is pure.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Sequence

import numpy as np
from pydantic import Field

from seasonality.exceptions import DataValidationError
from seasonality.types import (
    FrozenModel,
    MarketDataPoint,
    Performance,
    Symbol,
    VolatilityLevel,
)

LOW_RANGE_PERCENT = 2.0
MEDIUM_RANGE_PERCENT = 5.0
NEUTRAL_CHANGE_PERCENT = 0.5
DEFAULT_LIQUIDITY = 50.0
TRADING_DAYS_PER_YEAR = 252


class Bar(FrozenModel):
    """Raw daily bar of market data for a symbol.

    :param symbol: Market symbol for this bar.
    :param timestamp: Opening time of the bar.
    :param open: Opening price.
    :param high: Highest price during the bar period.
    :param low: Lowest price during the bar period.
    :param close: Closing price.
    :param volume: Trading volume during the bar period.
    """

    symbol: Symbol
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


class OrderBook(FrozenModel):
    """Order-book snapshot, best levels first.

    :param bids: (price, quantity) pairs, highest price first.
    :param asks: (price, quantity) pairs, lowest price first.
    """

    bids: list[tuple[float, float]] = Field(default_factory=list)
    asks: list[tuple[float, float]] = Field(default_factory=list)


class LiquidityMetrics(FrozenModel):
    """Liquidity figures derived from an order book.

    :param total_volume: Bid plus ask quantity over the inspected levels.
    :param bid_volume: Bid quantity over the inspected levels.
    :param ask_volume: Ask quantity over the inspected levels.
    :param spread: Best ask minus best bid.
    :param spread_percent: Spread relative to the best bid, in percent.
    :param bid_depth: Bid quantity within 1% of mid below the best bid.
    :param ask_depth: Ask quantity within 1% of mid above the best ask.
    :param liquidity: Liquidity score on a 0-100 scale.
    """

    total_volume: float
    bid_volume: float
    ask_volume: float
    spread: float
    spread_percent: float
    bid_depth: float
    ask_depth: float
    liquidity: float


def classify_volatility(range_percent: float) -> VolatilityLevel:
    """Bucket an intraday high-low range (percent of open)."""
    if range_percent < LOW_RANGE_PERCENT:
        return VolatilityLevel.LOW
    if range_percent < MEDIUM_RANGE_PERCENT:
        return VolatilityLevel.MEDIUM
    return VolatilityLevel.HIGH


def classify_performance(change_percent: float) -> Performance:
    """Bucket an open-to-close change (percent)."""
    if abs(change_percent) < NEUTRAL_CHANGE_PERCENT:
        return Performance.NEUTRAL
    if change_percent > 0:
        return Performance.POSITIVE
    return Performance.NEGATIVE


def liquidity_metrics(order_book: OrderBook, depth_levels: int = 10) -> LiquidityMetrics:
    """Summarize the top of an order book.

    :param order_book: Snapshot to inspect.
    :param depth_levels: Number of best levels per side to consider.
    :returns: Volume, spread and depth figures plus a 0-100 liquidity score.
    """
    bids = order_book.bids[:depth_levels]
    asks = order_book.asks[:depth_levels]

    bid_volume = sum(quantity for _, quantity in bids)
    ask_volume = sum(quantity for _, quantity in asks)

    best_bid = bids[0][0] if bids else 0.0
    best_ask = asks[0][0] if asks else 0.0
    spread = best_ask - best_bid
    spread_percent = (spread / best_bid) * 100 if best_bid > 0 else 0.0

    # Depth counts quantity within 1% of mid around the touch
    depth_threshold = (best_bid + best_ask) / 2 * 0.01
    bid_depth = sum(q for price, q in bids if price >= best_bid - depth_threshold)
    ask_depth = sum(q for price, q in asks if price <= best_ask + depth_threshold)

    return LiquidityMetrics(
        total_volume=bid_volume + ask_volume,
        bid_volume=bid_volume,
        ask_volume=ask_volume,
        spread=spread,
        spread_percent=spread_percent,
        bid_depth=bid_depth,
        ask_depth=ask_depth,
        liquidity=min(100.0, max(0.0, 100.0 - spread_percent * 20)),
    )


def annualized_volatility(prices: Sequence[float], period: int = 20) -> float:
    """Annualized volatility of simple returns over the last ``period`` prices.

    :param prices: Price history, oldest first.
    :param period: Number of trailing prices to use.
    :returns: Population stddev of returns times sqrt(252); 0 with too few prices.
    """
    if len(prices) < period or period < 2:
        return 0.0

    recent = np.asarray(prices[-period:], dtype=float)
    returns = np.diff(recent) / recent[:-1]
    return float(np.std(returns) * math.sqrt(TRADING_DAYS_PER_YEAR))


def bar_to_point(bar: Bar, order_book: OrderBook | None = None) -> MarketDataPoint:
    """Convert one daily bar into a market data point.

    :param bar: Daily OHLCV bar.
    :param order_book: Snapshot used for the liquidity score, if any.
    :returns: Normalized point dated on the bar's opening day.
    :raises DataValidationError: If the bar has a non-positive open price.
    """
    if bar.open <= 0:
        raise DataValidationError(
            f"Bar for {bar.symbol} at {bar.timestamp.isoformat()} has non-positive open"
        )

    change_percent = (bar.close - bar.open) / bar.open * 100
    range_percent = (bar.high - bar.low) / bar.open * 100
    liquidity = (
        liquidity_metrics(order_book).liquidity
        if order_book is not None
        else DEFAULT_LIQUIDITY
    )

    day: date = bar.timestamp.date()
    return MarketDataPoint(
        date=day,
        volatility_level=classify_volatility(range_percent),
        volume=float(round(bar.volume)),
        performance=classify_performance(change_percent),
        price_change_percent=round(change_percent, 2),
        liquidity=float(round(liquidity)),
    )


def bars_to_points(
    bars: Sequence[Bar],
    order_books: Sequence[OrderBook] | None = None,
) -> list[MarketDataPoint]:
    """Convert daily bars into market data points.

    :param bars: Daily bars in chronological order.
    :param order_books: Snapshots aligned with ``bars`` by position; bars
        without a matching snapshot get the default liquidity score.
    :returns: One point per bar, same order.
    """
    books = order_books or []
    return [
        bar_to_point(bar, books[i] if i < len(books) else None)
        for i, bar in enumerate(bars)
    ]


__all__ = [
    "Bar",
    "OrderBook",
    "LiquidityMetrics",
    "classify_volatility",
    "classify_performance",
    "liquidity_metrics",
    "annualized_volatility",
    "bar_to_point",
    "bars_to_points",
]
