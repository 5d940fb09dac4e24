"""Synthetic daily series for demos and as a fallback when no feed is available.

The generator walks the requested range one calendar day at a time, skips
weekends, and samples every descriptor independently. Volatility is drawn
from a weighted distribution that leans toward higher volatility around
month-end and in quarter-opening (earnings) months.
"""

from __future__ import annotations

import calendar
import logging
import random
from datetime import date, timedelta
from typing import Sequence, TypeVar

from seasonality.types import MarketDataPoint, Performance, VolatilityLevel

logger = logging.getLogger(__name__)

T = TypeVar("T")

VOLATILITY_LEVELS = list(VolatilityLevel)
PERFORMANCES = list(Performance)

BASELINE_VOLATILITY_WEIGHTS = (0.5, 0.3, 0.2)  # low, medium, high
ELEVATED_VOLATILITY_WEIGHTS = (0.2, 0.4, 0.4)

QUARTER_OPENING_MONTHS = frozenset([1, 4, 7, 10])
MONTH_END_WINDOW_DAYS = 5

MIN_VOLUME = 100_000
VOLUME_SPAN = 1_000_000
PRICE_CHANGE_SPAN = 10.0  # -5% to +5%
MAX_LIQUIDITY = 100


def weighted_choice(rng: random.Random, items: Sequence[T], weights: Sequence[float]) -> T:
    """Pick one item with probability proportional to its weight.

    :param rng: Random source.
    :param items: Candidates.
    :param weights: Non-negative weight per candidate.
    :returns: The selected item (the last one if rounding leaves a remainder).
    """
    remaining = rng.random() * sum(weights)
    for item, weight in zip(items, weights):
        remaining -= weight
        if remaining <= 0:
            return item
    return items[-1]


def is_elevated_volatility_day(day: date) -> bool:
    """Whether a day falls in the month-end window or a quarter-opening month."""
    days_in_month = calendar.monthrange(day.year, day.month)[1]
    in_month_end = day.day > days_in_month - MONTH_END_WINDOW_DAYS
    return in_month_end or day.month in QUARTER_OPENING_MONTHS


class SeriesSynthesizer:
    """Generator of randomized daily series with a fixed statistical shape.

    Example usage::

        from datetime import date
        from seasonality.data.synth import SeriesSynthesizer

        synth = SeriesSynthesizer(seed=42)
        points = synth.generate(date(2024, 1, 1), date(2024, 3, 31))

    :param seed: Seed for the internal random source, or None for random.
    :param rng: Explicit random source; takes precedence over ``seed``.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def generate(self, start: date, end: date) -> list[MarketDataPoint]:
        """Generate one point per weekday in ``[start, end]``.

        :param start: First day (inclusive).
        :param end: Last day (inclusive).
        :returns: Points in ascending date order; empty when ``start > end``
            or the range holds no weekday.
        """
        points: list[MarketDataPoint] = []
        current = start
        while current <= end:
            if current.weekday() < 5:
                points.append(self._sample_day(current))
            current += timedelta(days=1)

        logger.debug("Synthesized %d points for %s..%s", len(points), start, end)
        return points

    def _sample_day(self, day: date) -> MarketDataPoint:
        weights = (
            ELEVATED_VOLATILITY_WEIGHTS
            if is_elevated_volatility_day(day)
            else BASELINE_VOLATILITY_WEIGHTS
        )
        rng = self.rng
        return MarketDataPoint(
            date=day,
            volatility_level=weighted_choice(rng, VOLATILITY_LEVELS, weights),
            performance=PERFORMANCES[int(rng.random() * len(PERFORMANCES))],
            volume=float(int(rng.random() * VOLUME_SPAN) + MIN_VOLUME),
            price_change_percent=(rng.random() - 0.5) * PRICE_CHANGE_SPAN,
            liquidity=float(int(rng.random() * MAX_LIQUIDITY) + 1),
        )


def generate_series(
    start: date,
    end: date,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> list[MarketDataPoint]:
    """Generate a synthetic weekday series for an inclusive date range.

    :param start: First day (inclusive).
    :param end: Last day (inclusive).
    :param seed: Seed for reproducibility, or None for random.
    :param rng: Explicit random source; takes precedence over ``seed``.
    :returns: Points in ascending date order.
    """
    return SeriesSynthesizer(seed=seed, rng=rng).generate(start, end)


__all__ = [
    "SeriesSynthesizer",
    "generate_series",
    "weighted_choice",
    "is_elevated_volatility_day",
]
