"""Helpers for working with a daily series as a whole."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from seasonality.exceptions import DataValidationError
from seasonality.types import MarketDataPoint


def validate_series(points: Sequence[MarketDataPoint]) -> None:
    """Check that a series is strictly ascending by date.

    :param points: Series to check.
    :raises DataValidationError: On a duplicate or out-of-order date.
    """
    for prev, point in zip(points, points[1:]):
        if point.date == prev.date:
            raise DataValidationError(f"Duplicate date in series: {point.date}")
        if point.date < prev.date:
            raise DataValidationError(
                f"Series is not ascending: {point.date} follows {prev.date}"
            )


def find_point(points: Sequence[MarketDataPoint], day: date) -> MarketDataPoint | None:
    """Return the point for a calendar day, or None if the series has no such day."""
    for point in points:
        if point.date == day:
            return point
    return None


def format_volume(volume: float) -> str:
    """Render a volume in compact K/M/B notation.

    >>> format_volume(1234567)
    '1.2M'
    """
    magnitude = abs(volume)
    for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
        if magnitude >= threshold:
            return f"{volume / threshold:.1f}{suffix}"
    if float(volume).is_integer():
        return str(int(volume))
    return f"{volume:.1f}"


__all__ = ["validate_series", "find_point", "format_volume"]
