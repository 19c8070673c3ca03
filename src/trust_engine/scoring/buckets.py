"""Bucket functions — map a continuous metric onto discrete points.

Every threshold in the engine lives in a declarative table consumed by one
of the lookups below. Bucket boundaries are half-open, inclusive-lower:

- higher-is-better tables award a bucket once ``value >= threshold``;
- lower-is-better tables award a bucket while ``value < ceiling``, so a
  value sitting exactly on a ceiling falls into the next bucket up.

None of the lookups raise on data. ``None``, NaN and negative values
resolve to the table floor.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence


def _usable(value: Optional[float]) -> Optional[float]:
    """Return *value* as a float, or None if it is missing or out of domain."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or number < 0.0:
        return None
    return number


@dataclass(frozen=True)
class BucketTable:
    """An ordered table of ``(threshold, points)`` pairs.

    Parameters
    ----------
    name:
        Metric name, used in error messages and scoring explanations.
    buckets:
        ``(threshold, points)`` pairs. For higher-is-better tables the
        threshold is the inclusive lower bound of the bucket; for
        lower-is-better tables it is the exclusive upper bound.
    floor:
        Points awarded when no bucket matches.
    lower_is_better:
        True for metrics such as gas or latency where smaller is better.
    """

    name: str
    buckets: tuple[tuple[float, int], ...]
    floor: int = 0
    lower_is_better: bool = False

    def __post_init__(self) -> None:
        if not self.buckets:
            raise ValueError(f"Bucket table {self.name!r} has no buckets.")
        ordered = sorted(self.buckets, key=lambda pair: pair[0])
        thresholds = [threshold for threshold, _ in ordered]
        if len(set(thresholds)) != len(thresholds):
            raise ValueError(f"Bucket table {self.name!r} has duplicate thresholds.")
        points = [pts for _, pts in ordered]
        # Points must rise with the threshold (or fall, for lower-is-better)
        # so that a better metric never scores fewer points.
        if self.lower_is_better:
            monotonic = all(a >= b for a, b in zip(points, points[1:]))
            above_floor = points[-1] >= self.floor
        else:
            monotonic = all(a <= b for a, b in zip(points, points[1:]))
            above_floor = points[0] >= self.floor
        if not monotonic or not above_floor:
            raise ValueError(
                f"Bucket table {self.name!r} is not monotonic: {self.buckets!r}"
            )
        object.__setattr__(self, "buckets", tuple(ordered))

    @property
    def max_points(self) -> int:
        """The largest number of points any value can earn."""
        return max(max(pts for _, pts in self.buckets), self.floor)

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        return {
            "name": self.name,
            "buckets": [[threshold, pts] for threshold, pts in self.buckets],
            "floor": self.floor,
            "lower_is_better": self.lower_is_better,
        }


def bucket_points(value: Optional[float], table: BucketTable) -> int:
    """Return the points *value* earns under *table*.

    Parameters
    ----------
    value:
        Raw metric value. Missing, NaN or negative values earn the floor.
    table:
        The bucket table to consult.

    Returns
    -------
    int
        Points of the first matching bucket, else ``table.floor``.
    """
    number = _usable(value)
    if number is None:
        return table.floor

    if table.lower_is_better:
        for ceiling, points in table.buckets:
            if number < ceiling:
                return points
        return table.floor

    for threshold, points in reversed(table.buckets):
        if number >= threshold:
            return points
    return table.floor


@dataclass(frozen=True)
class LinearBand:
    """One band of a piecewise-linear points scale.

    Inside ``[lower, next band's lower)`` a value earns
    ``base + floor((value - lower) / width * span)``, capped at ``span``.
    A *stepped* band quantises first:
    ``base + min(span, floor((value - lower) / width) * span)``.
    """

    lower: float
    base: int
    width: float = 5.0
    span: int = 10
    stepped: bool = False

    def points(self, value: float) -> int:
        # Saturates at span, which also keeps floor() finite for inf.
        fraction = min((value - self.lower) / self.width, float(self.span))
        if self.stepped:
            earned = math.floor(fraction) * self.span
        else:
            earned = math.floor(fraction * self.span)
        return self.base + max(0, min(self.span, earned))


def band_points(value: Optional[float], bands: Sequence[LinearBand]) -> int:
    """Return points for *value* from the highest band whose lower bound it reaches.

    Values that are missing, NaN, negative, zero or below the first band
    earn 0.
    """
    number = _usable(value)
    if number is None or number <= 0.0:
        return 0
    for band in sorted(bands, key=lambda b: b.lower, reverse=True):
        if number >= band.lower:
            return band.points(number)
    return 0


def linear_points(value: Optional[float], scale: int, maximum: float = 100.0) -> int:
    """Scale *value* in ``[0, maximum]`` linearly onto ``[0, scale]`` (floored).

    Values above *maximum* are treated as *maximum*.
    """
    number = _usable(value)
    if number is None:
        return 0
    number = min(number, maximum)
    return math.floor(number / maximum * scale)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp *value* into ``[lower, upper]``; NaN resolves to *lower*."""
    if value != value:  # NaN
        return lower
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (72.5 -> 73)."""
    return math.floor(value + 0.5)


__all__ = [
    "BucketTable",
    "LinearBand",
    "band_points",
    "bucket_points",
    "clamp",
    "linear_points",
    "round_half_up",
]
