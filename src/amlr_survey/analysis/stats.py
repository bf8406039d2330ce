"""Summary statistics that report "undefined" as None instead of NaN.

Group sizes in the survey tables can be zero (a year without coverage records)
or one (a single station). The helpers here return None in those cases so a
missing value can never leak into a chart as NaN.
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass


@dataclass(frozen=True)
class Estimate:
    """A point estimate with its dispersion (sd or standard error)."""

    value: float | None
    spread: float | None = None

    @property
    def defined(self) -> bool:
        return self.value is not None


UNDEFINED = Estimate(value=None, spread=None)


def mean_or_none(values: list[float]) -> float | None:
    """Arithmetic mean, or None for an empty list."""
    if not values:
        return None
    return statistics.fmean(values)


def sd_or_none(values: list[float], ddof: int = 1) -> float | None:
    """Standard deviation with ``ddof`` 1 (sample) or 0 (population).

    Returns None when there are not more than ``ddof`` values.
    """
    if ddof not in (0, 1):
        msg = f"ddof must be 0 or 1, got {ddof}"
        raise ValueError(msg)
    if len(values) <= ddof:
        return None
    if ddof == 0:
        return statistics.pstdev(values)
    return statistics.stdev(values)


def binomial_se(p: float, n: int) -> float | None:
    """Standard error of a proportion, sqrt(p(1 - p) / n); None when n == 0."""
    if not 0.0 <= p <= 1.0:
        msg = f"Proportion must be within [0, 1], got {p}"
        raise ValueError(msg)
    if n < 0:
        msg = f"Sample size must be non-negative, got {n}"
        raise ValueError(msg)
    if n == 0:
        return None
    return math.sqrt(p * (1.0 - p) / n)


def mean_sd(values: list[float], ddof: int = 1) -> Estimate:
    """Mean and standard deviation as an Estimate."""
    return Estimate(value=mean_or_none(values), spread=sd_or_none(values, ddof))
