"""Number formatting for report tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from amlr_survey.analysis.stats import Estimate

UNDEFINED_TEXT = "n/a"


def format_number(value: float | None, digits: int = 1) -> str:
    """Fixed-point number, or "n/a" when undefined."""
    if value is None:
        return UNDEFINED_TEXT
    return f"{value:.{digits}f}"


def format_percent(value: float | None, digits: int = 1) -> str:
    """Fraction in [0, 1] as a percentage string."""
    if value is None:
        return UNDEFINED_TEXT
    return f"{value * 100:.{digits}f}%"


def format_estimate(estimate: Estimate, digits: int = 1, percent: bool = False) -> str:
    """Format as "mean ± spread", dropping the spread when it is undefined."""
    fmt = format_percent if percent else format_number
    if estimate.value is None:
        return UNDEFINED_TEXT
    if estimate.spread is None:
        return fmt(estimate.value, digits)
    return f"{fmt(estimate.value, digits)} ± {fmt(estimate.spread, digits)}"
