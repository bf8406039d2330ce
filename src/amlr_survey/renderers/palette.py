"""Category visual styling: colors and short labels.

Shared by the grid map and the tables so a species or ice category keeps the
same color everywhere in the report.
"""

from __future__ import annotations

from dataclasses import dataclass

from amlr_survey.schemas import IceType

_CATEGORY_COLORS = [
    "#e6194b",  # red
    "#3cb44b",  # green
    "#4363d8",  # blue
    "#f58231",  # orange
    "#911eb4",  # purple
    "#42d4f4",  # cyan
    "#f032e6",  # magenta
    "#bfef45",  # lime
    "#fabed4",  # pink
    "#469990",  # teal
    "#dcbeff",  # lavender
    "#9a6324",  # brown
    "#ffe119",  # yellow
    "#aaffc3",  # mint
    "#808000",  # olive
]

# Thin-to-thick ramp, light to dark
ICE_TYPE_COLORS: dict[IceType, str] = {
    IceType.OPEN_WATER: "#c6dbef",
    IceType.THIN: "#6baed6",
    IceType.FIRST_YEAR: "#2171b5",
    IceType.MULTI_YEAR: "#08306b",
}


@dataclass
class CategoryStyle:
    """Visual style for a category on the map and in tables."""

    color: str
    initials: str
    name: str


def build_category_palette(
    categories: list[str], totals: dict[str, float] | None = None
) -> dict[str, CategoryStyle]:
    """Assign a color and 2-letter abbreviation to each category.

    Categories are ranked by ``totals`` (largest first, then by name) so the
    most abundant ones get the most distinct colors.
    """
    totals = totals or {}
    ranked = sorted(set(categories), key=lambda c: (-totals.get(c, 0.0), c))
    palette: dict[str, CategoryStyle] = {}
    for i, name in enumerate(ranked):
        palette[name] = CategoryStyle(
            color=_CATEGORY_COLORS[i % len(_CATEGORY_COLORS)],
            initials=category_initials(name),
            name=name,
        )
    return palette


def category_initials(name: str) -> str:
    """Derive a 2-letter abbreviation from a category name or code."""
    words = name.replace("_", " ").split()
    if len(words) >= 2:
        return (words[0][0] + words[-1][0]).upper()
    if len(name) >= 2:
        return name[:2].upper()
    return name.upper()
