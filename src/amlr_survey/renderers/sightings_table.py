"""Predator and zooplankton tow summary tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from amlr_survey.renderers import render_template
from amlr_survey.renderers.palette import CategoryStyle, build_category_palette
from amlr_survey.schemas import DielPeriod

if TYPE_CHECKING:
    from amlr_survey.analysis.sightings import SpeciesYearTotal


def build_predator_table_html(
    totals: list[SpeciesYearTotal],
    palette: dict[str, CategoryStyle] | None = None,
    top_n: int = 15,
) -> str:
    """Build a table of the most abundant predator species per survey year."""
    if not totals:
        return "<p>No predator sightings available.</p>"

    if palette is None:
        palette = build_category_palette([t.species for t in totals])

    years: dict[int, list[dict[str, object]]] = {}
    for t in totals:
        rows = years.setdefault(t.year, [])
        if len(rows) >= top_n:
            continue
        style = palette.get(t.species)
        rows.append(
            {
                "species": t.species,
                "color": style.color if style else "#888",
                "initials": style.initials if style else "?",
                "total": f"{t.total:g}",
                "sightings": t.sightings,
            }
        )

    return render_template(
        "predator_table.html.j2",
        years=[{"year": year, "rows": rows} for year, rows in sorted(years.items())],
    )


def build_tow_table_html(tows: dict[int, dict[DielPeriod, int]]) -> str:
    """Build a table of zooplankton tows per year and diel period."""
    if not tows:
        return "<p>No zooplankton tows available.</p>"

    periods = list(DielPeriod)
    rows = [
        {
            "year": year,
            "counts": [by_period.get(p, 0) for p in periods],
            "total": sum(by_period.values()),
        }
        for year, by_period in tows.items()
    ]
    return render_template(
        "tow_table.html.j2",
        periods=[p.value.title() for p in periods],
        rows=rows,
    )
