"""Leaflet map renderer for rasterized counts.

Each occupied grid cell is drawn as a polygon whose corners are unprojected
back to lat/lon, so the square projected cells appear as they do on the
polar stereographic map. One Leaflet layer per category lets readers toggle
species (or diel periods) on and off.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from amlr_survey.renderers import render_template
from amlr_survey.renderers.palette import CategoryStyle, build_category_palette

if TYPE_CHECKING:
    from amlr_survey.analysis.projection import Projector
    from amlr_survey.analysis.rasterize import GridCell, RasterLayer


def _cell_polygon(layer: RasterLayer, cell: GridCell, projector: Projector) -> list[list[float]]:
    """Cell corners as [lat, lon] pairs, counter-clockwise from lower-left."""
    x0, y0, x1, y1 = layer.grid.cell_bounds(cell)
    corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    polygon: list[list[float]] = []
    for x, y in corners:
        lat, lon = projector.inverse(x, y)
        polygon.append([round(lat, 5), round(lon, 5)])
    return polygon


def _year_range(years: list[int]) -> str:
    """Year range label, e.g. '2012-2016'."""
    if not years:
        return "all years"
    if years[0] == years[-1]:
        return str(years[0])
    return f"{years[0]}\u2013{years[-1]}"


def _script_json(value: Any) -> str:
    """JSON safe to embed inside a <script> element."""
    return json.dumps(value, separators=(",", ":")).replace("</", "<\\/")


def build_grid_map_html(
    layer: RasterLayer,
    projector: Projector,
    title: str,
    map_id: str = "grid-map",
    palette: dict[str, CategoryStyle] | None = None,
) -> tuple[str, str]:
    """Build an interactive Leaflet map of a raster layer.

    Cells are summed over years for display; the popup lists the per-year
    counts of the cell.

    Returns a (map_div_html, map_script_js) tuple.
    """
    years = layer.years()
    if not layer.counts:
        return (render_template("grid_map.html.j2", title=title, n_cells=0), "")

    categories = layer.categories()
    if palette is None:
        totals = {c: sum(layer.select(category=c).values()) for c in categories}
        palette = build_category_palette(categories, totals)

    polygons: dict[GridCell, list[list[float]]] = {}
    layers_js: list[dict[str, Any]] = []
    for category in categories:
        style = palette.get(category)
        per_cell = layer.select(category=category)
        peak = max(per_cell.values(), default=0.0)
        cells_js: list[dict[str, Any]] = []
        for cell, value in per_cell.items():
            if cell not in polygons:
                polygons[cell] = _cell_polygon(layer, cell, projector)
            by_year = {
                str(yr): layer.get(cell, category, yr)
                for yr in years
                if layer.get(cell, category, yr) is not None
            }
            cells_js.append(
                {
                    "polygon": polygons[cell],
                    "value": value,
                    "opacity": round(0.2 + 0.7 * (value / peak), 3) if peak > 0 else 0.2,
                    "years": by_year,
                }
            )
        layers_js.append(
            {
                "name": category,
                "color": style.color if style else "#888",
                "cells": cells_js,
            }
        )

    map_div = render_template(
        "grid_map.html.j2",
        map_id=map_id,
        title=title,
        years=_year_range(years),
        cell_km=f"{layer.grid.resolution / 1000:g}",
        n_cells=len(polygons),
        dropped=layer.dropped,
    )
    map_script = render_template(
        "grid_map_script.html.j2",
        map_id=map_id,
        layers_json=_script_json(layers_js),
    )
    return (map_div, map_script)
