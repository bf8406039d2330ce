"""Spatial binning of point counts onto a regular projected grid.

Every layer drawn on the same map must be rasterized with the same
``GridSpec`` so cell edges line up across species, years and data types.

Cells use half-open intervals: column ``i`` covers
``[xmin + i * r, xmin + (i + 1) * r)`` and row ``j`` covers
``[ymin + j * r, ymin + (j + 1) * r)``. A point on a shared edge therefore
belongs to the cell on its right / above, and a point on ``xmax`` or ``ymax``
falls outside the grid.

A ``RasterLayer`` only holds combinations that were observed. "Absent" and
"observed zero" stay distinct until a consumer calls ``fill_missing``.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from amlr_survey.analysis.projection import MapExtent, Projector


class GridCell(NamedTuple):
    """Column/row index of a cell, counted from the extent's lower-left corner."""

    col: int
    row: int


class ProjectedPoint(NamedTuple):
    """A categorized count at a projected position."""

    x: float
    y: float
    category: str
    year: int
    count: float = 1.0


CellKey = tuple[GridCell, str, int]


@dataclass(frozen=True)
class GridSpec:
    """A regular lattice of square cells covering ``extent``."""

    extent: MapExtent
    resolution: float

    def __post_init__(self) -> None:
        if not self.resolution > 0:
            msg = f"Resolution must be positive, got {self.resolution}"
            raise ValueError(msg)

    @property
    def n_cols(self) -> int:
        return math.ceil(self.extent.width / self.resolution)

    @property
    def n_rows(self) -> int:
        return math.ceil(self.extent.height / self.resolution)

    def cell_for(self, x: float, y: float) -> GridCell | None:
        """Cell containing (x, y), or None if the point is outside the extent."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        ext = self.extent
        if x < ext.xmin or x >= ext.xmax or y < ext.ymin or y >= ext.ymax:
            return None
        col = int(math.floor((x - ext.xmin) / self.resolution))
        row = int(math.floor((y - ext.ymin) / self.resolution))
        return GridCell(col=col, row=row)

    def cell_bounds(self, cell: GridCell) -> tuple[float, float, float, float]:
        """Projected (xmin, ymin, xmax, ymax) of a cell."""
        x0 = self.extent.xmin + cell.col * self.resolution
        y0 = self.extent.ymin + cell.row * self.resolution
        return (x0, y0, x0 + self.resolution, y0 + self.resolution)

    def cell_center(self, cell: GridCell) -> tuple[float, float]:
        x0, y0, x1, y1 = self.cell_bounds(cell)
        return ((x0 + x1) / 2, (y0 + y1) / 2)


@dataclass
class RasterLayer:
    """Summed counts per (cell, category, year) for the observed combinations."""

    grid: GridSpec
    counts: dict[CellKey, float] = field(default_factory=dict)
    dropped: int = 0

    def get(self, cell: GridCell, category: str, year: int) -> float | None:
        """Summed count, or None when nothing was observed for the combination."""
        return self.counts.get((cell, category, year))

    def total(self) -> float:
        return sum(self.counts.values())

    def cells(self) -> list[GridCell]:
        return sorted({key[0] for key in self.counts})

    def categories(self) -> list[str]:
        return sorted({key[1] for key in self.counts})

    def years(self) -> list[int]:
        return sorted({key[2] for key in self.counts})

    def select(self, category: str | None = None, year: int | None = None) -> dict[GridCell, float]:
        """Per-cell sums restricted to a category and/or year (None = all)."""
        selected: dict[GridCell, float] = {}
        for (cell, cat, yr), value in self.counts.items():
            if category is not None and cat != category:
                continue
            if year is not None and yr != year:
                continue
            selected[cell] = selected.get(cell, 0.0) + value
        return dict(sorted(selected.items()))


def project_points(
    records: Iterable[Any],
    projector: Projector,
    category: Callable[[Any], str],
    count: Callable[[Any], float] = lambda _r: 1.0,
) -> list[ProjectedPoint]:
    """Project records with ``latitude``/``longitude``/``year`` attributes.

    Args:
        records: Schema records (predator sightings, tows, ...).
        projector: Target projection shared by every layer of the report.
        category: Extracts the category label (species code, diel period, ...).
        count: Extracts the count to sum; defaults to one per record.
    """
    rows = list(records)
    positions = projector.forward_many(
        [r.latitude for r in rows], [r.longitude for r in rows]
    )
    return [
        ProjectedPoint(
            x=x,
            y=y,
            category=str(category(record)),
            year=int(record.year),
            count=float(count(record)),
        )
        for record, (x, y) in zip(rows, positions, strict=True)
    ]


def rasterize(points: Iterable[ProjectedPoint], grid: GridSpec) -> RasterLayer:
    """Sum point counts per (cell, category, year).

    Points outside the grid extent are dropped and only tallied in
    ``RasterLayer.dropped``.
    """
    layer = RasterLayer(grid=grid)
    for point in points:
        cell = grid.cell_for(point.x, point.y)
        if cell is None:
            layer.dropped += 1
            continue
        key = (cell, point.category, point.year)
        layer.counts[key] = layer.counts.get(key, 0.0) + point.count
    layer.counts = dict(sorted(layer.counts.items()))
    return layer


def fill_missing(
    layer: RasterLayer,
    categories: Iterable[str] | None = None,
    years: Iterable[int] | None = None,
) -> dict[CellKey, float]:
    """Expand a layer to every occupied cell x category x year, zero-filled.

    Use this only where "not observed" should be drawn as zero (e.g. facet
    panels that must show every species). Cells with no observations at all
    stay absent.
    """
    cats = sorted(set(categories)) if categories is not None else layer.categories()
    yrs = sorted(set(years)) if years is not None else layer.years()
    filled: dict[CellKey, float] = {}
    for cell in layer.cells():
        for cat in cats:
            for yr in yrs:
                filled[(cell, cat, yr)] = layer.counts.get((cell, cat, yr), 0.0)
    return filled
