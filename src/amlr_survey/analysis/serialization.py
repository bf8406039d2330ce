"""JSON serialization helpers for derived summaries.

Undefined statistics serialize as ``null``, never NaN.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from amlr_survey.analysis.effort import EffortRow
    from amlr_survey.analysis.ice_mode import IceModeSummary
    from amlr_survey.analysis.rasterize import RasterLayer
    from amlr_survey.analysis.stats import Estimate


def _round(value: float | None, digits: int) -> float | None:
    return round(value, digits) if value is not None else None


def estimate_to_dict(estimate: Estimate, digits: int = 4) -> dict[str, float | None]:
    return {"value": _round(estimate.value, digits), "spread": _round(estimate.spread, digits)}


def effort_row_to_dict(row: EffortRow) -> dict[str, Any]:
    """Serialize one effort row (yearly or total)."""
    return {
        "label": row.label,
        "year": row.year,
        "n_stations": row.n_stations,
        "n_effort": row.n_effort,
        "effort_nmi": estimate_to_dict(row.effort_nmi, digits=2),
        "n_ice_stations": row.n_ice_stations,
        "ice": {
            ice_type.value: {
                "count": share.count,
                "n": share.n,
                "fraction": estimate_to_dict(share.fraction),
            }
            for ice_type, share in row.ice.items()
        },
    }


def effort_to_dict(rows: list[EffortRow], total: EffortRow) -> dict[str, Any]:
    return {
        "years": [effort_row_to_dict(r) for r in rows],
        "total": effort_row_to_dict(total),
    }


def ice_modes_to_dict(summaries: list[IceModeSummary]) -> list[dict[str, Any]]:
    """Serialize station ice-mode summaries."""
    return [
        {
            "station": s.station,
            "year": s.year,
            "n_intervals": s.n_intervals,
            "mode": s.mode.value,
            "mode_count": s.mode_count,
            "agreement": round(s.agreement, 4),
            "mixing": s.mixing.value,
            "counts": {t.value: n for t, n in s.counts.items()},
        }
        for s in summaries
    ]


def raster_to_dict(layer: RasterLayer) -> dict[str, Any]:
    """Serialize a raster layer: the grid definition plus one entry per observed key."""
    ext = layer.grid.extent
    return {
        "extent": [ext.xmin, ext.ymin, ext.xmax, ext.ymax],
        "resolution": layer.grid.resolution,
        "dropped": layer.dropped,
        "cells": [
            {"col": cell.col, "row": cell.row, "category": category, "year": year, "count": count}
            for (cell, category, year), count in layer.counts.items()
        ],
    }
