"""Survey effort and ice composition table renderer.

One row per survey year plus the pooled total: station counts, mean ± sd
transect length and, for each ice category, mean coverage ± binomial SE.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from amlr_survey.renderers import render_template
from amlr_survey.renderers.formatting import format_estimate
from amlr_survey.renderers.palette import ICE_TYPE_COLORS
from amlr_survey.schemas import ICE_TYPE_ORDER

if TYPE_CHECKING:
    from amlr_survey.analysis.effort import EffortRow


def _row_context(row: EffortRow) -> dict[str, Any]:
    return {
        "label": row.label,
        "n_stations": row.n_stations,
        "effort": format_estimate(row.effort_nmi, digits=1),
        "n_ice_stations": row.n_ice_stations,
        "ice": [
            {
                "count": row.ice[t].count if t in row.ice else 0,
                "share": format_estimate(row.ice[t].fraction, percent=True)
                if t in row.ice
                else "n/a",
            }
            for t in ICE_TYPE_ORDER
        ],
    }


def build_effort_table_html(rows: list[EffortRow], total: EffortRow | None = None) -> str:
    """Build the per-year effort / ice composition table."""
    if not rows and (total is None or total.n_stations == 0):
        return "<p>No station effort data available.</p>"

    return render_template(
        "effort_table.html.j2",
        ice_types=[{"label": t.label, "color": ICE_TYPE_COLORS[t]} for t in ICE_TYPE_ORDER],
        rows=[_row_context(r) for r in rows],
        total=_row_context(total) if total is not None else None,
    )
