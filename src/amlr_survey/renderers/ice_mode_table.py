"""Station ice-mode table renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from amlr_survey.analysis.ice_mode import IceMixing, mixing_counts
from amlr_survey.reference.thresholds import HIGHLY_MIXED_BELOW, UNIFORM_AT_LEAST
from amlr_survey.renderers import render_template
from amlr_survey.renderers.formatting import format_percent
from amlr_survey.renderers.palette import ICE_TYPE_COLORS

if TYPE_CHECKING:
    from amlr_survey.analysis.ice_mode import IceModeSummary

_MIXING_LABELS = {
    IceMixing.UNIFORM: "Uniform",
    IceMixing.MIXED: "Mixed",
    IceMixing.HIGHLY_MIXED: "Highly mixed",
}


def build_ice_mode_html(summaries: list[IceModeSummary], radius_km: float) -> str:
    """Build the per-station ice-mode table with a mixing-class tally."""
    if not summaries:
        return "<p>No stations with ice observations nearby.</p>"

    stations = [
        {
            "code": s.station,
            "year": s.year if s.year is not None else "n/a",
            "n_intervals": s.n_intervals,
            "mode": s.mode.label,
            "color": ICE_TYPE_COLORS[s.mode],
            "mode_count": s.mode_count,
            "agreement": format_percent(s.agreement),
            "mixing": _MIXING_LABELS[s.mixing],
            "mixing_class": s.mixing.value,
        }
        for s in summaries
    ]
    tally = [
        {"label": _MIXING_LABELS[cls], "count": count}
        for cls, count in mixing_counts(summaries).items()
    ]

    return render_template(
        "ice_mode_table.html.j2",
        radius_km=f"{radius_km:g}",
        uniform_at_least=format_percent(UNIFORM_AT_LEAST, digits=0),
        highly_mixed_below=format_percent(HIGHLY_MIXED_BELOW, digits=0),
        stations=stations,
        tally=tally,
    )
