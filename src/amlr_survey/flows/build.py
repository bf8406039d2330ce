"""
Prefect flow for building the survey report from the ingested tables.

Loads the validated tables, runs the aggregation stages, writes the derived
summaries as JSON and renders the HTML report.

Run locally:
    python -m amlr_survey.flows.build
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from prefect import flow, task

from amlr_survey.analysis.effort import summarize_effort
from amlr_survey.analysis.ice_mode import ice_mode
from amlr_survey.analysis.projection import MapExtent, Projector
from amlr_survey.analysis.rasterize import GridSpec, RasterLayer, project_points, rasterize
from amlr_survey.analysis.serialization import effort_to_dict, ice_modes_to_dict, raster_to_dict
from amlr_survey.analysis.sightings import summarize_predators, summarize_tows
from amlr_survey.config import Settings, get_settings
from amlr_survey.datasources.survey import TableKind, payload_to_records
from amlr_survey.flows.ingest import table_path
from amlr_survey.reference.geography import BoundingBox
from amlr_survey.renderers import render_template
from amlr_survey.renderers.effort_table import build_effort_table_html
from amlr_survey.renderers.grid_map import build_grid_map_html
from amlr_survey.renderers.ice_mode_table import build_ice_mode_html
from amlr_survey.renderers.sightings_table import (
    build_predator_table_html,
    build_tow_table_html,
)
from amlr_survey.store import DataStore

# Data store override; None means the store under Settings.data_dir
store: DataStore | None = None
SUMMARY_DIR = Path("derived/summaries")

REPORT_TITLE = "AMLR Winter Survey: Predators, Zooplankton and Sea Ice"


def get_store() -> DataStore:
    """Data store with tiered directories."""
    return store if store is not None else DataStore(get_settings().data_dir)


def report_dir() -> Path:
    """Directory the HTML report is written to and served from."""
    return get_store().derived / "report"


# =============================================================================
# Data loading tasks
# =============================================================================


@task(name="load-table")
def load_table(kind: TableKind) -> list[Any]:
    """Load an ingested table from store (empty if it was never ingested)."""
    return payload_to_records(kind, get_store().read(table_path(kind)))


# =============================================================================
# Aggregation tasks
# =============================================================================


@task(name="build-grid")
def build_grid(settings: Settings) -> tuple[Projector, GridSpec]:
    """Projection and the shared raster lattice for every map layer."""
    projector = Projector(crs_to=settings.projection)
    bbox = BoundingBox(
        south=settings.south, west=settings.west, north=settings.north, east=settings.east
    )
    extent = MapExtent.from_bbox(bbox, projector, resolution=settings.grid_resolution_m)
    return projector, GridSpec(extent=extent, resolution=settings.grid_resolution_m)


@task(name="rasterize-predators")
def rasterize_predators(
    sightings: list[Any], projector: Projector, grid: GridSpec
) -> RasterLayer:
    """Predator counts per cell, species and year."""
    points = project_points(sightings, projector, category=lambda s: s.species, count=lambda s: s.count)
    return rasterize(points, grid)


@task(name="rasterize-tows")
def rasterize_tows(tows: list[Any], projector: Projector, grid: GridSpec) -> RasterLayer:
    """Zooplankton tows per cell, diel period and year."""
    points = project_points(tows, projector, category=lambda t: t.diel_period.value)
    return rasterize(points, grid)


# =============================================================================
# Output tasks
# =============================================================================


@task(name="write-summaries")
def write_summaries(summaries: dict[str, Any]) -> list[Path]:
    """Write derived summaries as JSON envelopes (never fresh: rebuilt every build)."""
    ds = get_store()
    return [
        ds.write(SUMMARY_DIR / f"{name}.json", payload, source="amlr_survey.flows.build")
        for name, payload in summaries.items()
    ]


@task(name="write-report")
def write_report(html: str) -> Path:
    """Write HTML to the report directory."""
    output_dir = report_dir()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "index.html"
    with output_path.open("w") as f:
        f.write(html)
    return output_path


# =============================================================================
# Main flow
# =============================================================================


@flow(name="build-report", log_prints=True)
def build_all(settings: Settings | None = None) -> dict[str, Any]:
    """
    Build the survey report from ingested tables.

    This is the main Prefect flow that generates the report.
    """
    settings = settings or get_settings()

    print("Loading tables...")
    stations = load_table(TableKind.STATIONS)
    if not stations:
        print("No station table found. Run the ingest flow first.")
        return {"error": "no data"}

    predators = load_table(TableKind.PREDATORS)
    tows = load_table(TableKind.ZOOPLANKTON)
    ice_obs = load_table(TableKind.ICE_OBSERVATIONS)
    coverage = load_table(TableKind.ICE_COVERAGE)
    for name, records in [
        ("predator", predators),
        ("zooplankton", tows),
        ("ice observation", ice_obs),
        ("ice coverage", coverage),
    ]:
        if not records:
            print(f"Warning: No {name} table found. Building without it.")

    print("Summarizing effort...")
    effort_rows, effort_total = summarize_effort(
        stations, coverage, prefix=settings.station_prefix, ddof=settings.sd_ddof
    )
    undated = effort_total.n_stations - sum(r.n_stations for r in effort_rows)
    if undated:
        print(f"Warning: {undated} station codes carry no year; counted in the total only.")

    print("Computing station ice modes...")
    modes = ice_mode(
        stations,
        ice_obs,
        radius_km=settings.neighborhood_radius_km,
        prefix=settings.station_prefix,
    )
    print(f"{len(modes)} of {effort_total.n_stations} stations have ice observations nearby.")

    print("Rasterizing sightings...")
    projector, grid = build_grid(settings)
    predator_layer = rasterize_predators(predators, projector, grid)
    tow_layer = rasterize_tows(tows, projector, grid)
    for name, layer in [("predator", predator_layer), ("tow", tow_layer)]:
        if layer.dropped:
            print(f"Dropped {layer.dropped} {name} records outside the map extent.")

    predator_totals = summarize_predators(predators)
    tow_totals = summarize_tows(tows)

    summary_paths = write_summaries(
        {
            "effort": effort_to_dict(effort_rows, effort_total),
            "ice_mode": ice_modes_to_dict(modes),
            "predator_grid": raster_to_dict(predator_layer),
            "zooplankton_grid": raster_to_dict(tow_layer),
        }
    )

    print("Building HTML...")
    predator_map, predator_script = build_grid_map_html(
        predator_layer, projector, "Predator Sightings by Grid Cell", map_id="predator-map"
    )
    tow_map, tow_script = build_grid_map_html(
        tow_layer, projector, "Zooplankton Tows by Grid Cell", map_id="tow-map"
    )
    html = render_template(
        "base.html.j2",
        title=REPORT_TITLE,
        updated=datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC"),
        effort_table=build_effort_table_html(effort_rows, effort_total),
        ice_mode_table=build_ice_mode_html(modes, settings.neighborhood_radius_km),
        predator_table=build_predator_table_html(predator_totals),
        predator_map=predator_map,
        tow_table=build_tow_table_html(tow_totals),
        tow_map=tow_map,
        map_scripts=predator_script + tow_script,
    )

    print("Writing report...")
    output_path = write_report(html)

    print(f"Report built: {output_path}")
    return {
        "pages": 1,
        "output": str(output_path),
        "summaries": [str(p) for p in summary_paths],
        "stations": effort_total.n_stations,
        "ice_mode_stations": len(modes),
    }


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
