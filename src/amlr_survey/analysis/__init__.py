"""Aggregation and derived metrics over the survey tables.

Each module turns already-loaded records into the quantities the report plots
and tabulates. This is the domain logic layer.

Dependency rule: analysis/ imports ``schemas`` and ``reference`` only.
It never reads the store and never produces HTML.

Modules:
  - projection: lat/lon <-> projected CRS, map extent, geodesic distance
  - rasterize: point counts -> regular grid cells (per category and year)
  - ice_mode: stations + ice observations -> modal ice type and agreement
  - effort: stations + ice coverage -> per-year effort and composition table
  - sightings: predator and zooplankton tow totals per year
  - stations: station-code year parsing and de-duplication
  - stats: mean / sd / binomial SE that return None instead of NaN

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with a pure function::

       from amlr_survey.schemas import PredatorSighting, Station

       def summarize_something(
           stations: list[Station],
           sightings: list[PredatorSighting],
       ) -> list[SomeRow]:
           ...

2. Rules:
   - Take materialized records as arguments (never load tables here).
   - No I/O, no Prefect decorators, no printing.
   - Return dataclasses or dicts that renderers can consume.
   - Report undefined statistics as None.

3. Wire into the pipeline (see ``flows/build.py``):
   - Call your analysis function after loading tables from the store.
   - Pass the result to a renderer.

4. Re-export in ``__init__.py`` and add tests in ``tests/test_{name}.py``.
"""

from amlr_survey.analysis.effort import CategoryShare, EffortRow, summarize_effort
from amlr_survey.analysis.ice_mode import (
    IceMixing,
    IceModeSummary,
    classify_mixing,
    ice_mode,
    mode_of,
)
from amlr_survey.analysis.projection import MapExtent, Projector, geodesic_km
from amlr_survey.analysis.rasterize import (
    GridCell,
    GridSpec,
    ProjectedPoint,
    RasterLayer,
    fill_missing,
    project_points,
    rasterize,
)
from amlr_survey.analysis.sightings import SpeciesYearTotal, summarize_predators, summarize_tows
from amlr_survey.analysis.stations import parse_station_year
from amlr_survey.analysis.stats import Estimate, binomial_se

__all__ = [
    "CategoryShare",
    "EffortRow",
    "Estimate",
    "GridCell",
    "GridSpec",
    "IceMixing",
    "IceModeSummary",
    "MapExtent",
    "ProjectedPoint",
    "Projector",
    "RasterLayer",
    "SpeciesYearTotal",
    "binomial_se",
    "classify_mixing",
    "fill_missing",
    "geodesic_km",
    "ice_mode",
    "mode_of",
    "parse_station_year",
    "project_points",
    "rasterize",
    "summarize_effort",
    "summarize_predators",
    "summarize_tows",
]
