"""AMLR Survey Report - maps, tables and statistics for Antarctic winter surveys.

Architecture::

    datasources/   CSV exports of the cruise tables (stations, predators, tows, ice)
    store.py       Tiered table store with TTL (raw → tables → derived)
    analysis/      Pure aggregation (rasterization, ice mode, effort statistics)
    renderers/     Pure data → HTML (summary tables, gridded sightings map)
    flows/         Prefect orchestration (ingest loads tables, build renders report)
    reference/     Static constants (map extent, CRS, classification thresholds)

Data flow: datasources → store (tables) → analysis → renderers → derived/report/

Extension points: see each package's docstring for step-by-step guides:
  - New input table:   datasources/__init__.py
  - New analysis:      analysis/__init__.py
  - New report section: renderers/__init__.py
"""

__version__ = "0.1.0"
__author__ = "AMLR Survey Team"

from amlr_survey.config import Settings
from amlr_survey.schemas import IceType, Station

__all__ = ["IceType", "Settings", "Station", "__version__"]
