"""CSV export file names and reading."""

from __future__ import annotations

import csv
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class TableKind(StrEnum):
    """Input tables the report is built from."""

    STATIONS = "stations"
    PREDATORS = "predators"
    ZOOPLANKTON = "zooplankton"
    ICE_OBSERVATIONS = "ice_observations"
    ICE_COVERAGE = "ice_coverage"


# CSV export names as delivered in the raw directory
TABLE_FILES: dict[TableKind, str] = {
    TableKind.STATIONS: "stations.csv",
    TableKind.PREDATORS: "predators.csv",
    TableKind.ZOOPLANKTON: "zooplankton.csv",
    TableKind.ICE_OBSERVATIONS: "ice_observations.csv",
    TableKind.ICE_COVERAGE: "ice_coverage.csv",
}


def read_csv_rows(path: Path) -> list[dict[str, str]]:
    """Read a CSV export into row dicts keyed by lower-cased, stripped header names.

    Empty cells become empty strings; blank lines are skipped.
    """
    rows: list[dict[str, str]] = []
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        for raw in reader:
            row = {
                (key or "").strip().lower(): (value or "").strip()
                for key, value in raw.items()
                if key is not None
            }
            if any(row.values()):
                rows.append(row)
    return rows
