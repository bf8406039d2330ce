"""Row parsing: CSV row dicts -> validated schema records."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from amlr_survey.datasources.survey.files import TableKind
from amlr_survey.schemas import (
    DielPeriod,
    IceCoverage,
    IceObservation,
    IceType,
    PredatorSighting,
    Station,
    ZooplanktonTow,
)

# =============================================================================
# Field helpers
# =============================================================================

_ICE_TYPE_ALIASES: dict[str, IceType] = {
    "ow": IceType.OPEN_WATER,
    "open": IceType.OPEN_WATER,
    "open water": IceType.OPEN_WATER,
    "open_water": IceType.OPEN_WATER,
    "th": IceType.THIN,
    "thin": IceType.THIN,
    "thin ice": IceType.THIN,
    "fy": IceType.FIRST_YEAR,
    "first-year": IceType.FIRST_YEAR,
    "first year": IceType.FIRST_YEAR,
    "first_year": IceType.FIRST_YEAR,
    "my": IceType.MULTI_YEAR,
    "multi-year": IceType.MULTI_YEAR,
    "multi year": IceType.MULTI_YEAR,
    "multi_year": IceType.MULTI_YEAR,
}

_DATE_COLUMNS = ("date", "datetime", "date_time", "time")


def parse_ice_type(value: str | None) -> IceType | None:
    """Map a recorded ice category (code or name, any case) to an IceType."""
    if not value:
        return None
    text = value.strip().lower()
    if text.endswith(" ice") and text not in _ICE_TYPE_ALIASES:
        text = text[: -len(" ice")]
    return _ICE_TYPE_ALIASES.get(text)


def parse_year(row: dict[str, str]) -> int | None:
    """Year of a record: the ``year`` column, else the year of its timestamp column."""
    year_text = row.get("year", "")
    if year_text:
        try:
            return int(float(year_text))
        except (ValueError, OverflowError):
            return None

    for column in _DATE_COLUMNS:
        stamp = row.get(column, "")
        if not stamp:
            continue
        try:
            return datetime.fromisoformat(stamp).year
        except ValueError:
            pass
        try:
            return date.fromisoformat(stamp[:10]).year
        except ValueError:
            return None
    return None


def _optional(value: str | None) -> str | None:
    return value or None


def _validate(model: type[BaseModel], **fields: Any) -> Any:
    try:
        return model(**fields)
    except ValidationError:
        return None


# =============================================================================
# Per-table parsers (return None when a row is unusable)
# =============================================================================


def _parse_station(row: dict[str, str]) -> Station | None:
    return _validate(
        Station,
        code=row.get("station") or row.get("code", ""),
        latitude=row.get("latitude", ""),
        longitude=row.get("longitude", ""),
        survey_nmi=_optional(row.get("survey_nmi")),
    )


def _parse_predator(row: dict[str, str]) -> PredatorSighting | None:
    year = parse_year(row)
    if year is None:
        return None
    return _validate(
        PredatorSighting,
        species=row.get("species", ""),
        latitude=row.get("latitude", ""),
        longitude=row.get("longitude", ""),
        count=row.get("count", ""),
        year=year,
        station=_optional(row.get("station")),
    )


def _parse_tow(row: dict[str, str]) -> ZooplanktonTow | None:
    year = parse_year(row)
    period_text = (row.get("diel_period") or row.get("time_of_day") or "").lower()
    if year is None or period_text not in {p.value for p in DielPeriod}:
        return None
    fields: dict[str, Any] = {
        "station": row.get("station", ""),
        "latitude": row.get("latitude", ""),
        "longitude": row.get("longitude", ""),
        "diel_period": period_text,
        "year": year,
    }
    if row.get("count"):
        fields["count"] = row["count"]
    return _validate(ZooplanktonTow, **fields)


def _parse_ice_observation(row: dict[str, str]) -> IceObservation | None:
    year = parse_year(row)
    ice_type = parse_ice_type(row.get("ice_type"))
    if year is None or ice_type is None:
        return None
    return _validate(
        IceObservation,
        latitude=row.get("latitude", ""),
        longitude=row.get("longitude", ""),
        ice_type=ice_type,
        year=year,
        station=_optional(row.get("station")),
    )


def _parse_ice_coverage(row: dict[str, str]) -> IceCoverage | None:
    ice_type = parse_ice_type(row.get("ice_type"))
    if ice_type is None:
        return None
    return _validate(
        IceCoverage,
        station=row.get("station", ""),
        ice_type=ice_type,
        coverage=row.get("coverage", ""),
    )


PARSERS: dict[TableKind, Callable[[dict[str, str]], BaseModel | None]] = {
    TableKind.STATIONS: _parse_station,
    TableKind.PREDATORS: _parse_predator,
    TableKind.ZOOPLANKTON: _parse_tow,
    TableKind.ICE_OBSERVATIONS: _parse_ice_observation,
    TableKind.ICE_COVERAGE: _parse_ice_coverage,
}


@dataclass
class ParsedTable:
    """Validated records of one table plus the number of rows that were rejected."""

    kind: TableKind
    records: list[Any] = field(default_factory=list)
    rejected: int = 0


def parse_rows(kind: TableKind, rows: list[dict[str, str]]) -> ParsedTable:
    """Parse CSV rows of a table, skipping (and counting) rows that fail validation."""
    parser = PARSERS[kind]
    table = ParsedTable(kind=kind)
    for row in rows:
        record = parser(row)
        if record is None:
            table.rejected += 1
        else:
            table.records.append(record)
    return table
