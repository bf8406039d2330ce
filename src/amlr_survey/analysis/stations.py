"""Station code handling: survey year extraction and de-duplication."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

from amlr_survey.reference.thresholds import STATION_CODE_PREFIX

if TYPE_CHECKING:
    from amlr_survey.schemas import Station


@lru_cache(maxsize=16)
def _year_pattern(prefix: str) -> re.Pattern[str]:
    # Exactly four digits: a fifth digit right after means the code is malformed.
    return re.compile(re.escape(prefix) + r"(\d{4})(?!\d)")


def parse_station_year(code: object, prefix: str = STATION_CODE_PREFIX) -> int | None:
    """Extract the survey year embedded in a station code.

    The year is the run of exactly four digits directly following the first
    occurrence of ``prefix`` (``"AMLR2015-01"`` -> 2015).

    Returns:
        The year, or None if the code is not a string or does not match.
    """
    if not isinstance(code, str) or not prefix:
        return None
    match = _year_pattern(prefix).search(code.strip())
    if match is None:
        return None
    return int(match.group(1))


def unique_stations(stations: list[Station]) -> list[Station]:
    """Drop repeated station codes, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Station] = []
    for station in stations:
        if station.code in seen:
            continue
        seen.add(station.code)
        unique.append(station)
    return unique


def stations_by_year(
    stations: list[Station], prefix: str = STATION_CODE_PREFIX
) -> tuple[dict[int, list[Station]], list[Station]]:
    """Group distinct stations by survey year.

    Returns:
        (year -> stations, stations whose code carries no parseable year).
    """
    by_year: dict[int, list[Station]] = {}
    undated: list[Station] = []
    for station in unique_stations(stations):
        year = parse_station_year(station.code, prefix)
        if year is None:
            undated.append(station)
        else:
            by_year.setdefault(year, []).append(station)
    return dict(sorted(by_year.items())), undated
