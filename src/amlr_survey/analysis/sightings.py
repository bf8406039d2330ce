"""Per-year totals of predator sightings and zooplankton tows."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from amlr_survey.schemas import DielPeriod, PredatorSighting, ZooplanktonTow


@dataclass(frozen=True)
class SpeciesYearTotal:
    """Summed predator count of one species in one survey year."""

    species: str
    year: int
    total: float
    sightings: int


def summarize_predators(sightings: Iterable[PredatorSighting]) -> list[SpeciesYearTotal]:
    """Total count and number of sighting records per (species, year).

    Sorted by year, then by descending total, then by species code.
    """
    totals: dict[tuple[str, int], float] = {}
    records: dict[tuple[str, int], int] = {}
    for s in sightings:
        key = (s.species, s.year)
        totals[key] = totals.get(key, 0.0) + s.count
        records[key] = records.get(key, 0) + 1

    rows = [
        SpeciesYearTotal(species=species, year=year, total=total, sightings=records[(species, year)])
        for (species, year), total in totals.items()
    ]
    return sorted(rows, key=lambda r: (r.year, -r.total, r.species))


def summarize_tows(tows: Iterable[ZooplanktonTow]) -> dict[int, dict[DielPeriod, int]]:
    """Number of tows per year and diel period.

    Years with at least one tow list every diel period (zero where none was
    taken); years without tows are absent.
    """
    by_year: dict[int, dict[DielPeriod, int]] = {}
    for tow in tows:
        row = by_year.setdefault(tow.year, dict.fromkeys(DielPeriod, 0))
        row[tow.diel_period] += 1
    return dict(sorted(by_year.items()))
