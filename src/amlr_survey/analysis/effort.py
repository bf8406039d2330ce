"""Survey effort and ice composition per year.

Produces one row per survey year plus a "Total" row. The total is computed
from the pooled station records with the same formulas as the yearly rows;
it is never an average of the yearly rows.

Ice composition uses an explicit station x category table:
  - a station with coverage records is "surveyed"; any category it has no
    record for is an observed zero,
  - a station without coverage records is absent and does not enter ``n``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from amlr_survey.analysis.stations import parse_station_year, stations_by_year, unique_stations
from amlr_survey.analysis.stats import Estimate, binomial_se, mean_or_none, mean_sd
from amlr_survey.reference.thresholds import STATION_CODE_PREFIX
from amlr_survey.schemas import ICE_TYPE_ORDER, IceCoverage, IceType, Station

TOTAL_LABEL = "Total"


@dataclass(frozen=True)
class CategoryShare:
    """Share of one ice category among the surveyed stations of a group.

    ``fraction.value`` is the mean coverage fraction and ``fraction.spread`` its
    binomial standard error; both are None when ``n`` is zero.
    """

    count: int
    n: int
    fraction: Estimate


@dataclass(frozen=True)
class EffortRow:
    """Effort and ice composition for one year (or the pooled total)."""

    label: str
    year: int | None
    n_stations: int
    n_effort: int
    effort_nmi: Estimate
    n_ice_stations: int
    ice: dict[IceType, CategoryShare] = field(default_factory=dict)


def coverage_table(coverage: Iterable[IceCoverage]) -> dict[str, dict[IceType, float]]:
    """Station -> category -> coverage fraction, with every category filled.

    Repeated (station, category) records are summed and capped at 1.
    """
    table: dict[str, dict[IceType, float]] = {}
    for record in coverage:
        row = table.setdefault(record.station, dict.fromkeys(ICE_TYPE_ORDER, 0.0))
        row[record.ice_type] = min(1.0, row[record.ice_type] + record.coverage)
    return table


def ice_shares(rows: list[dict[IceType, float]]) -> dict[IceType, CategoryShare]:
    """Mean coverage fraction and binomial SE per category over surveyed stations."""
    n = len(rows)
    shares: dict[IceType, CategoryShare] = {}
    for ice_type in ICE_TYPE_ORDER:
        values = [row[ice_type] for row in rows]
        p = mean_or_none(values)
        se = binomial_se(min(1.0, max(0.0, p)), n) if p is not None else None
        shares[ice_type] = CategoryShare(
            count=sum(1 for v in values if v > 0),
            n=n,
            fraction=Estimate(value=p, spread=se),
        )
    return shares


def _effort_row(
    label: str,
    year: int | None,
    stations: list[Station],
    ice_rows: list[dict[IceType, float]],
    ddof: int,
) -> EffortRow:
    efforts = [s.survey_nmi for s in stations if s.survey_nmi is not None]
    return EffortRow(
        label=label,
        year=year,
        n_stations=len(stations),
        n_effort=len(efforts),
        effort_nmi=mean_sd(efforts, ddof),
        n_ice_stations=len(ice_rows),
        ice=ice_shares(ice_rows),
    )


def summarize_effort(
    stations: Iterable[Station],
    coverage: Iterable[IceCoverage],
    prefix: str = STATION_CODE_PREFIX,
    ddof: int = 1,
) -> tuple[list[EffortRow], EffortRow]:
    """Per-year effort and ice composition, plus the pooled total.

    Args:
        stations: Station records; repeated codes count once (first wins).
        coverage: Per-station ice coverage records.
        prefix: Station code prefix preceding the survey year.
        ddof: 1 for the sample standard deviation of effort, 0 for population.
            The sample default reproduces the reference example (10 and 20 nmi
            give sd 7.07); pass 0 for the population convention.

    Returns:
        (rows sorted by year, total row). Records whose station code carries no
        year are left out of the yearly rows but included in the total.
    """
    distinct = unique_stations(list(stations))
    station_years, _undated = stations_by_year(distinct, prefix)
    ice_by_station = coverage_table(coverage)

    ice_years: dict[int, list[dict[IceType, float]]] = {}
    for code, row in ice_by_station.items():
        year = parse_station_year(code, prefix)
        if year is not None:
            ice_years.setdefault(year, []).append(row)

    rows = [
        _effort_row(
            str(year),
            year,
            station_years.get(year, []),
            ice_years.get(year, []),
            ddof,
        )
        for year in sorted(set(station_years) | set(ice_years))
    ]
    total = _effort_row(TOTAL_LABEL, None, distinct, list(ice_by_station.values()), ddof)
    return rows, total
