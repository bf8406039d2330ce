"""Modal sea-ice category around each station.

For every station, the ice observation intervals within a fixed radius are
tallied by category. The most frequent category is the station's ice mode and
its share of the intervals is the agreement fraction.

Ties are broken by severity, thickest ice first (MY > FY > TH > OW), so the
result never depends on the order observations were recorded in.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from amlr_survey.analysis.projection import geodesic_km
from amlr_survey.analysis.stations import parse_station_year, unique_stations
from amlr_survey.reference.thresholds import (
    HIGHLY_MIXED_BELOW,
    NEIGHBORHOOD_RADIUS_KM,
    STATION_CODE_PREFIX,
    UNIFORM_AT_LEAST,
)
from amlr_survey.schemas import ICE_TYPE_ORDER, IceObservation, IceType, Station


class IceMixing(StrEnum):
    """Agreement class of a station's ice mode."""

    UNIFORM = "uniform"
    MIXED = "mixed"
    HIGHLY_MIXED = "highly_mixed"


@dataclass(frozen=True)
class IceModeSummary:
    """Ice mode of one station's neighborhood."""

    station: str
    year: int | None
    n_intervals: int
    mode: IceType
    mode_count: int
    counts: dict[IceType, int] = field(default_factory=dict)

    @property
    def agreement(self) -> float:
        """Share of intervals matching the mode (``mode_count / n_intervals``)."""
        return self.mode_count / self.n_intervals

    @property
    def mixing(self) -> IceMixing:
        return classify_mixing(self.agreement)


def classify_mixing(
    agreement: float,
    uniform_at_least: float = UNIFORM_AT_LEAST,
    highly_mixed_below: float = HIGHLY_MIXED_BELOW,
) -> IceMixing:
    """Classify an agreement fraction as uniform-like, mixed or highly mixed."""
    if agreement >= uniform_at_least:
        return IceMixing.UNIFORM
    if agreement < highly_mixed_below:
        return IceMixing.HIGHLY_MIXED
    return IceMixing.MIXED


def mode_of(ice_types: Iterable[IceType]) -> tuple[IceType, int] | None:
    """Most frequent category and its count; None for an empty sequence.

    Equal counts go to the thicker category.
    """
    counts = Counter(ice_types)
    if not counts:
        return None
    mode = max(counts, key=lambda t: (counts[t], ICE_TYPE_ORDER.index(t)))
    return mode, counts[mode]


def neighborhood(
    station: Station,
    observations: Iterable[IceObservation],
    radius_km: float = NEIGHBORHOOD_RADIUS_KM,
    year: int | None = None,
) -> list[IceObservation]:
    """Observations within ``radius_km`` (inclusive) of a station.

    When ``year`` is given only observations from that year qualify.
    """
    if radius_km <= 0:
        msg = f"Radius must be positive, got {radius_km}"
        raise ValueError(msg)
    return [
        obs
        for obs in observations
        if (year is None or obs.year == year)
        and geodesic_km(station.latitude, station.longitude, obs.latitude, obs.longitude)
        <= radius_km
    ]


def ice_mode(
    stations: Iterable[Station],
    observations: Iterable[IceObservation],
    radius_km: float = NEIGHBORHOOD_RADIUS_KM,
    same_year: bool = True,
    prefix: str = STATION_CODE_PREFIX,
) -> list[IceModeSummary]:
    """Summarize the ice mode of every station that has nearby observations.

    Args:
        stations: Stations to summarize; repeated codes are summarized once.
        observations: Ice observation intervals.
        radius_km: Neighborhood radius.
        same_year: Only count observations from the station's survey year
            (when its code carries one).
        prefix: Station code prefix preceding the year.

    Returns:
        One summary per station with at least one qualifying observation,
        sorted by station code. Stations with an empty neighborhood are
        left out rather than given a placeholder category.
    """
    obs_list = list(observations)
    summaries: dict[str, IceModeSummary] = {}
    for station in unique_stations(list(stations)):
        year = parse_station_year(station.code, prefix)
        nearby = neighborhood(station, obs_list, radius_km, year if same_year else None)
        result = mode_of(obs.ice_type for obs in nearby)
        if result is None:
            continue
        mode, mode_count = result
        counts = Counter(obs.ice_type for obs in nearby)
        summaries[station.code] = IceModeSummary(
            station=station.code,
            year=year,
            n_intervals=len(nearby),
            mode=mode,
            mode_count=mode_count,
            counts={t: counts[t] for t in ICE_TYPE_ORDER if counts[t]},
        )
    return [summaries[code] for code in sorted(summaries)]


def mixing_counts(summaries: Iterable[IceModeSummary]) -> dict[IceMixing, int]:
    """Number of stations in each mixing class (every class present, zero if none)."""
    tally = Counter(s.mixing for s in summaries)
    return {cls: tally.get(cls, 0) for cls in IceMixing}
