"""Tests for station ice-mode summarization."""

from __future__ import annotations

import pytest

from amlr_survey.analysis.ice_mode import (
    IceMixing,
    classify_mixing,
    ice_mode,
    mixing_counts,
    mode_of,
    neighborhood,
)
from amlr_survey.schemas import IceObservation, IceType, Station

MY, FY, TH, OW = IceType.MULTI_YEAR, IceType.FIRST_YEAR, IceType.THIN, IceType.OPEN_WATER

STATION = Station(code="AMLR2015-01", latitude=-62.0, longitude=-58.0)


def _obs(ice_type: IceType, dlat: float = 0.0, year: int = 2015) -> IceObservation:
    """Ice observation offset north of STATION by ``dlat`` degrees (0.1 deg ~ 11 km)."""
    return IceObservation(latitude=-62.0 + dlat, longitude=-58.0, ice_type=ice_type, year=year)


class TestModeOf:
    """Test mode_of."""

    def test_simple_mode(self) -> None:
        """Test the most frequent category wins."""
        assert mode_of([MY, MY, FY]) == (MY, 2)

    def test_empty(self) -> None:
        """Test that an empty sequence has no mode."""
        assert mode_of([]) is None

    @pytest.mark.parametrize(
        ("types", "expected"),
        [
            ([FY, MY], MY),
            ([MY, FY], MY),
            ([OW, TH], TH),
            ([TH, OW, FY, OW, TH, FY], FY),
            ([OW, OW, MY, MY, TH, TH], MY),
        ],
    )
    def test_ties_go_to_thicker_ice(self, types: list[IceType], expected: IceType) -> None:
        """Test that ties are broken by severity, not by input order."""
        mode, _count = mode_of(types)  # type: ignore[misc]
        assert mode == expected


class TestClassifyMixing:
    """Test agreement classes."""

    @pytest.mark.parametrize(
        ("agreement", "expected"),
        [
            (1.0, IceMixing.UNIFORM),
            (0.90, IceMixing.UNIFORM),
            (0.899, IceMixing.MIXED),
            (2 / 3, IceMixing.MIXED),
            (0.50, IceMixing.MIXED),
            (0.499, IceMixing.HIGHLY_MIXED),
            (0.25, IceMixing.HIGHLY_MIXED),
        ],
    )
    def test_thresholds(self, agreement: float, expected: IceMixing) -> None:
        """Test >= 0.90 uniform, < 0.50 highly mixed."""
        assert classify_mixing(agreement) == expected


class TestNeighborhood:
    """Test neighborhood selection."""

    def test_radius(self) -> None:
        """Test that only observations within the radius qualify."""
        near = _obs(MY, dlat=0.05)  # ~5.6 km
        far = _obs(MY, dlat=0.2)  # ~22 km
        assert neighborhood(STATION, [near, far], radius_km=15.0) == [near]

    def test_year_filter(self) -> None:
        """Test that a year restricts the neighborhood."""
        obs = [_obs(MY), _obs(FY, year=2016)]
        assert neighborhood(STATION, obs, year=2016) == [obs[1]]

    def test_non_positive_radius(self) -> None:
        """Test that the radius must be positive."""
        with pytest.raises(ValueError, match="Radius"):
            neighborhood(STATION, [], radius_km=0.0)


class TestIceMode:
    """Test ice_mode."""

    def test_agreement_fraction(self) -> None:
        """Test {MY, MY, FY} -> MY with agreement 2/3, classified mixed."""
        summaries = ice_mode([STATION], [_obs(MY), _obs(MY, dlat=0.01), _obs(FY, dlat=-0.01)])
        assert len(summaries) == 1
        s = summaries[0]
        assert s.station == "AMLR2015-01"
        assert s.year == 2015
        assert s.n_intervals == 3
        assert s.mode == MY
        assert s.mode_count == 2
        assert s.agreement == pytest.approx(2 / 3)
        assert s.mixing == IceMixing.MIXED
        assert s.counts == {FY: 1, MY: 2}

    def test_agreement_is_max_over_n(self) -> None:
        """Test agreement = max(a, b, c) / N."""
        obs = [_obs(OW)] * 2 + [_obs(TH)] * 5 + [_obs(FY)] * 3
        s = ice_mode([STATION], obs)[0]
        assert s.mode == TH
        assert s.agreement == pytest.approx(5 / 10)

    def test_empty_neighborhood_excluded(self) -> None:
        """Test that a station without nearby observations is left out."""
        lonely = Station(code="AMLR2015-02", latitude=-64.0, longitude=-55.0)
        summaries = ice_mode([STATION, lonely], [_obs(MY)])
        assert [s.station for s in summaries] == ["AMLR2015-01"]

    def test_same_year_only(self) -> None:
        """Test that observations from other years are ignored by default."""
        obs = [_obs(MY, year=2016), _obs(MY, year=2016)]
        assert ice_mode([STATION], obs) == []
        assert ice_mode([STATION], obs, same_year=False)[0].n_intervals == 2

    def test_undated_station_uses_all_years(self) -> None:
        """Test that a code without a year matches observations of any year."""
        undated = Station(code="TEST-01", latitude=-62.0, longitude=-58.0)
        summaries = ice_mode([undated], [_obs(FY, year=2014), _obs(FY, year=2016)])
        assert summaries[0].year is None
        assert summaries[0].n_intervals == 2

    def test_sorted_and_deduplicated(self) -> None:
        """Test output sorted by station code, repeated codes summarized once."""
        other = Station(code="AMLR2015-00", latitude=-62.0, longitude=-58.0)
        summaries = ice_mode([STATION, other, STATION], [_obs(OW)])
        assert [s.station for s in summaries] == ["AMLR2015-00", "AMLR2015-01"]

    def test_uniform_station(self) -> None:
        """Test an all-multi-year neighborhood."""
        s = ice_mode([STATION], [_obs(MY)] * 10)[0]
        assert s.agreement == 1.0
        assert s.mixing == IceMixing.UNIFORM


class TestMixingCounts:
    """Test the mixing-class tally."""

    def test_every_class_present(self) -> None:
        """Test that classes without stations are reported as zero."""
        summaries = ice_mode([STATION], [_obs(MY)])
        assert mixing_counts(summaries) == {
            IceMixing.UNIFORM: 1,
            IceMixing.MIXED: 0,
            IceMixing.HIGHLY_MIXED: 0,
        }
