"""Tests for station code handling."""

from __future__ import annotations

import pytest

from amlr_survey.analysis.stations import parse_station_year, stations_by_year, unique_stations
from amlr_survey.schemas import Station


def _station(code: str, nmi: float | None = None) -> Station:
    return Station(code=code, latitude=-62.0, longitude=-58.0, survey_nmi=nmi)


class TestParseStationYear:
    """Test parse_station_year."""

    @pytest.mark.parametrize(
        ("code", "year"),
        [
            ("AMLR2015-01", 2015),
            ("AMLR2012_A3", 2012),
            ("AMLR2019", 2019),
            ("W-AMLR2016-07", 2016),
            ("  AMLR2014-02 ", 2014),
        ],
    )
    def test_valid_codes(self, code: str, year: int) -> None:
        """Test codes with a four-digit year right after the prefix."""
        assert parse_station_year(code) == year

    @pytest.mark.parametrize(
        "code",
        ["", "2015-01", "AMLR15-01", "AMLR20155-01", "AMLR-2015-01", "amlr2015-01", "XYZ2015"],
    )
    def test_invalid_codes(self, code: str) -> None:
        """Test that codes without a well-formed year give None."""
        assert parse_station_year(code) is None

    def test_non_string(self) -> None:
        """Test that a missing code gives None instead of raising."""
        assert parse_station_year(None) is None
        assert parse_station_year(2015) is None

    def test_custom_prefix(self) -> None:
        """Test a different station prefix."""
        assert parse_station_year("KRILL2017-3", prefix="KRILL") == 2017
        assert parse_station_year("AMLR2017-3", prefix="KRILL") is None


class TestUniqueStations:
    """Test station de-duplication."""

    def test_first_occurrence_wins(self) -> None:
        """Test that repeated codes keep the first record."""
        stations = [_station("AMLR2015-01", 10.0), _station("AMLR2015-01", 99.0)]
        result = unique_stations(stations)
        assert len(result) == 1
        assert result[0].survey_nmi == 10.0


class TestStationsByYear:
    """Test grouping stations by survey year."""

    def test_groups_and_undated(self) -> None:
        """Test that undated codes are returned separately."""
        stations = [
            _station("AMLR2016-01"),
            _station("AMLR2015-01"),
            _station("BAD-01"),
            _station("AMLR2015-02"),
        ]
        by_year, undated = stations_by_year(stations)
        assert list(by_year) == [2015, 2016]
        assert [s.code for s in by_year[2015]] == ["AMLR2015-01", "AMLR2015-02"]
        assert [s.code for s in undated] == ["BAD-01"]
