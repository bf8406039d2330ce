"""
Tests for the build flow module.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from amlr_survey.config import Settings, get_settings
from amlr_survey.datasources.survey import TableKind
from amlr_survey.flows import build, ingest
from amlr_survey.schemas import IceObservation, IceType, PredatorSighting, Station
from amlr_survey.store import DataStore

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


def write_envelope(base_dir: Path, path: str, data: object, source: str = "test") -> None:
    """Write test data in the metadata envelope format."""
    full = base_dir / path
    full.parent.mkdir(parents=True, exist_ok=True)
    envelope = {
        "meta": {"source": source, "fetched_at": "2026-02-04T12:00:00+00:00"},
        "data": data,
    }
    full.write_text(json.dumps(envelope))


STATIONS = [
    {"code": "AMLR2015-01", "latitude": -62.0, "longitude": -58.0, "survey_nmi": 10.0},
    {"code": "AMLR2015-02", "latitude": -62.05, "longitude": -58.05, "survey_nmi": 20.0},
    {"code": "AMLR2016-01", "latitude": -61.0, "longitude": -56.0, "survey_nmi": 40.0},
]

ICE_OBSERVATIONS = [
    {"latitude": -62.0, "longitude": -58.0, "ice_type": "MY", "year": 2015, "station": None},
    {"latitude": -62.0, "longitude": -58.0, "ice_type": "MY", "year": 2015, "station": None},
    {"latitude": -62.0, "longitude": -58.0, "ice_type": "FY", "year": 2015, "station": None},
]

PREDATORS = [
    {"species": "ADPE", "latitude": -62.0, "longitude": -58.0, "count": 4, "year": 2015},
    {"species": "CAPE", "latitude": -61.0, "longitude": -56.0, "count": 2, "year": 2016},
    {"species": "EMPE", "latitude": -80.0, "longitude": -58.0, "count": 1, "year": 2016},
]

TOWS = [
    {
        "station": "AMLR2015-01",
        "latitude": -62.0,
        "longitude": -58.0,
        "diel_period": "night",
        "year": 2015,
        "count": 1.0,
    },
]

COVERAGE = [
    {"station": "AMLR2015-01", "ice_type": "MY", "coverage": 0.6},
    {"station": "AMLR2015-01", "ice_type": "FY", "coverage": 0.4},
    {"station": "AMLR2015-02", "ice_type": "OW", "coverage": 1.0},
]


@pytest.fixture
def ds(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> DataStore:
    store = DataStore(tmp_path)
    monkeypatch.setattr(build, "store", store)
    return store


def write_all_tables(base_dir: Path) -> None:
    write_envelope(base_dir, "tables/stations.json", STATIONS)
    write_envelope(base_dir, "tables/ice_observations.json", ICE_OBSERVATIONS)
    write_envelope(base_dir, "tables/predators.json", PREDATORS)
    write_envelope(base_dir, "tables/zooplankton.json", TOWS)
    write_envelope(base_dir, "tables/ice_coverage.json", COVERAGE)


class TestLoadTable:
    """Test loading ingested tables."""

    def test_load_existing(self, tmp_path: Path, ds: DataStore) -> None:
        write_envelope(tmp_path, "tables/stations.json", STATIONS)
        stations = build.load_table(TableKind.STATIONS)
        assert all(isinstance(s, Station) for s in stations)
        assert [s.code for s in stations] == ["AMLR2015-01", "AMLR2015-02", "AMLR2016-01"]

    def test_load_typed_categories(self, tmp_path: Path, ds: DataStore) -> None:
        write_envelope(tmp_path, "tables/ice_observations.json", ICE_OBSERVATIONS)
        observations = build.load_table(TableKind.ICE_OBSERVATIONS)
        assert isinstance(observations[0], IceObservation)
        assert observations[0].ice_type is IceType.MULTI_YEAR

    def test_load_missing(self, ds: DataStore) -> None:
        assert build.load_table(TableKind.PREDATORS) == []


class TestBuildGrid:
    """Test the shared raster grid."""

    def test_grid_snapped_to_resolution(self) -> None:
        _projector, grid = build.build_grid(Settings())
        assert grid.resolution == 25_000.0
        assert grid.extent.xmin % 25_000.0 == 0
        assert grid.extent.ymax % 25_000.0 == 0
        assert grid.n_cols > 0
        assert grid.n_rows > 0

    def test_survey_area_inside_grid(self) -> None:
        projector, grid = build.build_grid(Settings())
        x, y = projector.forward(-62.0, -58.0)
        assert grid.cell_for(x, y) is not None


class TestRasterizeTasks:
    """Test predator and tow rasterization tasks."""

    def test_predators_by_species_and_year(self) -> None:
        projector, grid = build.build_grid(Settings())
        sightings = [PredatorSighting.model_validate(p) for p in PREDATORS]
        layer = build.rasterize_predators(sightings, projector, grid)

        assert layer.categories() == ["ADPE", "CAPE"]
        assert layer.years() == [2015, 2016]
        assert layer.total() == 6.0
        assert layer.dropped == 1


class TestWriteReport:
    """Test writing the HTML report."""

    def test_write_report(self, ds: DataStore) -> None:
        html_content = "<html><body>Test</body></html>"
        result = build.write_report(html_content)

        assert result == ds.derived / "report" / "index.html"
        assert result.read_text() == html_content


class TestBuildAllFlow:
    """Test the main build flow."""

    def test_build_all_no_stations(self, ds: DataStore) -> None:
        """Test flow when no station table exists."""
        result = build.build_all()
        assert result == {"error": "no data"}

    def test_build_all_stations_only(self, tmp_path: Path, ds: DataStore) -> None:
        """Test flow with stations and no other tables."""
        write_envelope(tmp_path, "tables/stations.json", STATIONS)

        result = build.build_all()

        assert result["pages"] == 1
        assert result["stations"] == 3
        assert result["ice_mode_stations"] == 0
        html_content = (ds.derived / "report" / "index.html").read_text()
        assert "No predator sightings available." in html_content
        assert "No stations with ice observations nearby." in html_content

    def test_build_all_with_all_data(self, tmp_path: Path, ds: DataStore) -> None:
        """Test flow with every table present."""
        write_all_tables(tmp_path)

        result = build.build_all()

        assert result["pages"] == 1
        assert result["stations"] == 3
        # Both 2015 stations lie within 15 km of the observations; 2016 is another survey
        assert result["ice_mode_stations"] == 2
        assert len(result["summaries"]) == 4

        html_content = (ds.derived / "report" / "index.html").read_text()
        assert "Survey Effort and Ice Composition" in html_content
        assert "Station Ice Mode" in html_content
        assert "ADPE" in html_content
        assert "Zooplankton Tows" in html_content
        assert 'L.map("predator-map")' in html_content

    def test_build_all_summaries(self, tmp_path: Path, ds: DataStore) -> None:
        """Test the derived JSON summaries."""
        write_all_tables(tmp_path)
        build.build_all()

        effort = ds.read(build.SUMMARY_DIR / "effort.json")
        assert [row["year"] for row in effort["years"]] == [2015, 2016]
        year_2015 = effort["years"][0]
        assert year_2015["effort_nmi"] == {"value": 15.0, "spread": 7.07}
        assert year_2015["ice"]["MY"]["fraction"]["value"] == 0.3
        assert effort["years"][1]["ice"]["MY"]["fraction"] == {"value": None, "spread": None}
        assert effort["total"]["label"] == "Total"
        assert effort["total"]["n_stations"] == 3

        modes = ds.read(build.SUMMARY_DIR / "ice_mode.json")
        assert modes[0]["station"] == "AMLR2015-01"
        assert modes[0]["mode"] == "MY"
        assert modes[0]["mode_count"] == 2
        assert modes[0]["agreement"] == 0.6667
        assert modes[0]["mixing"] == "mixed"

        predator_grid = ds.read(build.SUMMARY_DIR / "predator_grid.json")
        assert predator_grid["resolution"] == 25_000.0
        assert predator_grid["dropped"] == 1
        assert {c["category"] for c in predator_grid["cells"]} == {"ADPE", "CAPE"}


class TestDataDirSetting:
    """Test that both flows follow Settings.data_dir."""

    @pytest.fixture
    def data_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
        data_dir = tmp_path / "elsewhere"
        monkeypatch.setenv("AMLR_DATA_DIR", str(data_dir))
        monkeypatch.delenv("AMLR_RAW_DIR", raising=False)
        monkeypatch.setattr(ingest, "store", None)
        monkeypatch.setattr(build, "store", None)
        get_settings.cache_clear()
        yield data_dir
        get_settings.cache_clear()

    def test_store_under_data_dir(self, data_dir: Path) -> None:
        assert ingest.get_store().base == data_dir
        assert build.get_store().base == data_dir
        assert build.report_dir() == data_dir / "derived" / "report"

    def test_tables_and_report_move(self, data_dir: Path) -> None:
        """Test ingest then build write only below the configured data directory."""
        raw = data_dir / "raw"
        raw.mkdir(parents=True)
        (raw / "stations.csv").write_text(
            "station,latitude,longitude,survey_nmi\nAMLR2015-01,-62.0,-58.0,10\n"
        )

        assert ingest.ingest_all()["stations"] == 1
        assert (data_dir / "tables" / "stations.json").exists()

        result = build.build_all()
        assert result["output"] == str(data_dir / "derived" / "report" / "index.html")
        assert (data_dir / "derived" / "summaries" / "effort.json").exists()
