"""
Application settings.

Values come from environment variables prefixed with ``AMLR_`` (or a local
``.env`` file), falling back to the defaults below.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from amlr_survey.reference.geography import DEFAULT_CRS, SURVEY_AREA_BBOX
from amlr_survey.reference.thresholds import (
    GRID_RESOLUTION_M,
    NEIGHBORHOOD_RADIUS_KM,
    STATION_CODE_PREFIX,
)


class Settings(BaseSettings):
    """Report build configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AMLR_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "amlr-survey"
    app_env: str = "development"
    debug: bool = False

    # Store layout; CSV exports are read from raw_dir, else data_dir/raw
    data_dir: Path = Path("data")
    raw_dir: Path | None = None
    api_port: int = 8000

    # Aggregation parameters
    station_prefix: str = STATION_CODE_PREFIX
    grid_resolution_m: float = Field(default=GRID_RESOLUTION_M, gt=0)
    neighborhood_radius_km: float = Field(default=NEIGHBORHOOD_RADIUS_KM, gt=0)
    projection: str = DEFAULT_CRS
    sd_ddof: int = Field(default=1, ge=0, le=1)

    # Map viewport (lat/lon)
    south: float = Field(default=SURVEY_AREA_BBOX.south, ge=-90, le=90)
    west: float = Field(default=SURVEY_AREA_BBOX.west, ge=-180, le=180)
    north: float = Field(default=SURVEY_AREA_BBOX.north, ge=-90, le=90)
    east: float = Field(default=SURVEY_AREA_BBOX.east, ge=-180, le=180)

    # Ingested tables are considered fresh for this long
    table_ttl_hours: float = Field(default=24.0, ge=0)

    @property
    def raw_path(self) -> Path:
        """Directory the CSV exports are read from."""
        return self.raw_dir if self.raw_dir is not None else self.data_dir / "raw"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
