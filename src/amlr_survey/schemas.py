"""
Domain models for the survey report.

Pydantic models for the input tables. These define the canonical schema -
the table parsers normalize CSV rows to these, and analysis code reads them.
All records are frozen: once loaded they are never modified.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Categories
# =============================================================================


class IceType(StrEnum):
    """Sea-ice category recorded along a transect."""

    OPEN_WATER = "OW"
    THIN = "TH"
    FIRST_YEAR = "FY"
    MULTI_YEAR = "MY"

    @property
    def label(self) -> str:
        return ICE_TYPE_LABELS[self]

    @property
    def severity(self) -> int:
        """Position in the thinnest-to-thickest order (0 = open water)."""
        return ICE_TYPE_ORDER.index(self)


# Thinnest to thickest. Stacked displays use this order (or its reverse).
ICE_TYPE_ORDER: tuple[IceType, ...] = (
    IceType.OPEN_WATER,
    IceType.THIN,
    IceType.FIRST_YEAR,
    IceType.MULTI_YEAR,
)

ICE_TYPE_LABELS: dict[IceType, str] = {
    IceType.OPEN_WATER: "Open water",
    IceType.THIN: "Thin ice",
    IceType.FIRST_YEAR: "First-year ice",
    IceType.MULTI_YEAR: "Multi-year ice",
}


class DielPeriod(StrEnum):
    """Time of day a zooplankton tow was taken."""

    DAY = "day"
    NIGHT = "night"
    TWILIGHT = "twilight"


# =============================================================================
# Input records
# =============================================================================


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class Station(_Record):
    """A survey station; the code embeds the survey year (e.g. ``AMLR2015-01``)."""

    code: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    survey_nmi: float | None = Field(default=None, ge=0, description="Transect length")


class PredatorSighting(_Record):
    """Aggregated predator count for one species at one location."""

    species: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    count: float = Field(..., ge=0)
    year: int
    station: str | None = None


class ZooplanktonTow(_Record):
    """A single net tow."""

    station: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    diel_period: DielPeriod
    year: int
    count: float = Field(default=1.0, ge=0)


class IceObservation(_Record):
    """Ice category of one observation interval along a transect."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    ice_type: IceType
    year: int
    station: str | None = None


class IceCoverage(_Record):
    """Fraction of a station's transect covered by one ice category."""

    station: str = Field(..., min_length=1)
    ice_type: IceType
    coverage: float = Field(..., ge=0, le=1)
