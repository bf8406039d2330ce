"""Geographic bounds and coordinate reference systems for the survey area."""

from __future__ import annotations

from dataclasses import dataclass

# WGS84 lat/lon, as recorded on deck
GEOGRAPHIC_CRS = "EPSG:4326"

# Antarctic Polar Stereographic; units are metres
DEFAULT_CRS = "EPSG:3031"


@dataclass(frozen=True)
class BoundingBox:
    """South/west/north/east lat-lon bounding box."""

    south: float
    west: float
    north: float
    east: float

    def corners(self) -> list[tuple[float, float]]:
        """Return (lat, lon) corners, counter-clockwise from south-west."""
        return [
            (self.south, self.west),
            (self.south, self.east),
            (self.north, self.east),
            (self.north, self.west),
        ]


# South Shetland Islands, Bransfield Strait and the northern Antarctic Peninsula
SURVEY_AREA_BBOX = BoundingBox(south=-64.5, west=-63.5, north=-60.0, east=-53.0)
