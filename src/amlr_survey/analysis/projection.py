"""Map projection and geodesic distance helpers (pyproj).

Survey positions are recorded as WGS84 lat/lon. Rasterization works in a
planar CRS (Antarctic Polar Stereographic by default) so that grid cells are
squares of a fixed size in metres.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pyproj import Geod, Transformer

from amlr_survey.reference.geography import DEFAULT_CRS, GEOGRAPHIC_CRS

if TYPE_CHECKING:
    from amlr_survey.reference.geography import BoundingBox

_WGS84 = Geod(ellps="WGS84")


class Projector:
    """Forward/inverse transform between lat/lon and a projected CRS."""

    def __init__(self, crs_to: str = DEFAULT_CRS, crs_from: str = GEOGRAPHIC_CRS) -> None:
        self.crs_from = crs_from
        self.crs_to = crs_to
        self._forward = Transformer.from_crs(crs_from, crs_to, always_xy=True)
        self._inverse = Transformer.from_crs(crs_to, crs_from, always_xy=True)

    def forward(self, lat: float, lon: float) -> tuple[float, float]:
        """Project a lat/lon point to (x, y)."""
        x, y = self._forward.transform(lon, lat)
        return float(x), float(y)

    def inverse(self, x: float, y: float) -> tuple[float, float]:
        """Unproject (x, y) back to (lat, lon)."""
        lon, lat = self._inverse.transform(x, y)
        return float(lat), float(lon)

    def forward_many(
        self, lats: list[float], lons: list[float]
    ) -> list[tuple[float, float]]:
        """Project paired lists of latitudes and longitudes."""
        if len(lats) != len(lons):
            msg = f"Got {len(lats)} latitudes but {len(lons)} longitudes"
            raise ValueError(msg)
        return [self.forward(lat, lon) for lat, lon in zip(lats, lons, strict=True)]


@dataclass(frozen=True)
class MapExtent:
    """Axis-aligned rectangle in projected units."""

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self) -> None:
        if not (self.xmin < self.xmax and self.ymin < self.ymax):
            msg = f"Degenerate extent: {self}"
            raise ValueError(msg)

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def snapped(self, resolution: float) -> MapExtent:
        """Grow the extent outward to the nearest multiples of ``resolution``."""
        if resolution <= 0:
            msg = f"Resolution must be positive, got {resolution}"
            raise ValueError(msg)
        return MapExtent(
            xmin=math.floor(self.xmin / resolution) * resolution,
            ymin=math.floor(self.ymin / resolution) * resolution,
            xmax=math.ceil(self.xmax / resolution) * resolution,
            ymax=math.ceil(self.ymax / resolution) * resolution,
        )

    @classmethod
    def from_bbox(
        cls,
        bbox: BoundingBox,
        projector: Projector,
        resolution: float | None = None,
        samples_per_edge: int = 16,
    ) -> MapExtent:
        """Projected envelope of a lat/lon bounding box.

        Meridians and parallels are curved in a polar projection, so each edge
        of the box is sampled rather than projecting only the corners.
        """
        points: list[tuple[float, float]] = []
        for i in range(samples_per_edge + 1):
            t = i / samples_per_edge
            lat = bbox.south + t * (bbox.north - bbox.south)
            lon = bbox.west + t * (bbox.east - bbox.west)
            points.extend(
                [
                    projector.forward(bbox.south, lon),
                    projector.forward(bbox.north, lon),
                    projector.forward(lat, bbox.west),
                    projector.forward(lat, bbox.east),
                ]
            )
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        extent = cls(xmin=min(xs), ymin=min(ys), xmax=max(xs), ymax=max(ys))
        return extent.snapped(resolution) if resolution else extent


def geodesic_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance between two points on the WGS84 ellipsoid, in kilometres."""
    _az12, _az21, dist_m = _WGS84.inv(lon1, lat1, lon2, lat2)
    return float(dist_m) / 1000.0
