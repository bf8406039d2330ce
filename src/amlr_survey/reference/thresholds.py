"""Report-level constants for aggregation and classification."""

# Station codes embed the survey year right after this prefix, e.g. AMLR2015-01.
STATION_CODE_PREFIX: str = "AMLR"

# Edge length of a raster cell, in projected metres.
GRID_RESOLUTION_M: float = 25_000.0

# Ice observations within this distance of a station count toward its ice mode.
NEIGHBORHOOD_RADIUS_KM: float = 15.0

# Agreement fraction classes for the station ice mode.
# A station is "uniform-like" at or above the first and "highly mixed" below the second.
UNIFORM_AT_LEAST: float = 0.90
HIGHLY_MIXED_BELOW: float = 0.50
