"""Static survey constants.

Reference data that doesn't change between report builds: map extent,
projection, neighborhood radius, grid resolution and classification thresholds.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from amlr_survey.reference.geography import DEFAULT_CRS as DEFAULT_CRS
from amlr_survey.reference.geography import GEOGRAPHIC_CRS as GEOGRAPHIC_CRS
from amlr_survey.reference.geography import SURVEY_AREA_BBOX as SURVEY_AREA_BBOX
from amlr_survey.reference.geography import BoundingBox as BoundingBox
from amlr_survey.reference.thresholds import GRID_RESOLUTION_M as GRID_RESOLUTION_M
from amlr_survey.reference.thresholds import HIGHLY_MIXED_BELOW as HIGHLY_MIXED_BELOW
from amlr_survey.reference.thresholds import NEIGHBORHOOD_RADIUS_KM as NEIGHBORHOOD_RADIUS_KM
from amlr_survey.reference.thresholds import STATION_CODE_PREFIX as STATION_CODE_PREFIX
from amlr_survey.reference.thresholds import UNIFORM_AT_LEAST as UNIFORM_AT_LEAST
