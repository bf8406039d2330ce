"""Cruise survey tables: stations, predator sightings, zooplankton tows, sea ice.

Public API:
  - files: TABLE_FILES, TableKind, read_csv_rows
  - parsing: ParsedTable, parse_rows, parse_ice_type, parse_year
  - serialization: records_to_payload, payload_to_records
"""

from amlr_survey.datasources.survey.files import TABLE_FILES, TableKind, read_csv_rows
from amlr_survey.datasources.survey.parsing import (
    PARSERS,
    ParsedTable,
    parse_ice_type,
    parse_rows,
    parse_year,
)
from amlr_survey.datasources.survey.serialization import payload_to_records, records_to_payload

__all__ = [
    "PARSERS",
    "TABLE_FILES",
    "ParsedTable",
    "TableKind",
    "parse_ice_type",
    "parse_rows",
    "parse_year",
    "payload_to_records",
    "read_csv_rows",
    "records_to_payload",
]
