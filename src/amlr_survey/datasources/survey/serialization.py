"""JSON serialization of survey records for the table store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from amlr_survey.datasources.survey.files import TableKind
from amlr_survey.schemas import (
    IceCoverage,
    IceObservation,
    PredatorSighting,
    Station,
    ZooplanktonTow,
)

if TYPE_CHECKING:
    from pydantic import BaseModel

RECORD_MODELS: dict[TableKind, type[BaseModel]] = {
    TableKind.STATIONS: Station,
    TableKind.PREDATORS: PredatorSighting,
    TableKind.ZOOPLANKTON: ZooplanktonTow,
    TableKind.ICE_OBSERVATIONS: IceObservation,
    TableKind.ICE_COVERAGE: IceCoverage,
}


def records_to_payload(records: list[BaseModel]) -> list[dict[str, Any]]:
    """Serialize records to JSON-compatible dicts (enums as their codes)."""
    return [record.model_dump(mode="json") for record in records]


def payload_to_records(kind: TableKind, payload: list[dict[str, Any]] | None) -> list[Any]:
    """Rebuild records of a table from a stored payload.

    The payload was validated on ingest, so a malformed entry here means the
    store was edited by hand; pydantic's ValidationError propagates.
    """
    if not payload:
        return []
    model = RECORD_MODELS[kind]
    return [model.model_validate(item) for item in payload]
