"""
Prefect flow for ingesting the cruise CSV exports into the table store.

Each CSV in the raw directory is validated row by row and written to
``tables/{name}.json``; the CSV itself is kept in ``raw/`` with sidecar
metadata. Tables that are still fresh are skipped.

Run locally:
    python -m amlr_survey.flows.ingest
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from prefect import flow, task

from amlr_survey.config import get_settings
from amlr_survey.datasources.survey import (
    TABLE_FILES,
    ParsedTable,
    TableKind,
    parse_rows,
    read_csv_rows,
    records_to_payload,
)
from amlr_survey.store import DataStore

# Data store override; None means the store under Settings.data_dir
store: DataStore | None = None


def get_store() -> DataStore:
    """Data store with tiered directories."""
    return store if store is not None else DataStore(get_settings().data_dir)


def table_path(kind: TableKind) -> Path:
    """Store path of an ingested table."""
    return Path("tables") / f"{kind.value}.json"


@task(name="read-table")
def read_table(kind: TableKind, raw_dir: Path) -> ParsedTable | None:
    """Read and validate one CSV export; None if the file is missing."""
    csv_path = raw_dir / TABLE_FILES[kind]
    if not csv_path.exists():
        return None
    return parse_rows(kind, read_csv_rows(csv_path))


@task(name="archive-export")
def archive_export(csv_path: Path, filename: str) -> Path:
    """Keep the CSV as delivered in the raw tier, with sidecar metadata."""
    return get_store().write_file(Path("raw") / filename, csv_path, source=str(csv_path))


@task(name="save-table")
def save_table(table: ParsedTable, source: str, ttl_hours: float = 24.0) -> Path:
    """Save validated records via store."""
    return get_store().write(
        table_path(table.kind),
        records_to_payload(table.records),
        source=source,
        valid_until=datetime.now(UTC) + timedelta(hours=ttl_hours),
        rows=len(table.records),
        rejected=table.rejected,
    )


@flow(name="ingest-tables", log_prints=True)
def ingest_all(
    raw_dir: Path | None = None,
    ttl_hours: float = 24.0,
    force: bool = False,
) -> dict[str, Any]:
    """
    Ingest all survey tables.

    This is the main Prefect flow that loads the report inputs.
    Checks freshness before reading: skips tables that are still valid
    unless ``force`` is set.
    """
    ds = get_store()
    if raw_dir is None:
        raw_dir = get_settings().raw_dir or ds.raw
    results: dict[str, Any] = {}

    for kind, filename in TABLE_FILES.items():
        path = table_path(kind)
        if not force and ds.is_fresh(path):
            print(f"{kind.value} table is fresh, skipping.")
            results[kind.value] = ds.read_meta(path).get("rows", 0)
            continue

        table = read_table(kind, raw_dir)
        if table is None:
            print(f"Warning: {raw_dir / filename} not found. Skipping {kind.value}.")
            results[kind.value] = 0
            continue

        if table.rejected:
            print(f"Warning: rejected {table.rejected} invalid rows in {filename}.")
        archive_export(raw_dir / filename, filename)
        output_path = save_table(table, source=str(raw_dir / filename), ttl_hours=ttl_hours)
        print(f"Saved {len(table.records)} {kind.value} records to {output_path}")
        results[kind.value] = len(table.records)

    return results


if __name__ == "__main__":
    result = ingest_all()
    print(f"Flow complete: {result}")
