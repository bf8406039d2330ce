"""Tiered table store with freshness metadata.

Organizes the report's inputs and outputs into tiers:
  - raw/: CSV exports as delivered by the cruise data managers (never rewritten)
  - tables/: Validated input tables as JSON, refreshed when the TTL expires
  - derived/: Summaries and the rendered report, rebuilt on every build

Every JSON file is wrapped in a metadata envelope ``{"meta": ..., "data": ...}``
recording the source, the time it was written and an optional ``valid_until``
so the ingest flow can skip tables that are still fresh.

Non-JSON artifacts (copied CSVs, images) get a sidecar ``.meta.json`` via
``write_file()``.
"""

from __future__ import annotations

import json
import shutil
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import Any


class DataStore:
    """Reads and writes enveloped tables under a base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.raw = base_dir / "raw"
        self.tables = base_dir / "tables"
        self.derived = base_dir / "derived"

    def read(self, path: Path) -> Any | None:
        """Return the ``data`` payload of an enveloped JSON file, or None if missing."""
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        if isinstance(envelope, dict) and "data" in envelope:
            return envelope["data"]
        return envelope

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Return the full envelope (meta + data), or None if missing."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def read_meta(self, path: Path) -> dict[str, Any]:
        """Return the metadata of a stored file (envelope or sidecar), empty if none."""
        return self._read_meta(self._resolve(path))

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``tables/stations.json``).
            data: JSON-serializable payload stored under the ``data`` key.
            source: Where the data came from (e.g. ``"raw/stations.csv"``).
            valid_until: Expiry timestamp. None means never fresh (always rebuilt).
            **params: Extra metadata fields (row counts, parameters, ...).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        envelope = {"meta": self._meta(source, valid_until, params), "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)

        return full

    def write_file(
        self,
        path: Path,
        src: Path,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Copy a non-JSON file into the store with sidecar metadata.

        Args:
            path: Relative destination path (e.g. ``raw/stations.csv``).
            src: File to copy.
            source: Where the file came from.
            valid_until: Expiry timestamp.
            **params: Extra metadata fields.

        Returns:
            Absolute path of the stored file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        if src.resolve() != full.resolve():
            shutil.copy2(src, full)

        meta_path = full.with_suffix(full.suffix + ".meta.json")
        with meta_path.open("w") as f:
            json.dump({"meta": self._meta(source, valid_until, params)}, f, indent=2)

        return full

    def file_path(self, path: Path) -> Path | None:
        """Return the absolute path of a stored file, or None if missing."""
        full = self._resolve(path)
        return full if full.exists() else None

    def is_fresh(self, path: Path) -> bool:
        """Check if a file exists and hasn't expired.

        Returns False if the file is missing, has no ``valid_until``, or
        the expiry time has passed.
        """
        full = self._resolve(path)
        if not full.exists():
            return False

        valid_until = self._read_meta(full).get("valid_until")
        if valid_until is None:
            return False

        expiry = datetime.fromisoformat(valid_until)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return datetime.now(UTC) < expiry

    @staticmethod
    def _meta(
        source: str, valid_until: datetime | None, params: dict[str, Any]
    ) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "source": source,
            "fetched_at": datetime.now(UTC).isoformat(),
        }
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        meta.update(params)
        return meta

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    def _read_meta(self, full: Path) -> dict[str, Any]:
        sidecar = full.with_suffix(full.suffix + ".meta.json")
        if sidecar.exists():
            with sidecar.open() as f:
                result: dict[str, Any] = json.load(f)
            return result.get("meta", {})

        if full.suffix == ".json" and full.exists():
            with full.open() as f:
                envelope: dict[str, Any] = json.load(f)
            return envelope.get("meta", {})

        return {}
