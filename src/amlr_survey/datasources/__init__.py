"""Input table sources.

Each subdirectory is one family of input tables with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── files.py          # File names, CSV reading
    ├── parsing.py        # Row dicts -> validated schema records
    └── serialization.py  # Records <-> JSON payloads for the store

Adding a new input table
------------------------
1. Add a record model to ``schemas.py``.

2. Add a ``_parse_{name}`` function to ``parsing.py`` that returns the record
   or None for an unusable row, and register it in ``PARSERS``::

       def _parse_mooring(row: dict[str, str]) -> Mooring | None:
           ...

3. Add a ``TableKind`` member and its CSV file name to ``TABLE_FILES`` in ``files.py``,
   and the model to ``RECORD_MODELS`` in ``serialization.py``.

4. Wire into the pipeline (see ``flows/ingest.py`` and ``flows/build.py``):
   - ingest picks up every entry of ``TABLE_FILES`` automatically
   - call ``load_table(TableKind.{NAME})`` in the build flow and pass the records
     to an analysis function

5. Add tests in ``tests/test_{name}.py``.
"""
