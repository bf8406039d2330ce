"""
Prefect flows for the report pipeline.

Flows:
- ingest: Validate the raw CSV exports into the table store
- build: Aggregate the tables and render the HTML report

Usage (local):
    python -m amlr_survey.flows.ingest
    python -m amlr_survey.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    amlr-survey refresh
"""
