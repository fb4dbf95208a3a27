"""
airflow_checks/health/import_errors.py — DAG file import errors.

Any reported import error is CRITICAL: a DAG file that fails to parse never
gets scheduled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from airflow_checks.health import CheckResult, Severity
from airflow_checks.health.client import AirflowApiError

if TYPE_CHECKING:
    from airflow_checks.health.client import AirflowClient
    from airflow_checks.health.models import ImportErrorCollection

NAME = "DAG import errors"


def run_checks(client: AirflowClient) -> list[CheckResult]:
    try:
        collection = client.get_import_errors()
    except AirflowApiError as e:
        return [
            CheckResult(
                NAME,
                Severity.CRITICAL,
                "Error occurred while checking airflow import errors:",
                detail=str(e),
            )
        ]
    return evaluate_import_errors(collection)


def evaluate_import_errors(collection: ImportErrorCollection) -> list[CheckResult]:
    if collection.total_entries <= 0:
        return [CheckResult(NAME, Severity.OK, "No DAG import errors reported")]

    results = [
        CheckResult(
            NAME,
            Severity.CRITICAL,
            f"Airflow encountered an error while importing DAG: {ie.filename}",
            detail=ie.stack_trace,
        )
        for ie in collection.import_errors
    ]
    if not results:
        # total_entries counts errors beyond the returned page
        results.append(
            CheckResult(
                NAME,
                Severity.CRITICAL,
                f"Airflow reported {collection.total_entries} DAG import error(s)",
            )
        )
    return results
