"""
airflow_checks/health/scheduler.py — Metadatabase and scheduler health.

GET /api/v1/health is served without authentication, so this evaluator works
with an auth-less client as well.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from airflow_checks.health import CheckResult, Severity
from airflow_checks.health.client import AirflowApiError

if TYPE_CHECKING:
    from airflow_checks.health.client import AirflowClient
    from airflow_checks.health.models import HealthReport

NAME = "Airflow health"


def run_checks(client: AirflowClient) -> list[CheckResult]:
    try:
        report = client.get_health()
    except AirflowApiError as e:
        return [
            CheckResult(
                NAME,
                Severity.CRITICAL,
                "Error occurred while checking airflow health:",
                detail=str(e),
            )
        ]
    return evaluate_health(report)


def evaluate_health(report: HealthReport) -> list[CheckResult]:
    results = []
    if not report.metadatabase_healthy:
        results.append(
            CheckResult(
                "Airflow metadatabase",
                Severity.CRITICAL,
                "Airflow metadatabase is in trouble.",
                detail=f"status: {report.metadatabase.status or '<missing>'}",
            )
        )
    if not report.scheduler_healthy:
        results.append(
            CheckResult(
                "Airflow scheduler",
                Severity.CRITICAL,
                "Airflow scheduler is in trouble.",
                detail=f"status: {report.scheduler.status or '<missing>'}",
            )
        )
    if results:
        return results

    heartbeat = report.scheduler.latest_scheduler_heartbeat or "unknown"
    return [
        CheckResult(
            NAME,
            Severity.OK,
            f"Airflow metadatabase and scheduler are healthy (last heartbeat {heartbeat})",
        )
    ]
