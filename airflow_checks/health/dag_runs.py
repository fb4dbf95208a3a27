"""
airflow_checks/health/dag_runs.py — Latest DAG run state per DAG.

DAGs come either from an explicit list or from discovery (every DAG the API
knows). Each DAG is evaluated independently: a failure on one never stops the
others. Only a failed discovery aborts the whole check.

The dagRuns endpoint lists runs oldest first, so the latest run is found by
asking for one entry to learn total_entries, then reading offset
total_entries - 1.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from airflow_checks.health import CheckError, Severity
from airflow_checks.health.client import AirflowApiError

if TYPE_CHECKING:
    from airflow_checks.health.client import AirflowClient
    from airflow_checks.health.models import DagRun

logger = logging.getLogger(__name__)

FAILED_STATE = "failed"


@dataclass
class DagHealth:
    dag_id: str
    severity: Severity = Severity.OK
    error: str | None = None


def resolve_dag_ids(client: AirflowClient, configured: list[str]) -> tuple[list[str], bool]:
    """Return (dag_ids, explicit). Raises CheckError if discovery fails."""
    if configured:
        return list(configured), True

    try:
        dags = client.list_dags()
    except AirflowApiError as e:
        raise CheckError(Severity.CRITICAL, f"could not retrieve DAGs: {e}") from e
    return [d.dag_id for d in dags], False


def latest_dag_run(client: AirflowClient, dag_id: str) -> DagRun | None:
    runs = client.get_dag_runs(dag_id, limit=1, offset=0)
    if runs.total_entries == 0:
        return None

    runs = client.get_dag_runs(dag_id, limit=1, offset=runs.total_entries - 1)
    if not runs.dag_runs:
        return None
    return runs.dag_runs[0]


def check_dag(client: AirflowClient, dag_id: str, explicit: bool) -> DagHealth:
    health = DagHealth(dag_id)

    try:
        dag = client.get_dag(dag_id)
    except AirflowApiError as e:
        health.severity = Severity.CRITICAL
        health.error = f"could not retrieve DAG: {dag_id}\n{e}"
        return health

    # Discovered DAGs are run-checked even when paused.
    if explicit and dag.is_paused:
        health.severity = Severity.WARNING
        health.error = f"DAG is paused and will not process: {dag_id}"
        return health

    try:
        run = latest_dag_run(client, dag_id)
    except AirflowApiError as e:
        health.severity = Severity.CRITICAL
        health.error = str(e)
        return health

    if run is not None and run.state == FAILED_STATE:
        health.severity = Severity.CRITICAL
        health.error = f"DAG failed its last execution: {dag_id}"
    return health


def check_dags(client: AirflowClient, dag_ids: list[str], explicit: bool) -> list[DagHealth]:
    results = []
    for dag_id in dag_ids:
        health = check_dag(client, dag_id, explicit)
        logger.debug("DAG %s -> %s", dag_id, health.severity.name)
        results.append(health)
    return results


def summarize(healths: list[DagHealth]) -> tuple[Severity, list[str]]:
    """Collapse per-DAG results into one severity plus the lines to print."""
    lines: list[str] = []
    counts = {severity: 0 for severity in Severity}

    for h in healths:
        counts[h.severity] += 1
        if h.severity != Severity.OK:
            lines.append(f"{h.dag_id} {h.severity.name}")
        if h.error:
            lines.append(f"Error occurred while checking DAG:\n{h.error}")

    if counts[Severity.CRITICAL] or counts[Severity.UNKNOWN]:
        return Severity.CRITICAL, lines
    if counts[Severity.WARNING]:
        return Severity.WARNING, lines

    if healths:
        lines.append("All health checks returning OK for loaded DAGs")
    else:
        lines.append("No DAGs loaded")
    return Severity.OK, lines


def run_checks(client: AirflowClient, configured: list[str]) -> tuple[Severity, list[str]]:
    dag_ids, explicit = resolve_dag_ids(client, configured)
    logger.debug("checking %d DAG(s), explicit=%s", len(dag_ids), explicit)
    return summarize(check_dags(client, dag_ids, explicit))
