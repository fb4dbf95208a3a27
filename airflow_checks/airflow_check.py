"""
airflow_check.py — Combined Airflow check: DAG import errors + health.

Usage:
    airflow-check -u https://airflow.example.com/ -n admin -p secret
"""

from __future__ import annotations

from airflow_checks.health import Severity
from airflow_checks.health import import_errors as health_import_errors
from airflow_checks.health import scheduler as health_scheduler
from airflow_checks.health.client import AirflowClient
from airflow_checks.plugin import CheckPlugin
from airflow_checks.settings import CheckSettings


def execute(cfg: CheckSettings, client: AirflowClient) -> Severity:  # noqa: ARG001
    results = health_import_errors.run_checks(client)
    results.extend(health_scheduler.run_checks(client))
    for r in results:
        print(r)
    return Severity.worst(r.severity for r in results)


plugin = CheckPlugin(
    name="airflow-check",
    short="Check the health of Airflow 2.x: DAG import errors, metadatabase and scheduler.",
    default_url="https://127.0.0.1:8081/",
    execute=execute,
)


def main() -> None:
    plugin.main()


if __name__ == "__main__":
    main()
