"""
airflow_health_check.py — Metadatabase and scheduler health, no credentials.

Usage:
    airflow-health-check -u http://airflow.example.com:8080/
"""

from __future__ import annotations

from airflow_checks.health import Severity
from airflow_checks.health import scheduler as health_scheduler
from airflow_checks.health.client import AirflowClient
from airflow_checks.plugin import CheckPlugin
from airflow_checks.settings import CheckSettings


def execute(cfg: CheckSettings, client: AirflowClient) -> Severity:  # noqa: ARG001
    results = health_scheduler.run_checks(client)
    for r in results:
        print(r)
    return Severity.worst(r.severity for r in results)


plugin = CheckPlugin(
    name="airflow-health-check",
    short="Check the Airflow 2.x health endpoint. Returns critical if a component is unhealthy.",
    default_url="http://127.0.0.1:8080/",
    execute=execute,
    requires_auth=False,
)


def main() -> None:
    plugin.main()


if __name__ == "__main__":
    main()
