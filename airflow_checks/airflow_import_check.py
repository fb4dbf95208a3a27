"""
airflow_import_check.py — DAG import errors. Returns critical if there are any.

Usage:
    airflow-import-check -u http://airflow.example.com:8080/ -n admin -p secret
"""

from __future__ import annotations

from airflow_checks.health import Severity
from airflow_checks.health import import_errors as health_import_errors
from airflow_checks.health.client import AirflowClient
from airflow_checks.plugin import CheckPlugin
from airflow_checks.settings import CheckSettings


def execute(cfg: CheckSettings, client: AirflowClient) -> Severity:  # noqa: ARG001
    results = health_import_errors.run_checks(client)
    for r in results:
        print(r)
    return Severity.worst(r.severity for r in results)


plugin = CheckPlugin(
    name="airflow-import-check",
    short="Check the Airflow 2.x DAG import errors endpoint. Returns critical if there are errors.",
    default_url="http://127.0.0.1:8080/",
    execute=execute,
)


def main() -> None:
    plugin.main()


if __name__ == "__main__":
    main()
