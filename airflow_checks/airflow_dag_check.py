"""
airflow_dag_check.py — Latest run state of Airflow DAGs.

Without --dag every DAG known to Airflow is checked. With one or more --dag
flags only those are checked, and a paused DAG is reported as WARNING.

Usage:
    airflow-dag-check -n admin -p secret
    airflow-dag-check -n admin -p secret -d etl_daily -d reports
"""

from __future__ import annotations

from airflow_checks.health import Severity
from airflow_checks.health import dag_runs as health_dag_runs
from airflow_checks.health.client import AirflowClient
from airflow_checks.plugin import CheckPlugin
from airflow_checks.settings import CheckSettings


def execute(cfg: CheckSettings, client: AirflowClient) -> Severity:
    state, lines = health_dag_runs.run_checks(client, cfg.AIRFLOW_DAGS)
    for line in lines:
        print(line)
    return state


plugin = CheckPlugin(
    name="airflow-dag-check",
    short="Check the health of Airflow 2.x DAG runs.",
    default_url="https://127.0.0.1:8081/",
    execute=execute,
    accepts_dags=True,
)


def main() -> None:
    plugin.main()


if __name__ == "__main__":
    main()
