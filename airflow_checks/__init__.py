"""
airflow_checks — Sensu-style monitoring checks for the Airflow 2.x REST API.

Console entry points:
    airflow-check          import errors + metadatabase/scheduler health
    airflow-health-check   metadatabase/scheduler health, no authentication
    airflow-import-check   DAG import errors
    airflow-dag-check      latest run of every (or each explicit) DAG
"""
