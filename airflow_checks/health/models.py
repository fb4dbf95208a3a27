"""
airflow_checks/health/models.py — Response shapes of the Airflow 2.x REST API.

Only the fields the checks read are declared; everything else in the JSON
payload is ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEALTHY = "healthy"


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class MetaDatabaseStatus(_ApiModel):
    status: str | None = None


class SchedulerStatus(_ApiModel):
    status: str | None = None
    latest_scheduler_heartbeat: str | None = None


class HealthReport(_ApiModel):
    metadatabase: MetaDatabaseStatus = Field(default_factory=MetaDatabaseStatus)
    scheduler: SchedulerStatus = Field(default_factory=SchedulerStatus)

    @property
    def metadatabase_healthy(self) -> bool:
        return self.metadatabase.status == HEALTHY

    @property
    def scheduler_healthy(self) -> bool:
        return self.scheduler.status == HEALTHY


class DagImportError(_ApiModel):
    timestamp: str | None = None
    filename: str = ""
    stack_trace: str = ""

    @field_validator("filename", "stack_trace", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class ImportErrorCollection(_ApiModel):
    import_errors: list[DagImportError] = Field(default_factory=list)
    total_entries: int = 0


class Dag(_ApiModel):
    dag_id: str
    is_paused: bool = False

    # nullable in the Airflow 2 schema; null means not paused
    @field_validator("is_paused", mode="before")
    @classmethod
    def null_as_unpaused(cls, v: Any) -> Any:
        return False if v is None else v


class DagCollection(_ApiModel):
    dags: list[Dag] = Field(default_factory=list)
    total_entries: int = 0


class DagRun(_ApiModel):
    dag_run_id: str | None = None
    state: str | None = None


class DagRunCollection(_ApiModel):
    dag_runs: list[DagRun] = Field(default_factory=list)
    total_entries: int = 0
