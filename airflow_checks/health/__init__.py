"""
airflow_checks/health — Composable evaluators for the Airflow REST API.

Each evaluator module exposes pure functions over decoded API models plus a
run_checks(client) function that fetches, evaluates, and returns a list of
CheckResult objects. The check entry points aggregate them.

Usage:
    from airflow_checks.health import CheckResult, Severity
    from airflow_checks.health.scheduler import run_checks as health_checks
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum


class Severity(IntEnum):
    """Check states, valued as the monitoring framework's exit codes."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @classmethod
    def worst(cls, severities: Iterable[Severity]) -> Severity:
        return max(severities, default=cls.OK)


class CheckError(Exception):
    """Aborts a check with a fixed severity (e.g. DAG discovery failed)."""

    def __init__(self, severity: Severity, message: str) -> None:
        super().__init__(message)
        self.severity = severity


@dataclass
class CheckResult:
    name: str
    severity: Severity
    message: str
    detail: str | None = None

    @property
    def passed(self) -> bool:
        return self.severity == Severity.OK

    def __str__(self) -> str:
        line = self.message
        if self.detail and not self.passed:
            line += f"\n{self.detail}"
        return line
