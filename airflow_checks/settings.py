"""
airflow_checks/settings.py — Configuration contract shared by every check.

Uses pydantic-settings to validate and type-check the Airflow connection
options. Values come from (lowest to highest precedence): field defaults,
the check's own default URL, environment variables, command-line flags.

Two usage modes:
  Checks:
      cfg = load_settings({"AIRFLOW_USERNAME": "admin"}, default_url=...)

  Tests (isolated — no os.environ bleed):
      cfg = CheckSettings(AIRFLOW_API_URL="http://airflow:8080", ...)
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from airflow_checks.health import Severity
from airflow_checks.health.client import api_base_url

DEFAULT_API_URL = "http://127.0.0.1:8080/"
DEFAULT_TIMEOUT_SECONDS = 15


class CheckSettings(BaseSettings):
    # Only kwargs are read; load_settings() supplies env vars explicitly so
    # CheckSettings() stays a pure validation contract.
    model_config = SettingsConfigDict(
        env_file=None,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)

    AIRFLOW_API_URL: str = DEFAULT_API_URL
    AIRFLOW_USERNAME: str = ""
    AIRFLOW_PASSWORD: str = ""
    AIRFLOW_TIMEOUT: int = DEFAULT_TIMEOUT_SECONDS
    AIRFLOW_DAGS: list[str] = []

    @property
    def api_base_url(self) -> str:
        """Base URL with a single trailing slash removed and /api/v1 appended."""
        return api_base_url(self.AIRFLOW_API_URL)

    @field_validator("AIRFLOW_API_URL", "AIRFLOW_USERNAME", mode="before")
    @classmethod
    def strip_whitespace(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("AIRFLOW_TIMEOUT")
    @classmethod
    def positive_timeout(cls, v: int) -> int:
        if v < 1:
            raise ValueError("timeout must be >= 1 second")
        return v

    @field_validator("AIRFLOW_DAGS", mode="before")
    @classmethod
    def split_dags(cls, v: Any) -> Any:
        # env: AIRFLOW_DAGS="etl_daily, reports"; empty items between commas are dropped
        if isinstance(v, str):
            return [d.strip() for d in v.split(",") if d.strip()]
        # --dag flags keep blanks so check_args can reject them
        if isinstance(v, (list, tuple)):
            return [d.strip() if isinstance(d, str) else d for d in v]
        return v


def check_args(cfg: CheckSettings, requires_auth: bool = True) -> tuple[Severity, str | None]:
    """Validate configuration before any network call.

    Misconfiguration is reported as WARNING so it is not confused with an
    unhealthy Airflow.
    """
    url = cfg.AIRFLOW_API_URL
    try:
        parts = urlsplit(url)
        _ = parts.port  # ValueError on a malformed port
    except ValueError as e:
        return Severity.WARNING, f"failed to parse airflow URL {url}: {e}"
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return (
            Severity.WARNING,
            f"failed to parse airflow URL {url}: expected an absolute http(s) URL",
        )

    if requires_auth:
        if not cfg.AIRFLOW_USERNAME:
            return Severity.WARNING, "airflow username is required"
        if not cfg.AIRFLOW_PASSWORD:
            return Severity.WARNING, "airflow password is required"

    if any(not d for d in cfg.AIRFLOW_DAGS):
        return Severity.WARNING, "blank DAG id in --dag"

    return Severity.OK, None


def load_settings(
    overrides: Mapping[str, Any] | None = None,
    default_url: str = DEFAULT_API_URL,
    environ: Mapping[str, str] | None = None,
) -> CheckSettings:
    """Merge the check default, os.environ and CLI overrides into CheckSettings.

    overrides holds only the flags that were actually passed; None values are
    ignored so an omitted flag never masks an environment variable.

    Raises:
        ValidationError: if a value does not fit its field (e.g. timeout "abc").
    """
    env = os.environ if environ is None else environ
    merged: dict[str, Any] = {"AIRFLOW_API_URL": default_url}
    merged.update({k: v for k, v in env.items() if k in CheckSettings.model_fields})
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return CheckSettings(**merged)
