"""
airflow_checks/health/client.py — Minimal Airflow 2.x REST API client.

Plain GET + JSON decode over urllib with optional HTTP basic auth. Every
failure (transport, non-200 status, malformed body) surfaces as
AirflowApiError so evaluators only have one exception to map to CRITICAL.
"""

from __future__ import annotations

import base64
import http.client
import json
import logging
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from airflow_checks.health.models import (
    Dag,
    DagCollection,
    DagRunCollection,
    HealthReport,
    ImportErrorCollection,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
DAG_PAGE_SIZE = 100
READ_CHUNK_SIZE = 64 * 1024

ModelT = TypeVar("ModelT", bound=BaseModel)


class AirflowApiError(Exception):
    """A request to the Airflow API failed or returned something unusable."""


def api_base_url(base_url: str) -> str:
    # a trailing slash would produce //api/v1
    return base_url.removesuffix("/") + API_PREFIX


class AirflowClient:
    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        timeout: int = 15,
    ) -> None:
        self.base = api_base_url(base_url)
        self.timeout = timeout
        self._auth_header: str | None = None
        if username or password:
            token = base64.b64encode(f"{username or ''}:{password or ''}".encode()).decode("ascii")
            self._auth_header = f"Basic {token}"

    def get_json(self, path: str, params: dict[str, Any] | None = None, what: str = "API") -> Any:
        url = f"{self.base}{path}"
        if params:
            url += "?" + urllib.parse.urlencode(params)

        headers = {"Accept": "application/json"}
        if self._auth_header:
            headers["Authorization"] = self._auth_header
        req = urllib.request.Request(url, headers=headers, method="GET")

        logger.debug("GET %s (timeout %ss)", url, self.timeout)
        # the socket timeout bounds each read; the deadline bounds the whole request
        deadline = time.monotonic() + self.timeout
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                status = resp.status
                if status != 200:
                    raise AirflowApiError(
                        f"{what} request returned an invalid status code: {status} {resp.reason}"
                    )
                body = self._read_body(resp, deadline, f"{what} request to {url}")
        except urllib.error.HTTPError as e:
            raise AirflowApiError(
                f"{what} request returned an invalid status code: {e.code} {e.reason}"
            ) from e
        except urllib.error.URLError as e:
            raise AirflowApiError(f"{what} request to {url} failed: {e.reason}") from e
        except OSError as e:
            # socket timeouts and resets raised while reading the body
            raise AirflowApiError(f"{what} request to {url} failed: {e}") from e
        except http.client.HTTPException as e:
            # IncompleteRead, BadStatusLine, LineTooLong, ...
            raise AirflowApiError(f"{what} request to {url} failed: {e!r}") from e

        logger.debug("GET %s -> %s (%d bytes)", url, status, len(body))
        try:
            return json.loads(body)
        except ValueError as e:
            raise AirflowApiError(f"failed to decode {what} response: {e}") from e

    def _read_body(self, resp: Any, deadline: float, request: str) -> bytes:
        chunks: list[bytes] = []
        while True:
            if time.monotonic() > deadline:
                raise AirflowApiError(f"{request} timed out after {self.timeout}s")
            chunk = resp.read1(READ_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)

        body = b"".join(chunks)
        # read1() returns b"" on a truncated body instead of raising
        remaining = getattr(resp, "length", None)
        if remaining:
            raise http.client.IncompleteRead(body, remaining)
        return body

    def _get(
        self,
        path: str,
        model: type[ModelT],
        what: str,
        params: dict[str, Any] | None = None,
    ) -> ModelT:
        payload = self.get_json(path, params=params, what=what)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise AirflowApiError(f"failed to decode {what} response: {e}") from e

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    def get_health(self) -> HealthReport:
        return self._get("/health", HealthReport, "health")

    def get_import_errors(self) -> ImportErrorCollection:
        return self._get("/importErrors", ImportErrorCollection, "import errors")

    def get_dag(self, dag_id: str) -> Dag:
        return self._get(f"/dags/{_quote(dag_id)}", Dag, "get DAG")

    def get_dag_runs(self, dag_id: str, limit: int, offset: int) -> DagRunCollection:
        return self._get(
            f"/dags/{_quote(dag_id)}/dagRuns",
            DagRunCollection,
            "get latest DAG run",
            params={"limit": limit, "offset": offset},
        )

    def list_dags(self, page_size: int = DAG_PAGE_SIZE) -> list[Dag]:
        """Fetch every DAG, paging with limit/offset until total_entries is reached."""
        dags: list[Dag] = []
        while True:
            page = self._get(
                "/dags",
                DagCollection,
                "get all DAGs",
                params={"limit": page_size, "offset": len(dags)},
            )
            dags.extend(page.dags)
            if not page.dags or len(dags) >= page.total_entries:
                return dags


def _quote(dag_id: str) -> str:
    return urllib.parse.quote(dag_id, safe="")
