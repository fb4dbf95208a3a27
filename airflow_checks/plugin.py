"""
airflow_checks/plugin.py — Shared command-line harness for the checks.

Each check declares a CheckPlugin with its name, default URL and an execute
callable. run() parses flags, validates configuration, executes the check,
prints diagnostics on stdout and returns the exit code:

    0 OK   1 WARNING   2 CRITICAL   3 UNKNOWN
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from pydantic import ValidationError

from airflow_checks.health import CheckError, Severity
from airflow_checks.health.client import AirflowClient
from airflow_checks.settings import CheckSettings, check_args, load_settings

logger = logging.getLogger(__name__)

ExecuteFn = Callable[[CheckSettings, AirflowClient], Severity]


@dataclass
class CheckPlugin:
    name: str
    short: str
    default_url: str
    execute: ExecuteFn
    requires_auth: bool = True
    accepts_dags: bool = False

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=self.name, description=self.short)
        parser.add_argument(
            "-u",
            "--airflow-api-url",
            dest="AIRFLOW_API_URL",
            help=f"The base URL of the airflow REST API (default: {self.default_url}).",
        )
        if self.requires_auth:
            parser.add_argument(
                "-n",
                "--airflow-username",
                dest="AIRFLOW_USERNAME",
                help="The username used to authenticate against the airflow API.",
            )
            parser.add_argument(
                "-p",
                "--airflow-password",
                dest="AIRFLOW_PASSWORD",
                help="The password used to authenticate against the airflow API.",
            )
        if self.accepts_dags:
            parser.add_argument(
                "-d",
                "--dag",
                dest="AIRFLOW_DAGS",
                action="append",
                help="Explicit DAG to check (repeatable). Default: every DAG.",
            )
        parser.add_argument(
            "-t",
            "--timeout",
            dest="AIRFLOW_TIMEOUT",
            help="Request timeout in seconds (default: 15).",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Log every API request to stderr.",
        )
        return parser

    def build_client(self, cfg: CheckSettings) -> AirflowClient:
        if not self.requires_auth:
            return AirflowClient(cfg.AIRFLOW_API_URL, timeout=cfg.AIRFLOW_TIMEOUT)
        return AirflowClient(
            cfg.AIRFLOW_API_URL,
            username=cfg.AIRFLOW_USERNAME,
            password=cfg.AIRFLOW_PASSWORD,
            timeout=cfg.AIRFLOW_TIMEOUT,
        )

    def run(
        self,
        argv: Sequence[str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> int:
        args = vars(self.build_parser().parse_args(argv))
        if args.pop("verbose"):
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                stream=sys.stderr,
            )

        try:
            cfg = load_settings(args, default_url=self.default_url, environ=environ)
        except ValidationError as e:
            print(f"Error validating input: {e}")
            return int(Severity.WARNING)

        state, error = check_args(cfg, requires_auth=self.requires_auth)
        if error is not None:
            print(f"Error validating input: {error}")
            return int(state)

        logger.debug("running %s against %s", self.name, cfg.api_base_url)
        try:
            state = self.execute(cfg, self.build_client(cfg))
        except CheckError as e:
            print(f"Error executing {self.name}: {e}")
            return int(e.severity)
        return int(state)

    def main(self) -> None:
        sys.exit(self.run())
