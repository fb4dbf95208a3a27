"""
tests/unit/test_settings.py — Unit tests for airflow_checks/settings.py.

No network access: these cover the pydantic contract, precedence of
environment vs. flags, and the pre-flight check_args validation.

Run: pytest tests/unit/test_settings.py -v
"""

import pytest
from pydantic import ValidationError

from airflow_checks.health import Severity
from airflow_checks.settings import CheckSettings, check_args, load_settings


def _kwargs(**overrides):
    base = dict(
        AIRFLOW_API_URL="http://airflow:8080/",
        AIRFLOW_USERNAME="admin",
        AIRFLOW_PASSWORD="secret",
    )
    base.update(overrides)
    return base


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestSchema:
    def test_defaults(self):
        s = CheckSettings()
        assert s.AIRFLOW_API_URL == "http://127.0.0.1:8080/"
        assert s.AIRFLOW_TIMEOUT == 15
        assert s.AIRFLOW_DAGS == []

    def test_does_not_read_environment(self, monkeypatch):
        monkeypatch.setenv("AIRFLOW_USERNAME", "from-env")
        assert CheckSettings().AIRFLOW_USERNAME == ""

    def test_timeout_coerced_from_string(self):
        assert CheckSettings(**_kwargs(AIRFLOW_TIMEOUT="30")).AIRFLOW_TIMEOUT == 30

    def test_non_integer_timeout_raises(self):
        with pytest.raises(ValidationError):
            CheckSettings(**_kwargs(AIRFLOW_TIMEOUT="soon"))

    def test_zero_timeout_raises(self):
        with pytest.raises(ValidationError):
            CheckSettings(**_kwargs(AIRFLOW_TIMEOUT=0))

    def test_dags_from_comma_separated_string(self):
        s = CheckSettings(**_kwargs(AIRFLOW_DAGS="etl_daily, reports,,"))
        assert s.AIRFLOW_DAGS == ["etl_daily", "reports"]

    def test_blank_flag_dags_kept_for_validation(self):
        s = CheckSettings(**_kwargs(AIRFLOW_DAGS=[" a ", "", "  "]))
        assert s.AIRFLOW_DAGS == ["a", "", ""]

    @pytest.mark.parametrize("url", ["http://x/", "http://x"])
    def test_api_base_url_strips_trailing_slash(self, url):
        assert CheckSettings(AIRFLOW_API_URL=url).api_base_url == "http://x/api/v1"


# ---------------------------------------------------------------------------
# load_settings precedence
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_check_default_url_used_when_nothing_set(self):
        s = load_settings({}, default_url="https://127.0.0.1:8081/", environ={})
        assert s.AIRFLOW_API_URL == "https://127.0.0.1:8081/"

    def test_environment_overrides_default(self):
        env = {"AIRFLOW_API_URL": "http://env:8080", "AIRFLOW_TIMEOUT": "5", "UNRELATED": "x"}
        s = load_settings({}, default_url="https://127.0.0.1:8081/", environ=env)
        assert s.AIRFLOW_API_URL == "http://env:8080"
        assert s.AIRFLOW_TIMEOUT == 5

    def test_flags_override_environment(self):
        env = {"AIRFLOW_USERNAME": "env-user"}
        s = load_settings({"AIRFLOW_USERNAME": "flag-user"}, environ=env)
        assert s.AIRFLOW_USERNAME == "flag-user"

    def test_omitted_flags_do_not_mask_environment(self):
        env = {"AIRFLOW_PASSWORD": "env-pass"}
        s = load_settings({"AIRFLOW_PASSWORD": None}, environ=env)
        assert s.AIRFLOW_PASSWORD == "env-pass"

    def test_dags_from_environment(self):
        s = load_settings({}, environ={"AIRFLOW_DAGS": "a,b"})
        assert s.AIRFLOW_DAGS == ["a", "b"]


# ---------------------------------------------------------------------------
# check_args
# ---------------------------------------------------------------------------


class TestCheckArgs:
    def test_valid_config_is_ok(self):
        assert check_args(CheckSettings(**_kwargs())) == (Severity.OK, None)

    def test_missing_username_is_warning(self):
        state, error = check_args(CheckSettings(**_kwargs(AIRFLOW_USERNAME="")))
        assert state == Severity.WARNING
        assert error == "airflow username is required"

    def test_missing_password_is_warning(self):
        state, error = check_args(CheckSettings(**_kwargs(AIRFLOW_PASSWORD="")))
        assert state == Severity.WARNING
        assert error == "airflow password is required"

    def test_credentials_not_required_without_auth(self):
        cfg = CheckSettings(AIRFLOW_API_URL="http://airflow:8080")
        assert check_args(cfg, requires_auth=False) == (Severity.OK, None)

    @pytest.mark.parametrize("url", ["not a url", "airflow:8080", "ftp://airflow/", "http://[::1"])
    def test_unparseable_url_is_warning(self, url):
        state, error = check_args(CheckSettings(**_kwargs(AIRFLOW_API_URL=url)))
        assert state == Severity.WARNING
        assert error.startswith(f"failed to parse airflow URL {url}")

    def test_bad_port_is_warning(self):
        state, _ = check_args(CheckSettings(**_kwargs(AIRFLOW_API_URL="http://airflow:http/")))
        assert state == Severity.WARNING

    @pytest.mark.parametrize("dags", [[""], [" "], ["a", ""]])
    def test_blank_dag_id_is_warning(self, dags):
        state, error = check_args(CheckSettings(**_kwargs(AIRFLOW_DAGS=dags)))
        assert state == Severity.WARNING
        assert error == "blank DAG id in --dag"
