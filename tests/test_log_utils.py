"""Tests for logging utilities and the dashboard logger."""

import json
from pathlib import Path

import pytest

from core.config import Config, EasyAuthSettings
from ui import log_utils
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, redact_headers, write_cli_log, write_incoming_log


def test_redact_headers_masks_cookie_and_auth() -> None:
    headers = {
        "cookie": "AppServiceAuthSession=secret",
        "Authorization": "Bearer secret",
        "x-api-key": "secret",
        "accept": "application/json",
    }

    redacted = redact_headers(headers)

    assert "secret" not in json.dumps(redacted)
    assert redacted["accept"] == "application/json"


def test_write_incoming_log_never_stores_session(tmp_path: Path) -> None:
    path = write_incoming_log(
        "GET", "/auth/me", {"cookie": "AppServiceAuthSession=secret"}, log_root=tmp_path
    )

    payload = json.loads(path.read_text())
    assert payload["path"] == "/auth/me"
    assert "secret" not in path.read_text()


def test_write_cli_log_appends(tmp_path: Path) -> None:
    log_file = tmp_path / "easy-auth.log"

    write_cli_log("PROXY", "/auth/me", log_file=log_file, status=200)
    write_cli_log("ERROR", "boom", log_file=log_file)

    lines = log_file.read_text().splitlines()
    assert lines[0].endswith("PROXY: /auth/me status=200")
    assert lines[1].endswith("ERROR: boom")


def test_clear_logs(tmp_path: Path) -> None:
    root = tmp_path / "logs"
    (root / "incoming").mkdir(parents=True)

    clear_logs(root)

    assert not root.exists()


@pytest.fixture
def isolated_logs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(log_utils, "CLI_LOG_FILE", tmp_path / "easy-auth.log")
    return tmp_path / "easy-auth.log"


def test_dashboard_counts_events(isolated_logs: Path) -> None:
    dashboard = Dashboard(Config(easy_auth=EasyAuthSettings(azure_host="app.azurewebsites.net")))

    dashboard.log_redirect("/.auth/me", "https://app.azurewebsites.net/auth/me")
    dashboard.log_proxy("/auth/me", 200)
    dashboard.log_preflight("/auth/me")
    dashboard.log_error("MissingSession", 400, "No AppServiceAuthSession cookie in request.")

    assert dashboard._request_count == {"redirect": 1, "proxy": 1, "preflight": 1, "error": 1}
    assert dashboard._recent[0].mode == "preflight"
    assert "REDIRECT: /.auth/me" in isolated_logs.read_text()
