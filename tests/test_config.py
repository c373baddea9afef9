"""Tests for configuration models and loading."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from app import create_app
from conftest import RecordingLogger
from core.config import Config, EasyAuthSettings, ServerSettings, load_config
from core.exceptions import ConfigurationError


def test_allow_origin_defaults_to_server_port() -> None:
    config = Config(server=ServerSettings(port=4200))

    assert config.allow_origin == "http://localhost:4200"


def test_allow_origin_uses_local_port() -> None:
    config = Config(easy_auth=EasyAuthSettings(local_port=5173))

    assert config.allow_origin == "http://localhost:5173"


def test_explicit_origin_wins() -> None:
    config = Config(
        easy_auth=EasyAuthSettings(local_port=5173, local_origin="https://dev.local:8443/")
    )

    assert config.allow_origin == "https://dev.local:8443"


def test_wildcard_origin_rejected() -> None:
    with pytest.raises(ValidationError):
        EasyAuthSettings(local_origin="*")


@pytest.mark.parametrize(
    "raw",
    ["myapp.azurewebsites.net", "https://myapp.azurewebsites.net", "http://myapp.azurewebsites.net/"],
)
def test_azure_host_scheme_stripped(raw: str) -> None:
    assert EasyAuthSettings(azure_host=raw).azure_host == "myapp.azurewebsites.net"


def test_config_is_immutable() -> None:
    config = Config()

    with pytest.raises(ValidationError):
        config.easy_auth.azure_host = "other.net"  # type: ignore[misc]


def test_load_config_creates_default(tmp_path: Path) -> None:
    config_file = tmp_path / "nested" / "config.json"

    config = load_config(config_file)

    assert config == Config()
    assert json.loads(config_file.read_text())["server"]["port"] == 3000


def test_load_config_reads_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"easy_auth": {"azure_host": "app.azurewebsites.net"}}))

    config = load_config(config_file)

    assert config.easy_auth.azure_host == "app.azurewebsites.net"
    assert config.easy_auth.timeout == 30.0


def test_load_config_backs_up_corrupted_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json")

    config = load_config(config_file)

    assert config == Config()
    assert (tmp_path / "config.json.bak").read_text() == "{not json"


def test_create_app_rejects_missing_azure_host() -> None:
    with pytest.raises(ConfigurationError):
        create_app(Config(), RecordingLogger())
