"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.exceptions import ConfigurationError

CONFIG_DIR = Path.home() / ".config" / "easy-auth-local"
CONFIG_FILE = CONFIG_DIR / "config.json"


class ServerSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "127.0.0.1"
    port: int = 3000
    static_dir: str | None = None


class EasyAuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    azure_host: str = ""
    local_port: int | None = None
    local_origin: str | None = None
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("azure_host")
    @classmethod
    def _strip_scheme(cls, value: str) -> str:
        """Accept a pasted URL but keep only the host part."""
        value = value.strip()
        for scheme in ("https://", "http://"):
            if value.lower().startswith(scheme):
                value = value[len(scheme):]
        return value.rstrip("/")

    @field_validator("local_origin")
    @classmethod
    def _reject_wildcard(cls, value: str | None) -> str | None:
        # Browsers refuse credentialed responses with a wildcard origin
        if value is not None and value.strip() == "*":
            raise ValueError("local_origin cannot be '*' when credentials are allowed")
        return value.rstrip("/") if value else value


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    server: ServerSettings = Field(default_factory=ServerSettings)
    easy_auth: EasyAuthSettings = Field(default_factory=EasyAuthSettings)

    @property
    def allow_origin(self) -> str:
        """Origin placed in Access-Control-Allow-Origin."""
        if self.easy_auth.local_origin:
            return self.easy_auth.local_origin
        port = self.easy_auth.local_port or self.server.port
        return f"http://localhost:{port}"


def load_config(config_file: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default


def validate(config: Config) -> None:
    """Raise ConfigurationError when the server cannot start."""
    if not config.easy_auth.azure_host:
        raise ConfigurationError("Azure host not configured!")
