import os
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "timesheet"


def user_data_dir() -> Path:
    """Per-user data directory suitable for the platform."""
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming"
        return Path(base) / APP_NAME
    base = os.environ.get("XDG_DATA_HOME") or (Path.home() / ".local" / "share")
    return Path(base) / APP_NAME


class ClientSettings(BaseSettings):
    api_url: str | None = Field(
        default=None,
        description="Base URL of the timesheet service; a local JSON file is used when unset",
    )
    data_path: Path = Field(default_factory=lambda: user_data_dir() / "timesheets.json")
    identity_path: Path = Field(default_factory=lambda: user_data_dir() / "identity.json")
    log_level: str = "INFO"
    simulated_latency: float = Field(default=0.0, ge=0, description="Seconds to wait before each insert")
    request_timeout: float = 10.0

    model_config = SettingsConfigDict(env_prefix="TIMESHEET_", extra="ignore")


@lru_cache
def get_settings() -> ClientSettings:
    return ClientSettings()
