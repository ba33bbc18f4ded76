"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (finder/storage HTTP clients) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "subdomain-finder"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "subdomain-finder"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "subdomain-finder"
    return Path.home() / ".config" / "subdomain-finder"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# subdomain-finder user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed + validated at the edge (env vars) without polluting the Core.
    - A single configuration contract for CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SUBFIND_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    finder_url: str = Field(
        default="http://localhost:3000/find",
        min_length=8,
        description="Endpoint that accepts {domain} and returns a list of subdomains.",
    )
    storage_url: str = Field(
        default="http://localhost:3001",
        min_length=8,
        description="Base URL of the lookup storage service.",
    )
    store_results: bool = Field(
        default=False,
        description="Push successful lookups to the storage service by default.",
    )

    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout (seconds). Unset means no timeout.",
    )
    user_agent: str = Field(
        default="subdomain-finder/0.1",
        min_length=1,
        description="User-Agent sent to the finder and storage services.",
    )

    lock_while_loading: bool = Field(
        default=True,
        description="Make the find trigger inert while a request is in flight.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Log level name (DEBUG, INFO, WARNING, ERROR).",
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console output.",
    )
