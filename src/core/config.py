"""Core configuration.

Responsibility:
- Centralize environment variables (pydantic-settings) away from the CLI.
- Give adapters (transports, catalog fetcher) one consistent view of the
  daemon address, the catalog URL and transport selection.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import BodyEncoding, TransportKind


APP_DIR_NAME = "ollama-bridge"
CONFIG_DIR_ENV = "OLLAMA_BRIDGE_CONFIG_DIR"


def get_user_config_dir() -> Path:
    """Directory holding the per-user `.env`.

    `OLLAMA_BRIDGE_CONFIG_DIR` wins; otherwise the platform's per-user
    config location (APPDATA, Application Support, XDG) is used.
    """

    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    if sys.platform.startswith("win"):
        root = Path(os.environ.get("APPDATA") or Path.home())
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return root / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for line in map(str.strip, text.splitlines()):
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key:
            data[key] = _unquote(value.strip())
    return data


def _format_env_line(key: str, value: str) -> str:
    # Quoted so the dotenv reader keeps spaces and '#'.
    if not value or any(ch.isspace() or ch == "#" for ch in value):
        value = f'"{value}"'
    return f"{key}={value}"


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Merge `values` into the per-user `.env` (or `env_path`) and return its path.

    Keys already in the file are kept unless overridden; `None` values are
    ignored. Keys are written sorted.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    merged = _parse_env_lines(env_path.read_text(encoding="utf-8")) if env_path.exists() else {}
    merged.update((key, value) for key, value in values.items() if value is not None)

    body = [f"# {APP_DIR_NAME} user config (.env)"]
    body.extend(_format_env_line(key, merged[key]) for key in sorted(merged))
    env_path.write_text("\n".join(body) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Process-wide configuration for the bridge.

    Every option can be overridden with an ``OLLAMA_BRIDGE_*`` environment
    variable, a project ``.env`` or the per-user ``.env``.
    """

    model_config = SettingsConfigDict(
        env_prefix="OLLAMA_BRIDGE_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the per-user config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    daemon_base_url: str = Field(
        default="http://localhost:11434",
        min_length=8,
        description="Base URL of the local inference daemon.",
    )
    catalog_url: str = Field(
        default="https://ollama.com/library",
        min_length=8,
        description="URL of the remote model catalog page.",
    )

    daemon_transport: TransportKind = Field(
        default=TransportKind.CURL,
        description="How daemon requests are executed: external 'curl' process or in-process 'httpx'.",
    )
    http_client_executable: str = Field(
        default="curl",
        min_length=1,
        description="Executable used by the curl transport.",
    )
    body_encoding: BodyEncoding = Field(
        default=BodyEncoding.JSON,
        description="Request body encoder: structured 'json' or legacy 'template' interpolation.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout for catalog fetches and doctor checks (seconds).",
    )
    user_agent: str = Field(
        default="ollama-bridge/0.1",
        min_length=1,
        description="User-Agent for catalog requests.",
    )

    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of console output.",
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR).",
    )
