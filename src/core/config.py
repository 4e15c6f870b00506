"""Core configuration.

Centralizes environment variables (pydantic-settings) so that adapters read
timeouts, base URLs and credentials the same way. Clients receive an
``AppSettings`` instance in their constructor; nothing reads module-level
globals, which keeps every base URL overridable from tests.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigurationError


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "pocket"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pocket"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pocket"
    return Path.home() / ".config" / "pocket"


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
    """Write/update variables in the user's global .env file."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError):
            existing = {}

    existing.update({k: v for k, v in values.items() if v})

    lines = ["# pocket user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Load order: project ``.env`` first (development), then the per-user
    ``.env`` written by ``pocket doctor setup-realestate``. Environment
    variables (``POCKET_*``) win over both.
    """

    model_config = SettingsConfigDict(
        env_prefix="POCKET_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per HTTP request (seconds).",
    )
    script_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Hard timeout for osascript/system_profiler/nmcli (seconds).",
    )
    user_agent: str = Field(
        default="Pocket-CLI/1.0",
        min_length=1,
        description="User-Agent sent with every HTTP request.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level used when --verbose is not given.",
    )

    translate_base_url: str = Field(
        default="https://api.mymemory.translated.net",
        min_length=8,
        description="MyMemory translation API base URL.",
    )
    timezone_base_url: str = Field(
        default="https://timeapi.io/api",
        min_length=8,
        description="timeapi.io base URL (IP based lookups only).",
    )

    fub_api_key: str | None = Field(default=None, description="Follow Up Boss API key.")
    fub_system_key: str | None = Field(default=None, description="Follow Up Boss X-System-Key.")
    fub_system_name: str | None = Field(default=None, description="Follow Up Boss X-System-Name.")
    fub_base_url: str = Field(
        default="https://api.followupboss.com/v1",
        min_length=8,
        description="Follow Up Boss API base URL.",
    )

    dotloop_token: str | None = Field(default=None, description="DotLoop bearer token.")
    dotloop_company_id: str | None = Field(default=None, description="DotLoop company id (optional).")
    dotloop_base_url: str = Field(
        default="https://api.dotloop.com/public/v2",
        min_length=8,
        description="DotLoop public API base URL.",
    )

    def require(self, field_name: str) -> str:
        """Return a configured string setting or raise ``ConfigurationError``."""

        value = getattr(self, field_name)
        if isinstance(value, str) and value.strip():
            return value.strip()
        env_name = f"POCKET_{field_name.upper()}"
        raise ConfigurationError(
            f"Missing required setting: {field_name}",
            details={"setting": field_name, "env_var": env_name},
        )
