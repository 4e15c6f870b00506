from __future__ import annotations

from pathlib import Path

import pytest

from core import config
from core.config import AppSettings, write_user_env_vars
from core.errors import ConfigurationError, ErrorCategory


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POCKET_HTTP_TIMEOUT_SECONDS", raising=False)
    settings = AppSettings(_env_file=None)

    assert settings.http_timeout_seconds == 30
    assert settings.script_timeout_seconds == 30
    assert settings.user_agent == "Pocket-CLI/1.0"
    assert settings.fub_base_url == "https://api.followupboss.com/v1"
    assert settings.dotloop_base_url == "https://api.dotloop.com/public/v2"


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POCKET_TRANSLATE_BASE_URL", "http://localhost:9000")
    monkeypatch.setenv("POCKET_FUB_API_KEY", "abc")

    settings = AppSettings(_env_file=None)

    assert settings.translate_base_url == "http://localhost:9000"
    assert settings.require("fub_api_key") == "abc"


def test_require_missing_setting() -> None:
    settings = AppSettings(_env_file=None, dotloop_token="  ")

    with pytest.raises(ConfigurationError) as info:
        settings.require("dotloop_token")

    assert info.value.category is ErrorCategory.INVALID_INPUT
    assert info.value.to_payload() == {
        "error": True,
        "code": "missing_config",
        "message": "Missing required setting: dotloop_token",
        "details": {"setting": "dotloop_token", "env_var": "POCKET_DOTLOOP_TOKEN"},
    }


def test_write_user_env_vars_merges(tmp_path: Path) -> None:
    env_path = tmp_path / "pocket" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nPOCKET_FUB_API_KEY=old\nPOCKET_DOTLOOP_TOKEN='keep'\n", encoding="utf-8")

    written = write_user_env_vars(
        {"POCKET_FUB_API_KEY": "new", "POCKET_FUB_SYSTEM_NAME": "", "POCKET_FUB_SYSTEM_KEY": "sk"},
        env_path=env_path,
    )

    assert written == env_path
    assert env_path.read_text(encoding="utf-8").splitlines() == [
        "# pocket user config (.env)",
        "POCKET_DOTLOOP_TOKEN=keep",
        "POCKET_FUB_API_KEY=new",
        "POCKET_FUB_SYSTEM_KEY=sk",
    ]


def test_user_config_dir_honours_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config.sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert config.get_user_config_dir() == tmp_path / "pocket"
