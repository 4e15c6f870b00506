from __future__ import annotations

import json

import httpx
import pytest
from typer.testing import CliRunner

from adapters.realestate.followupboss import FollowUpBossClient
from adapters.system_sources.apple_contacts import AppleContacts
from adapters.web_sources.mymemory import MyMemoryClient
from cli import contacts as contacts_cli
from cli import main as main_cli
from cli import realestate as realestate_cli
from cli import translate as translate_cli
from cli.main import app
from core.config import AppSettings
from core.domain.contacts import ContactSummary, Group
from core.domain.invocation import ExitClassification, InvocationRequest, InvocationResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("POCKET_FUB_API_KEY", "POCKET_FUB_SYSTEM_KEY", "POCKET_FUB_SYSTEM_NAME", "POCKET_DOTLOOP_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main_cli, "AppSettings", lambda: AppSettings(_env_file=None))


class FakeContacts:
    def __init__(self, settings: AppSettings) -> None:
        self.settings = settings

    def list_contacts(self, limit: int = 0) -> tuple[list[ContactSummary], int]:
        return [ContactSummary(name="Ana", email="ana@x.io")], 12

    def groups(self) -> list[Group]:
        return [Group(name="Family", count=4), Group(name="Work", count=9)]


def test_help_hides_aliases() -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for group in ("contacts", "translate", "wifi", "timezone", "realestate", "doctor"):
        assert group in result.output
    assert "addressbook" not in result.output


def test_translate_languages_json() -> None:
    result = runner.invoke(app, ["translate", "languages"])

    assert result.exit_code == 0
    languages = json.loads(result.stdout)
    assert len(languages) == 30
    assert languages[0] == {"code": "en", "name": "English"}


def test_aliases_route_to_same_commands() -> None:
    by_name = runner.invoke(app, ["translate", "languages"])
    by_alias = runner.invoke(app, ["tr", "languages"])

    assert by_alias.exit_code == 0
    assert by_alias.stdout == by_name.stdout


def test_translate_text_joins_words(monkeypatch: pytest.MonkeyPatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["q"] == "good morning"
        assert request.url.params["langpair"] == "en|fr"
        return httpx.Response(
            200,
            json={"responseStatus": 200, "responseData": {"translatedText": "bonjour", "match": 0.9}, "matches": []},
        )

    monkeypatch.setattr(
        translate_cli,
        "MyMemoryClient",
        lambda settings: MyMemoryClient(settings, transport=httpx.MockTransport(handler)),
    )

    result = runner.invoke(app, ["translate", "text", "good", "morning", "--to", "fr"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["translated_text"] == "bonjour"


def test_contacts_list_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(contacts_cli, "AppleContacts", FakeContacts)

    result = runner.invoke(app, ["contacts", "list"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "contacts": [{"name": "Ana", "email": "ana@x.io", "phone": "", "company": ""}],
        "count": 1,
        "total": 12,
    }


def test_contacts_groups_table(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(contacts_cli, "AppleContacts", FakeContacts)

    result = runner.invoke(app, ["--format", "table", "addr", "groups"])

    assert result.exit_code == 0
    assert "Family" in result.stdout
    assert "Work" in result.stdout
    assert "count: 2" in result.stdout


def test_contacts_on_linux_exits_with_invalid_input(monkeypatch: pytest.MonkeyPatch) -> None:
    def never_run(request: InvocationRequest) -> InvocationResult:
        raise AssertionError("osascript must not run")

    monkeypatch.setattr(
        contacts_cli,
        "AppleContacts",
        lambda settings: AppleContacts(settings, runner=never_run, platform="linux"),
    )

    result = runner.invoke(app, ["contacts", "groups"])

    assert result.exit_code == 2
    assert json.loads(result.output) == {
        "error": True,
        "code": "platform_unsupported",
        "message": "Apple Contacts is only available on macOS",
        "details": {"current_platform": "linux", "required": "darwin (macOS)"},
    }


def test_contacts_timeout_exits_with_unreachable(monkeypatch: pytest.MonkeyPatch) -> None:
    def slow(request: InvocationRequest) -> InvocationResult:
        return InvocationResult(stdout="", stderr="", classification=ExitClassification.TIMEOUT)

    monkeypatch.setattr(
        contacts_cli,
        "AppleContacts",
        lambda settings: AppleContacts(settings, runner=slow, platform="darwin"),
    )

    result = runner.invoke(app, ["contacts", "search", "ana"])

    assert result.exit_code == 3
    assert json.loads(result.output)["code"] == "timeout"


def test_timezone_get_and_not_found() -> None:
    ok = runner.invoke(app, ["tz", "get", "UTC"])
    missing = runner.invoke(app, ["timezone", "get", "Nowhere/Atlantis"])

    assert ok.exit_code == 0
    assert json.loads(ok.stdout)["utc_offset"] == "+00:00"
    assert missing.exit_code == 4
    assert json.loads(missing.output)["code"] == "not_found"


def test_timezone_ip_rejects_bad_address() -> None:
    result = runner.invoke(app, ["timezone", "ip", "not-an-ip"])

    assert result.exit_code == 2
    assert json.loads(result.output)["code"] == "invalid_input"


def test_followupboss_missing_credentials() -> None:
    result = runner.invoke(app, ["realestate", "fub", "contacts"])

    assert result.exit_code == 2
    payload = json.loads(result.output)
    assert payload["code"] == "missing_config"
    assert payload["details"]["setting"] == "fub_api_key"


def test_invalid_setting_value_prints_error_envelope(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POCKET_HTTP_TIMEOUT_SECONDS", "abc")

    result = runner.invoke(app, ["translate", "languages"])

    assert result.exit_code == 2
    payload = json.loads(result.output)
    assert payload["error"] is True
    assert payload["code"] == "invalid_config"
    assert payload["details"] == {
        "fields": ["http_timeout_seconds"],
        "env_vars": ["POCKET_HTTP_TIMEOUT_SECONDS"],
    }


def test_followupboss_contacts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POCKET_FUB_API_KEY", "k")
    monkeypatch.setenv("POCKET_FUB_SYSTEM_KEY", "s")
    monkeypatch.setenv("POCKET_FUB_SYSTEM_NAME", "n")

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["limit"] == "5"
        return httpx.Response(200, json={"contacts": [{"id": 1, "name": "Ana"}], "total": 30})

    monkeypatch.setattr(
        realestate_cli,
        "FollowUpBossClient",
        lambda settings: FollowUpBossClient(settings, transport=httpx.MockTransport(handler)),
    )

    result = runner.invoke(app, ["re", "followupboss", "contacts", "-l", "5"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["count"] == 1
    assert payload["total"] == 30
    assert payload["contacts"][0]["id"] == "1"


def test_followupboss_rate_limit_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POCKET_FUB_API_KEY", "k")
    monkeypatch.setenv("POCKET_FUB_SYSTEM_KEY", "s")
    monkeypatch.setenv("POCKET_FUB_SYSTEM_NAME", "n")
    monkeypatch.setattr(
        realestate_cli,
        "FollowUpBossClient",
        lambda settings: FollowUpBossClient(
            settings,
            transport=httpx.MockTransport(lambda request: httpx.Response(429)),
        ),
    )

    result = runner.invoke(app, ["realestate", "followupboss", "leads"])

    assert result.exit_code == 4
    assert json.loads(result.output)["code"] == "rate_limited"
