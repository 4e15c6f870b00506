from __future__ import annotations

import httpx
import pytest

from adapters.web_sources.mymemory import SUPPORTED_LANGUAGES, MyMemoryClient
from core.config import AppSettings
from core.errors import ResponseDecodeError, UpstreamError


def _client(handler) -> MyMemoryClient:
    settings = AppSettings(translate_base_url="https://mymemory.test")
    return MyMemoryClient(settings, transport=httpx.MockTransport(handler))


def test_single_match_uses_response_data() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/get"
        assert request.url.params["q"] == "hello world"
        assert request.url.params["langpair"] == "en|es"
        assert request.headers["User-Agent"] == "Pocket-CLI/1.0"
        assert request.headers["Accept"] == "application/json"
        return httpx.Response(
            200,
            json={
                "responseStatus": 200,
                "responseData": {"translatedText": "hola mundo", "match": 0.98},
                "matches": [{"translation": "hola mundo", "match": 0.98}],
            },
        )

    with _client(handler) as client:
        result = client.translate("hello world", "en", "es")

    assert result.model_dump() == {
        "source_text": "hello world",
        "translated_text": "hola mundo",
        "source_lang": "en",
        "target_lang": "es",
        "match": 0.98,
    }


def test_multiple_matches_use_majority_vote() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "responseStatus": 200,
                "responseData": {"translatedText": "HOLA spam", "match": 1},
                "matches": [
                    {"translation": "Buenos días", "match": 1},
                    {"translation": "buenos días", "match": 1},
                    {"translation": "HOLA spam", "match": 1},
                    {"translation": None, "match": 0.5},
                ],
            },
        )

    with _client(handler) as client:
        result = client.translate("good morning", "en", "es")

    assert result.translated_text == "Buenos días"
    assert result.match == 1.0


def test_non_200_response_status_is_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"responseStatus": "403", "responseDetails": "'ZZ' IS AN INVALID TARGET LANGUAGE", "responseData": {}},
        )

    with _client(handler) as client:
        with pytest.raises(UpstreamError) as info:
            client.translate("hi", "en", "zz")

    assert info.value.kind == "api_error"
    assert info.value.message == "'ZZ' IS AN INVALID TARGET LANGUAGE"


def test_non_200_without_details_has_generic_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"responseStatus": 500})

    with _client(handler) as client:
        with pytest.raises(UpstreamError, match="Translation failed"):
            client.translate("hi")


def test_invalid_json_is_parse_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>quota</html>")

    with _client(handler) as client:
        with pytest.raises(ResponseDecodeError) as info:
            client.translate("hi")

    assert info.value.kind == "parse_failed"


def test_languages_table() -> None:
    codes = [language.code for language in SUPPORTED_LANGUAGES]

    assert len(codes) == 30
    assert len(set(codes)) == 30
    assert codes[:3] == ["en", "es", "fr"]
    assert codes[-1] == "bn"
