"""MyMemory free translation API.

``GET /get?q=<text>&langpair=<from>|<to>``. No key required; anonymous use
is rate-limited per IP.
"""

from __future__ import annotations

from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from adapters.http_client import JSONAPIClient
from core.config import AppSettings
from core.domain.translation import LanguageInfo, MyMemoryResponse, ScoredCandidate, Translation
from core.errors import ResponseDecodeError, UpstreamError
from core.services.selection import best_candidate

SUPPORTED_LANGUAGES: tuple[LanguageInfo, ...] = tuple(
    LanguageInfo(code=code, name=name)
    for code, name in (
        ("en", "English"),
        ("es", "Spanish"),
        ("fr", "French"),
        ("de", "German"),
        ("it", "Italian"),
        ("pt", "Portuguese"),
        ("ru", "Russian"),
        ("zh", "Chinese (Simplified)"),
        ("ja", "Japanese"),
        ("ko", "Korean"),
        ("ar", "Arabic"),
        ("hi", "Hindi"),
        ("nl", "Dutch"),
        ("pl", "Polish"),
        ("tr", "Turkish"),
        ("vi", "Vietnamese"),
        ("th", "Thai"),
        ("id", "Indonesian"),
        ("ms", "Malay"),
        ("sv", "Swedish"),
        ("da", "Danish"),
        ("no", "Norwegian"),
        ("fi", "Finnish"),
        ("el", "Greek"),
        ("he", "Hebrew"),
        ("cs", "Czech"),
        ("ro", "Romanian"),
        ("hu", "Hungarian"),
        ("uk", "Ukrainian"),
        ("bn", "Bengali"),
    )
)


class MyMemoryClient(JSONAPIClient):
    api_name = "MyMemory"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = settings or AppSettings()
        super().__init__(settings, base_url=settings.translate_base_url, transport=transport)

    def translate(self, text: str, source_lang: str = "en", target_lang: str = "es") -> Translation:
        """Translate ``text``.

        With more than one entry in ``matches`` the answer is chosen by
        ``best_candidate`` instead of trusting ``responseData``.
        """

        # The pipe in langpair is sent unescaped.
        query = urlencode({"q": text, "langpair": f"{source_lang}|{target_lang}"}, safe="|")
        raw = self._request_json("GET", f"/get?{query}")

        try:
            data = MyMemoryResponse.model_validate(raw)
        except ValidationError as exc:
            raise ResponseDecodeError("MyMemory returned an unexpected payload") from exc

        if data.response_status != 200:
            raise UpstreamError(
                data.response_details or "Translation failed",
                details={"response_status": data.response_status},
            )

        translated = data.response_data.translated_text
        score = data.response_data.match
        if len(data.matches) > 1:
            winner = best_candidate(
                [ScoredCandidate(text=match.translation or "", score=match.match) for match in data.matches]
            )
            translated, score = winner.text, winner.score

        return Translation(
            source_text=text,
            translated_text=translated,
            source_lang=source_lang,
            target_lang=target_lang,
            match=score,
        )
