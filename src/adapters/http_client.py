"""httpx wrapper.

Every HTTP source goes through here so they all share the same timeout,
headers and error classification. Tests swap the network for an
``httpx.MockTransport`` via the ``transport`` argument.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from core.config import AppSettings
from core.errors import (
    HTTPStatusError,
    HTTPTransportError,
    RateLimitedError,
    RequestTimeoutError,
    ResponseDecodeError,
)

LOGGER = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    base_url: str = "",
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an ``httpx.Client`` with the shared defaults."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class JSONAPIClient:
    """Base class for JSON-over-HTTP sources.

    Subclasses set ``api_name`` and may override ``_error_message`` to pull a
    readable message out of an error body.
    """

    api_name = "HTTP"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        base_url: str,
        extra_headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or AppSettings()
        self.base_url = base_url.rstrip("/")
        self._client = build_client(
            self.settings,
            base_url=self.base_url,
            extra_headers=extra_headers,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        params = {key: value for key, value in (params or {}).items() if value is not None}
        LOGGER.debug("http_request api=%s method=%s path=%s params=%s", self.api_name, method, path, sorted(params))
        started = time.monotonic()
        try:
            response = self._client.request(method, path, params=params or None, json=json_body)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                f"{self.api_name} request timed out after {self.settings.http_timeout_seconds:g} seconds",
                details={"path": path},
            ) from exc
        except httpx.HTTPError as exc:
            raise HTTPTransportError(
                f"{self.api_name} request failed: {exc}",
                details={"path": path},
            ) from exc

        LOGGER.debug(
            "http_response api=%s path=%s status=%s duration=%.3fs",
            self.api_name,
            path,
            response.status_code,
            time.monotonic() - started,
        )
        self._raise_for_status(response)

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ResponseDecodeError(
                f"{self.api_name} returned an invalid JSON body",
                details={"path": path},
            ) from exc

    def _raise_for_status(self, response: httpx.Response) -> None:
        status = response.status_code
        if status == 429:
            raise RateLimitedError(
                f"{self.api_name} rate limit exceeded",
                details={"status_code": status},
            )
        if status >= 400:
            raise HTTPStatusError(
                self._error_message(response),
                status_code=status,
                details={"status_code": status},
            )

    def _error_message(self, response: httpx.Response) -> str:
        return f"HTTP {response.status_code}"
