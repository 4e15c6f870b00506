"""Shared error handling for the real-estate CRMs."""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import JSONAPIClient


def extract_error_message(body: Any) -> str:
    """Return ``message``, ``error`` or ``errors[0].message`` from an error body."""

    if not isinstance(body, dict):
        return ""
    for key in ("message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        value = errors[0].get("message")
        if isinstance(value, str) and value:
            return value
    return ""


def build_params(*, limit: int = 0, **filters: str | None) -> dict[str, Any]:
    """Query parameters with non-positive limits and empty filters left out."""

    params: dict[str, Any] = {}
    if limit > 0:
        params["limit"] = limit
    params.update({key: value for key, value in filters.items() if value})
    return params


class RealEstateClient(JSONAPIClient):
    def _error_message(self, response: httpx.Response) -> str:
        try:
            message = extract_error_message(response.json())
        except ValueError:
            message = ""
        if message:
            return f"{self.api_name} API error: {message}"
        return f"{self.api_name} API error (HTTP {response.status_code}): {response.text}"
