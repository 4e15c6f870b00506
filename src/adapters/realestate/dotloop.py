"""DotLoop public API v2.

Responses wrap their payload in ``{"data": ...}``.
"""

from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from adapters.realestate.base import RealEstateClient, build_params
from core.config import AppSettings
from core.domain.realestate import Document, Loop, LoopTask, Profile
from core.errors import ResponseDecodeError

DEFAULT_LIMIT = 20
DEFAULT_DOCUMENT_LIMIT = 50

RecordT = TypeVar("RecordT", bound=BaseModel)


class DotloopClient(RealEstateClient):
    api_name = "DotLoop"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = settings or AppSettings()
        super().__init__(
            settings,
            base_url=settings.dotloop_base_url,
            extra_headers={"Authorization": f"Bearer {settings.require('dotloop_token')}"},
            transport=transport,
        )
        self.company_id = settings.dotloop_company_id

    def _data(self, path: str, params: dict[str, Any] | None = None) -> Any:
        raw = self._request_json("GET", path, params=params)
        if not isinstance(raw, dict):
            raise ResponseDecodeError(f"DotLoop returned an unexpected payload for {path}")
        return raw.get("data")

    def _records(self, path: str, model: type[RecordT], params: dict[str, Any] | None = None) -> list[RecordT]:
        data = self._data(path, params) or []
        try:
            return [model.model_validate(item) for item in data]
        except (TypeError, ValidationError) as exc:
            raise ResponseDecodeError(f"DotLoop returned an unexpected payload for {path}") from exc

    def loops(self, *, limit: int = DEFAULT_LIMIT, status: str | None = None) -> list[Loop]:
        return self._records("/loops", Loop, build_params(limit=limit, status=status))

    def loop(self, loop_id: str) -> Loop:
        path = f"/loops/{quote(loop_id, safe='')}"
        try:
            return Loop.model_validate(self._data(path) or {})
        except ValidationError as exc:
            raise ResponseDecodeError(f"DotLoop returned an unexpected payload for {path}") from exc

    def profiles(self, *, limit: int = DEFAULT_LIMIT) -> list[Profile]:
        return self._records("/profiles", Profile, build_params(limit=limit))

    def tasks(self, *, limit: int = DEFAULT_LIMIT, status: str | None = None) -> list[LoopTask]:
        return self._records("/tasks", LoopTask, build_params(limit=limit, status=status))

    def documents(self, loop_id: str, *, limit: int = DEFAULT_DOCUMENT_LIMIT) -> list[Document]:
        return self._records(
            f"/loops/{quote(loop_id, safe='')}/documents",
            Document,
            build_params(limit=limit),
        )
