"""Follow Up Boss CRM (https://api.followupboss.com/v1).

Every request carries the account API key as a bearer token plus the
registered integration's ``X-System-Key`` / ``X-System-Name``.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from adapters.realestate.base import RealEstateClient, build_params
from core.config import AppSettings
from core.domain.realestate import (
    FubContact,
    FubContactsPage,
    FubEventsPage,
    FubLeadsPage,
    FubTasksPage,
)
from core.errors import ResponseDecodeError

DEFAULT_LIMIT = 20


class FollowUpBossClient(RealEstateClient):
    api_name = "FUB"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = settings or AppSettings()
        headers = {
            "Authorization": f"Bearer {settings.require('fub_api_key')}",
            "X-System-Key": settings.require("fub_system_key"),
            "X-System-Name": settings.require("fub_system_name"),
        }
        super().__init__(
            settings,
            base_url=settings.fub_base_url,
            extra_headers=headers,
            transport=transport,
        )

    def _get(self, path: str, model: type[BaseModel], params: dict[str, Any] | None = None) -> Any:
        raw = self._request_json("GET", path, params=params)
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            raise ResponseDecodeError(f"FUB returned an unexpected payload for {path}") from exc

    def contacts(
        self,
        *,
        limit: int = DEFAULT_LIMIT,
        status: str | None = None,
        search: str | None = None,
    ) -> FubContactsPage:
        return self._get("/contacts", FubContactsPage, build_params(limit=limit, status=status, q=search))

    def contact(self, contact_id: str) -> FubContact:
        return self._get(f"/contacts/{quote(contact_id, safe='')}", FubContact)

    def leads(self, *, limit: int = DEFAULT_LIMIT, status: str | None = None) -> FubLeadsPage:
        return self._get("/opportunities", FubLeadsPage, build_params(limit=limit, status=status))

    def tasks(self, *, limit: int = DEFAULT_LIMIT, completed: str | None = None) -> FubTasksPage:
        return self._get("/tasks", FubTasksPage, build_params(limit=limit, completed=completed))

    def events(
        self,
        *,
        limit: int = DEFAULT_LIMIT,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> FubEventsPage:
        return self._get(
            "/events",
            FubEventsPage,
            build_params(limit=limit, start_date=start_date, end_date=end_date),
        )
