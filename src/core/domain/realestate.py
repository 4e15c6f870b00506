"""Follow Up Boss and DotLoop records.

Both APIs return loosely-typed JSON. Records keep unknown keys out
(``extra="ignore"``) and tolerate missing ones with empty defaults.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("id", "contact_id", "assigned_to", "created_by", mode="before", check_fields=False)
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        # Both APIs send numeric ids.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


# Follow Up Boss


class FubContact(_Record):
    id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    status: str = ""
    source: str = ""
    tags: list[str] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""


class FubLead(_Record):
    id: str = ""
    contact_id: str = ""
    status: str = ""
    stage: str = ""
    price: int = 0
    address: str = ""
    assigned_to: str = ""
    created_at: str = ""


class FubTask(_Record):
    id: str = ""
    title: str = ""
    due_date: str = ""
    completed: bool = False
    assigned_to: str = ""
    priority: str = ""


class FubEvent(_Record):
    id: str = ""
    title: str = ""
    start: str = ""
    end: str = ""
    location: str = ""
    attendees: list[str] = Field(default_factory=list)


class FubContactsPage(_Record):
    contacts: list[FubContact] = Field(default_factory=list)
    total: int = 0


class FubLeadsPage(_Record):
    opportunities: list[FubLead] = Field(default_factory=list)
    total: int = 0


class FubTasksPage(_Record):
    tasks: list[FubTask] = Field(default_factory=list)
    total: int = 0


class FubEventsPage(_Record):
    events: list[FubEvent] = Field(default_factory=list)
    total: int = 0


# DotLoop


class Loop(_Record):
    id: str = ""
    name: str = ""
    status: str = ""
    view_count: int = 0
    created_by: str = ""
    created_date: str = ""
    updated_date: str = ""


class Profile(_Record):
    id: str = ""
    name: str = ""
    type: str = ""
    email: str = ""
    phone: str = ""


class LoopTask(_Record):
    id: str = ""
    name: str = ""
    status: str = ""
    assigned_to: str = ""
    due_date: str = ""


class Document(_Record):
    id: str = ""
    name: str = ""
    type: str = ""
    size: int = 0
    created_date: str = ""
