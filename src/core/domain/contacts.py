"""Apple Contacts records (Pydantic v2).

These models describe *what* a contact looks like once the flattened
osascript output has been parsed, not *how* it was obtained.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LabeledValue(BaseModel):
    """An email address or phone number with its (cleaned) label."""

    label: str = Field(default="", description="Human readable label, e.g. 'Home'.")
    value: str = Field(..., description="Address or number as stored in Contacts.")


class Address(BaseModel):
    label: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""


class Contact(BaseModel):
    """Full contact card returned by ``contacts get``."""

    name: str = Field(..., description="Display name.")
    first_name: str = ""
    last_name: str = ""
    company: str = ""
    job_title: str = ""
    notes: str = ""
    birthday: str = Field(default="", description="Birth date as formatted by AppleScript.")
    emails: list[LabeledValue] = Field(default_factory=list)
    phones: list[LabeledValue] = Field(default_factory=list)
    addresses: list[Address] = Field(default_factory=list)


class ContactSummary(BaseModel):
    """One row of ``list``/``search``/``group``: primary email and phone only."""

    name: str
    email: str = ""
    phone: str = ""
    company: str = ""


class Group(BaseModel):
    name: str
    count: int = 0


class NewContact(BaseModel):
    """Input for ``contacts create``."""

    name: str = Field(..., min_length=1)
    email: str = ""
    phone: str = ""
    company: str = ""
    note: str = ""
