"""Timezone models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TimeInfo(BaseModel):
    """Current time in a zone.

    ``day_of_week`` counts from Sunday = 0; ``week_number`` is the ISO week.
    """

    timezone: str
    datetime: str = Field(..., description="RFC 3339 timestamp.")
    utc_offset: str = Field(..., description="Offset formatted as +HH:MM / -HH:MM.")
    day_of_week: int
    week_number: int = 0
    dst: bool = False
    abbreviation: str = ""
    unixtime: int


class TimezoneList(BaseModel):
    total: int
    regions: dict[str, list[str]]


class TimeApiOffset(BaseModel):
    model_config = ConfigDict(extra="ignore")

    seconds: int = 0


class TimeApiResponse(BaseModel):
    """Subset of timeapi.io ``/time/current/ip``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    date_time: str = Field(default="", alias="dateTime")
    time_zone: str = Field(default="", alias="timeZone")
    day_of_week: str = Field(default="", alias="dayOfWeek")
    dst_active: bool = Field(default=False, alias="dstActive")
    current_utc_offset: TimeApiOffset = Field(
        default_factory=TimeApiOffset,
        alias="currentUtcOffset",
    )
