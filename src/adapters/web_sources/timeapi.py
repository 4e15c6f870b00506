"""Time zone lookups.

Named zones are resolved locally with ``zoneinfo``; only IP lookups go to
timeapi.io (``GET /time/current/ip?ipAddress=<ip>``).
"""

from __future__ import annotations

import ipaddress
import time
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

import httpx
from pydantic import ValidationError

from adapters.http_client import JSONAPIClient
from core.config import AppSettings
from core.domain.timezone import TimeApiResponse, TimeInfo, TimezoneList
from core.errors import HTTPStatusError, InputValidationError, NotFoundError, ResponseDecodeError

TIMEZONE_REGIONS = frozenset(
    {
        "Africa",
        "America",
        "Antarctica",
        "Arctic",
        "Asia",
        "Atlantic",
        "Australia",
        "Europe",
        "Indian",
        "Pacific",
    }
)

_DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def format_utc_offset(seconds: int) -> str:
    """``-12600`` -> ``"-03:30"``; the sign is kept for offsets under an hour."""

    sign = "-" if seconds < 0 else "+"
    hours, remainder = divmod(abs(int(seconds)), 3600)
    return f"{sign}{hours:02d}:{remainder // 60:02d}"


def load_zone(name: str) -> ZoneInfo | None:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None


def time_in_zone(name: str, *, now: datetime | None = None) -> TimeInfo:
    zone = load_zone(name)
    if zone is None:
        raise NotFoundError(f"Timezone not found: {name}", details={"timezone": name})

    local = (now or datetime.now(tz=zone)).astimezone(zone)
    offset = local.utcoffset()
    dst = local.dst()
    return TimeInfo(
        timezone=name,
        datetime=local.isoformat(timespec="seconds"),
        utc_offset=format_utc_offset(int(offset.total_seconds()) if offset else 0),
        # Python weeks start on Monday.
        day_of_week=(local.weekday() + 1) % 7,
        week_number=local.isocalendar()[1],
        dst=bool(dst),
        abbreviation=local.tzname() or "",
        unixtime=int(local.timestamp()),
    )


def list_timezones() -> TimezoneList:
    """Group canonical IANA zones by their first path component."""

    regions: dict[str, list[str]] = {}
    for name in available_timezones():
        region = name.split("/", 1)[0]
        if region in TIMEZONE_REGIONS or name == "UTC":
            regions.setdefault(region, []).append(name)

    for names in regions.values():
        names.sort()
    ordered = {region: regions[region] for region in sorted(regions)}
    return TimezoneList(total=sum(len(names) for names in ordered.values()), regions=ordered)


class TimeApiClient(JSONAPIClient):
    api_name = "timeapi.io"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = settings or AppSettings()
        super().__init__(settings, base_url=settings.timezone_base_url, transport=transport)

    def time_for_ip(self, ip: str) -> TimeInfo:
        try:
            ipaddress.ip_address(ip.strip())
        except ValueError as exc:
            raise InputValidationError(f"Invalid IP address: {ip}", details={"ip": ip}) from exc

        try:
            raw = self._request_json("GET", "/time/current/ip", params={"ipAddress": ip.strip()})
        except HTTPStatusError as exc:
            if exc.status_code == 404:
                raise NotFoundError("Timezone not found for IP", details={"ip": ip}) from exc
            raise

        try:
            data = TimeApiResponse.model_validate(raw)
        except ValidationError as exc:
            raise ResponseDecodeError("timeapi.io returned an unexpected payload") from exc

        week_number = 0
        abbreviation = ""
        zone = load_zone(data.time_zone) if data.time_zone else None
        if zone is not None:
            local = datetime.now(tz=zone)
            week_number = local.isocalendar()[1]
            abbreviation = local.tzname() or ""

        date_time = data.date_time
        if date_time and "T" not in date_time:
            date_time = date_time.replace(" ", "T", 1)

        return TimeInfo(
            timezone=data.time_zone,
            datetime=date_time,
            utc_offset=format_utc_offset(data.current_utc_offset.seconds),
            day_of_week=_DAY_NAMES.index(data.day_of_week) if data.day_of_week in _DAY_NAMES else 0,
            week_number=week_number,
            dst=data.dst_active,
            abbreviation=abbreviation,
            unixtime=int(time.time()),
        )
