"""WiFi scan and current-connection details.

macOS: ``system_profiler SPAirPortDataType -json`` (the ``airport`` CLI is
gone since Sonoma). Linux: NetworkManager's ``nmcli`` in terse mode, where
fields are ``:``-separated and literal colons (BSSIDs) appear as ``\\:``.
"""

from __future__ import annotations

import json
import logging
import re
import sys

from pydantic import ValidationError

from adapters.process_runner import invoke, run_command
from core.config import AppSettings
from core.domain.wifi import AirPortInterface, ConnectionInfo, Network, ScanResult
from core.errors import PlatformUnsupportedError, PocketError, ProcessTimeoutError
from core.interfaces.runner import CommandRunner

LOGGER = logging.getLogger(__name__)

SYSTEM_PROFILER_COMMAND = ("system_profiler", "SPAirPortDataType", "-json")
NMCLI_SCAN_COMMAND = ("nmcli", "-t", "-f", "SSID,BSSID,SIGNAL,CHAN,SECURITY", "dev", "wifi", "list")
NMCLI_SHOW_COMMAND = (
    "nmcli",
    "-t",
    "-f",
    "GENERAL.CONNECTION,WIFI.SSID,WIFI.BSSID,WIFI.CHAN,WIFI.RATE,WIFI.SIGNAL,WIFI.SECURITY",
    "dev",
    "show",
    "wlan0",
)
NMCLI_ACTIVE_COMMAND = ("nmcli", "-t", "-f", "active,ssid,bssid,signal,chan,security", "dev", "wifi")

_CONNECTED_STATUS = "spairport_status_connected"
_SECURITY_PREFIX = "spairport_security_mode_"
_SIGNAL_NOISE_RE = re.compile(r"(-?\d+)\s*dBm\s*/\s*(-?\d+)\s*dBm")

_DARWIN_SUGGESTION = "WiFi may be disabled"
_LINUX_SUGGESTION = "Ensure NetworkManager is installed and WiFi is enabled"


def parse_channel_number(value: str) -> int:
    """``"40 (5GHz, 80MHz)"`` -> 40; anything unparsable -> 0."""

    parts = value.split()
    if not parts:
        return 0
    try:
        return int(parts[0])
    except ValueError:
        return 0


def parse_signal_noise(value: str) -> tuple[int, int]:
    """``"-48 dBm / -92 dBm"`` -> ``(-48, -92)``; no match -> ``(0, 0)``."""

    match = _SIGNAL_NOISE_RE.search(value or "")
    if not match:
        return 0, 0
    return int(match.group(1)), int(match.group(2))


def clean_security_mode(mode: str) -> str:
    if mode.startswith(_SECURITY_PREFIX):
        mode = mode[len(_SECURITY_PREFIX):]
    return mode.replace("_", "-")


def find_wifi_interface(payload: str) -> AirPortInterface | None:
    """Pick ``en0`` from system_profiler JSON, else the first interface.

    Invalid JSON or an unexpected shape yields ``None``.
    """

    try:
        data = json.loads(payload)
        interfaces = data["SPAirPortDataType"][0]["spairport_airport_interfaces"]
        parsed = [AirPortInterface.model_validate(item) for item in interfaces]
    except (ValueError, KeyError, IndexError, TypeError, ValidationError):
        return None

    for interface in parsed:
        if interface.name == "en0":
            return interface
    return parsed[0] if parsed else None


def parse_system_profiler_scan(payload: str) -> list[Network]:
    interface = find_wifi_interface(payload)
    if interface is None:
        return []

    networks: list[Network] = []
    for entry in interface.other_networks:
        if not entry.name:
            continue
        rssi, _ = parse_signal_noise(entry.signal_noise)
        networks.append(
            Network(
                ssid=entry.name,
                rssi=rssi,
                channel=parse_channel_number(entry.channel),
                security=clean_security_mode(entry.security_mode),
            )
        )
    return networks


def parse_system_profiler_current(payload: str) -> ConnectionInfo:
    interface = find_wifi_interface(payload)
    if interface is None or interface.status != _CONNECTED_STATUS or interface.current_network is None:
        return ConnectionInfo()

    current = interface.current_network
    rssi, noise = parse_signal_noise(current.signal_noise)
    return ConnectionInfo(
        ssid=current.name,
        connected=bool(current.name),
        channel=parse_channel_number(current.channel),
        security=clean_security_mode(current.security_mode),
        rssi=rssi,
        noise=noise,
        tx_rate=f"{current.rate} Mbps" if current.rate > 0 else "",
    )


def split_terse(line: str) -> list[str]:
    """Split one ``nmcli -t`` line on unescaped colons."""

    fields: list[str] = []
    current: list[str] = []
    chars = iter(line)
    for char in chars:
        if char == "\\":
            escaped = next(chars, "")
            current.append(escaped)
        elif char == ":":
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def _to_int(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_nmcli_scan(output: str) -> list[Network]:
    networks: list[Network] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        fields = split_terse(line)
        if len(fields) < 5:
            continue
        signal = _to_int(fields[2])
        channel = _to_int(fields[3])
        networks.append(
            Network(
                ssid=fields[0],
                bssid=fields[1],
                # nmcli reports signal as a percentage; approximate dBm.
                rssi=signal - 100 if signal is not None else 0,
                channel=channel or 0,
                security=fields[4],
            )
        )
    return networks


def parse_nmcli_device(output: str) -> ConnectionInfo:
    """Parse ``nmcli -t dev show`` ``KEY:value`` lines."""

    info = ConnectionInfo()
    for line in output.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.replace("\\:", ":").strip()

        if key in ("WIFI.SSID", "GENERAL.CONNECTION"):
            if value and value != "--":
                info.ssid = value
                info.connected = True
        elif key == "WIFI.BSSID":
            info.bssid = value
        elif key == "WIFI.SIGNAL":
            signal = _to_int(value)
            if signal is not None:
                info.rssi = signal - 100
        elif key == "WIFI.CHAN":
            info.channel = _to_int(value) or 0
        elif key == "WIFI.RATE":
            info.tx_rate = value
        elif key == "WIFI.SECURITY":
            info.security = value
    return info


def parse_nmcli_active(output: str) -> ConnectionInfo:
    """Parse ``active:ssid:bssid:signal:chan:security`` rows; use the active one."""

    for line in output.splitlines():
        fields = split_terse(line)
        if len(fields) < 6 or fields[0] != "yes":
            continue
        signal = _to_int(fields[3])
        return ConnectionInfo(
            ssid=fields[1],
            bssid=fields[2],
            rssi=signal - 100 if signal is not None else 0,
            channel=_to_int(fields[4]) or 0,
            security=fields[5],
            connected=bool(fields[1]),
        )
    return ConnectionInfo()


class WifiInspector:
    """Runs the platform's WiFi tool and parses its output."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        runner: CommandRunner = invoke,
        platform: str | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._runner = runner
        self._platform = platform or sys.platform

    def _run(self, command: tuple[str, ...]) -> str:
        return run_command(command, timeout=self._settings.script_timeout_seconds, runner=self._runner)

    def _fail(self, exc: PocketError, program: str, kind: str, suggestion: str) -> PocketError:
        if isinstance(exc, ProcessTimeoutError):
            return exc
        exc.message = f"{program} failed: {exc.message}"
        exc.kind = kind
        exc.details = {**exc.details, "suggestion": suggestion}
        return exc

    def _unsupported(self, action: str) -> PlatformUnsupportedError:
        return PlatformUnsupportedError(
            f"WiFi {action} not supported on {self._platform}",
            details={"supported": "macOS, Linux"},
        )

    def scan(self) -> ScanResult:
        if self._platform == "darwin":
            command, parse, suggestion = SYSTEM_PROFILER_COMMAND, parse_system_profiler_scan, _DARWIN_SUGGESTION
        elif self._platform.startswith("linux"):
            command, parse, suggestion = NMCLI_SCAN_COMMAND, parse_nmcli_scan, _LINUX_SUGGESTION
        else:
            raise self._unsupported("scan")

        try:
            output = self._run(command)
        except PocketError as exc:
            raise self._fail(exc, command[0], "wifi_scan_error", suggestion) from None

        networks = parse(output)
        LOGGER.debug("wifi_scan platform=%s networks=%d", self._platform, len(networks))
        return ScanResult(networks=networks, count=len(networks))

    def current(self) -> ConnectionInfo:
        if self._platform == "darwin":
            try:
                output = self._run(SYSTEM_PROFILER_COMMAND)
            except PocketError as exc:
                raise self._fail(exc, SYSTEM_PROFILER_COMMAND[0], "wifi_info_error", _DARWIN_SUGGESTION) from None
            return parse_system_profiler_current(output)

        if not self._platform.startswith("linux"):
            raise self._unsupported("info")

        try:
            return parse_nmcli_device(self._run(NMCLI_SHOW_COMMAND))
        except PocketError as exc:
            LOGGER.debug("wifi_current wlan0 lookup failed (%s), trying active network list", exc.kind)

        try:
            output = self._run(NMCLI_ACTIVE_COMMAND)
        except PocketError as exc:
            raise self._fail(exc, NMCLI_ACTIVE_COMMAND[0], "wifi_info_error", _LINUX_SUGGESTION) from None
        return parse_nmcli_active(output)
