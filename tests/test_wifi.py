from __future__ import annotations

import json

import pytest

from adapters.system_sources.wifi import (
    NMCLI_ACTIVE_COMMAND,
    NMCLI_SCAN_COMMAND,
    NMCLI_SHOW_COMMAND,
    SYSTEM_PROFILER_COMMAND,
    WifiInspector,
    clean_security_mode,
    parse_channel_number,
    parse_nmcli_active,
    parse_nmcli_device,
    parse_nmcli_scan,
    parse_signal_noise,
    parse_system_profiler_current,
    parse_system_profiler_scan,
    split_terse,
)
from core.config import AppSettings
from core.domain.invocation import ExitClassification, InvocationRequest, InvocationResult
from core.errors import PlatformUnsupportedError, ProcessTimeoutError, ScriptError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("40 (5GHz, 80MHz)", 40),
        ("6", 6),
        ("abc", 0),
        ("", 0),
    ],
)
def test_parse_channel_number(raw: str, expected: int) -> None:
    assert parse_channel_number(raw) == expected


def test_parse_signal_noise() -> None:
    assert parse_signal_noise("-48 dBm / -92 dBm") == (-48, -92)
    assert parse_signal_noise("-60dBm/-90dBm") == (-60, -90)
    assert parse_signal_noise("") == (0, 0)
    assert parse_signal_noise("n/a") == (0, 0)


def test_clean_security_mode() -> None:
    assert clean_security_mode("spairport_security_mode_wpa2_personal") == "wpa2-personal"
    assert clean_security_mode("wpa3_sae") == "wpa3-sae"
    assert clean_security_mode("") == ""


def _profiler_payload(*interfaces: dict) -> str:
    return json.dumps({"SPAirPortDataType": [{"spairport_airport_interfaces": list(interfaces)}]})


EN0 = {
    "_name": "en0",
    "spairport_status_information": "spairport_status_connected",
    "spairport_current_network_information": {
        "_name": "HomeNet",
        "spairport_network_channel": "149 (5GHz, 80MHz)",
        "spairport_security_mode": "spairport_security_mode_wpa2_personal",
        "spairport_signal_noise": "-52 dBm / -94 dBm",
        "spairport_network_rate": 866,
    },
    "spairport_airport_other_local_wireless_networks": [
        {
            "_name": "Cafe",
            "spairport_network_channel": "6",
            "spairport_security_mode": "spairport_security_mode_none",
            "spairport_signal_noise": "-70 dBm / -95 dBm",
        },
        {"_name": "", "spairport_network_channel": "11"},
    ],
}


def test_profiler_prefers_en0() -> None:
    other = {"_name": "awdl0", "spairport_airport_other_local_wireless_networks": [{"_name": "Wrong"}]}

    networks = parse_system_profiler_scan(_profiler_payload(other, EN0))

    assert [n.model_dump() for n in networks] == [
        {"ssid": "Cafe", "bssid": "", "rssi": -70, "channel": 6, "security": "none"},
    ]


def test_profiler_falls_back_to_first_interface() -> None:
    first = {"_name": "en1", "spairport_airport_other_local_wireless_networks": [{"_name": "Lab"}]}

    assert [n.ssid for n in parse_system_profiler_scan(_profiler_payload(first))] == ["Lab"]


def test_profiler_invalid_json_is_empty() -> None:
    assert parse_system_profiler_scan("not json") == []
    assert parse_system_profiler_current("{}").connected is False


def test_profiler_current_connection() -> None:
    info = parse_system_profiler_current(_profiler_payload(EN0))

    assert info.model_dump() == {
        "ssid": "HomeNet",
        "bssid": "",
        "rssi": -52,
        "noise": -94,
        "channel": 149,
        "tx_rate": "866 Mbps",
        "security": "wpa2-personal",
        "connected": True,
    }


def test_profiler_current_requires_connected_status() -> None:
    disconnected = dict(EN0, spairport_status_information="spairport_status_off")

    assert parse_system_profiler_current(_profiler_payload(disconnected)).connected is False


def test_split_terse_handles_escaped_colons() -> None:
    assert split_terse(r"Home:AA\:BB\:CC\:DD\:EE\:FF:70:6:WPA2") == ["Home", "AA:BB:CC:DD:EE:FF", "70", "6", "WPA2"]


def test_parse_nmcli_scan() -> None:
    output = "\n".join(
        [
            r"Home:AA\:BB\:CC\:DD\:EE\:FF:70:6:WPA2",
            r"Guest:11\:22\:33\:44\:55\:66:45:x:",
            "short:line",
            "",
        ]
    )

    networks = parse_nmcli_scan(output)

    assert [n.model_dump() for n in networks] == [
        {"ssid": "Home", "bssid": "AA:BB:CC:DD:EE:FF", "rssi": -30, "channel": 6, "security": "WPA2"},
        {"ssid": "Guest", "bssid": "11:22:33:44:55:66", "rssi": -55, "channel": 0, "security": ""},
    ]


def test_parse_nmcli_device() -> None:
    output = "\n".join(
        [
            "GENERAL.CONNECTION:Home",
            "WIFI.SSID:--",
            r"WIFI.BSSID:AA\:BB\:CC\:DD\:EE\:FF",
            "WIFI.CHAN:11",
            "WIFI.RATE:130 Mbit/s",
            "WIFI.SIGNAL:81",
            "WIFI.SECURITY:WPA2",
        ]
    )

    info = parse_nmcli_device(output)

    assert info.ssid == "Home"
    assert info.connected is True
    assert info.bssid == "AA:BB:CC:DD:EE:FF"
    assert info.rssi == -19
    assert info.channel == 11
    assert info.tx_rate == "130 Mbit/s"
    assert info.security == "WPA2"


def test_parse_nmcli_active_picks_active_row() -> None:
    output = "no:Other:11\\:22\\:33\\:44\\:55\\:66:40:1:WPA2\nyes:Home:AA\\:BB\\:CC\\:DD\\:EE\\:FF:90:36:WPA3\n"

    info = parse_nmcli_active(output)

    assert info.ssid == "Home"
    assert info.rssi == -10
    assert info.channel == 36
    assert info.connected is True


class ScriptedRunner:
    def __init__(self, responses: dict[tuple[str, ...], InvocationResult]) -> None:
        self.responses = responses
        self.commands: list[tuple[str, ...]] = []

    def __call__(self, request: InvocationRequest) -> InvocationResult:
        self.commands.append(request.command)
        return self.responses[request.command]


def _ok(stdout: str) -> InvocationResult:
    return InvocationResult(stdout=stdout, stderr="", classification=ExitClassification.SUCCESS, returncode=0)


def _failed(stderr: str) -> InvocationResult:
    return InvocationResult(stdout="", stderr=stderr, classification=ExitClassification.NON_ZERO_EXIT, returncode=10)


def test_scan_on_darwin_uses_system_profiler() -> None:
    runner = ScriptedRunner({SYSTEM_PROFILER_COMMAND: _ok(_profiler_payload(EN0))})

    result = WifiInspector(AppSettings(), runner=runner, platform="darwin").scan()

    assert result.count == 1
    assert result.networks[0].ssid == "Cafe"


def test_scan_failure_has_kind_and_suggestion() -> None:
    runner = ScriptedRunner({NMCLI_SCAN_COMMAND: _failed("Error: NetworkManager is not running.")})

    with pytest.raises(ScriptError) as info:
        WifiInspector(AppSettings(), runner=runner, platform="linux").scan()

    assert info.value.kind == "wifi_scan_error"
    assert info.value.message == "nmcli failed: Error: NetworkManager is not running."
    assert info.value.details["suggestion"] == "Ensure NetworkManager is installed and WiFi is enabled"


def test_scan_timeout_keeps_timeout_kind() -> None:
    timeout = InvocationResult(stdout="", stderr="", classification=ExitClassification.TIMEOUT)
    runner = ScriptedRunner({SYSTEM_PROFILER_COMMAND: timeout})

    with pytest.raises(ProcessTimeoutError) as info:
        WifiInspector(AppSettings(), runner=runner, platform="darwin").scan()

    assert info.value.kind == "timeout"


def test_current_on_linux_falls_back_to_active_list() -> None:
    runner = ScriptedRunner(
        {
            NMCLI_SHOW_COMMAND: _failed("Error: Device 'wlan0' not found."),
            NMCLI_ACTIVE_COMMAND: _ok("yes:Home:AA\\:BB\\:CC\\:DD\\:EE\\:FF:90:36:WPA3"),
        }
    )

    info = WifiInspector(AppSettings(), runner=runner, platform="linux").current()

    assert runner.commands == [NMCLI_SHOW_COMMAND, NMCLI_ACTIVE_COMMAND]
    assert info.ssid == "Home"
    assert info.bssid == "AA:BB:CC:DD:EE:FF"


def test_current_on_linux_reports_info_error_when_both_fail() -> None:
    runner = ScriptedRunner(
        {
            NMCLI_SHOW_COMMAND: _failed("no wlan0"),
            NMCLI_ACTIVE_COMMAND: _failed("no wifi"),
        }
    )

    with pytest.raises(ScriptError) as info:
        WifiInspector(AppSettings(), runner=runner, platform="linux").current()

    assert info.value.kind == "wifi_info_error"


def test_unsupported_platform() -> None:
    runner = ScriptedRunner({})

    with pytest.raises(PlatformUnsupportedError, match="not supported on win32"):
        WifiInspector(AppSettings(), runner=runner, platform="win32").scan()
    assert runner.commands == []
