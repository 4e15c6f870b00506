"""WiFi scan / connection models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Network(BaseModel):
    ssid: str
    bssid: str = ""
    rssi: int = Field(default=0, description="Signal in dBm (0 when unknown).")
    channel: int = 0
    security: str = ""


class ScanResult(BaseModel):
    networks: list[Network] = Field(default_factory=list)
    count: int = 0


class ConnectionInfo(BaseModel):
    ssid: str = ""
    bssid: str = ""
    rssi: int = 0
    noise: int = 0
    channel: int = 0
    tx_rate: str = ""
    security: str = ""
    connected: bool = False


class AirPortNetwork(BaseModel):
    """One network entry of ``system_profiler SPAirPortDataType -json``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(default="", alias="_name")
    channel: str = Field(default="", alias="spairport_network_channel")
    security_mode: str = Field(default="", alias="spairport_security_mode")
    signal_noise: str = Field(default="", alias="spairport_signal_noise")
    phy_mode: str = Field(default="", alias="spairport_network_phymode")
    rate: int = Field(default=0, alias="spairport_network_rate")
    mcs: int = Field(default=0, alias="spairport_network_mcs")


class AirPortInterface(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(default="", alias="_name")
    status: str = Field(default="", alias="spairport_status_information")
    current_network: AirPortNetwork | None = Field(
        default=None,
        alias="spairport_current_network_information",
    )
    other_networks: list[AirPortNetwork] = Field(
        default_factory=list,
        alias="spairport_airport_other_local_wireless_networks",
    )
    mac_address: str = Field(default="", alias="spairport_wireless_mac_address")
