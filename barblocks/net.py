"""Network device inspection and throughput sampling."""

from __future__ import annotations

import re
import subprocess
from collections import deque
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from barblocks.netparse import (
    parse_default_device,
    parse_ethtool_speed,
    parse_ip_json,
    parse_iw_bitrate,
    read_sys_file,
)
from barblocks.state import BlockError

_DIGITS = re.compile(r"\+?[0-9]+")


class Unit(Enum):
    """Byte unit used for displaying speeds."""

    B = "B"
    K = "K"
    M = "M"
    G = "G"
    T = "T"

    @classmethod
    def default(cls) -> Unit:
        return cls.K

    def __str__(self) -> str:
        return self.value


@dataclass
class NetConfig:
    """Settings of the network block."""

    interval: float = 1.0
    format: str = "{speed_down;K}{speed_up;K}"
    format_alt: str | None = None
    device: str | None = None
    hide_inactive: bool = False
    hide_missing: bool = False


def _run(args: list[str], error: str) -> bytes:
    try:
        return subprocess.run(args, capture_output=True, check=False).stdout
    except OSError as exc:
        raise BlockError("net", error) from exc


@dataclass(frozen=True)
class NetworkDevice:
    """A network interface under /sys/class/net."""

    device: str
    device_path: Path
    wireless: bool = False
    tun: bool = False
    wg: bool = False
    ppp: bool = False

    @classmethod
    def from_device(
        cls, device: str, sys_class_net: str | Path = "/sys/class/net"
    ) -> NetworkDevice:
        """Inspect the interface ``device``; its kind is fixed at this point."""
        path = Path(sys_class_net) / device
        wireless = (path / "wireless").exists()
        tun = (
            (path / "tun_flags").exists()
            or device.startswith("tun")
            or device.startswith("tap")
        )
        try:
            uevent = (path / "uevent").read_text()
        except (OSError, UnicodeDecodeError):
            uevent = ""
        return cls(
            device=device,
            device_path=path,
            wireless=wireless,
            tun=tun,
            wg="wireguard" in uevent,
            ppp="ppp" in uevent,
        )

    @staticmethod
    def default_device() -> str | None:
        """Name of the device carrying the default route, if any."""
        try:
            result = subprocess.run(
                ["ip", "route", "show", "default"], capture_output=True, check=False
            )
        except OSError:
            return None
        return parse_default_device(result.stdout)

    def exists(self) -> bool:
        return self.device_path.exists()

    def is_up(self) -> bool:
        """Whether the device is up; a device that is not up need not be down."""
        operstate_file = self.device_path / "operstate"
        if not operstate_file.exists():
            return False
        if self.is_vpn():
            return True
        if read_sys_file(operstate_file) == "up":
            return True
        carrier_file = self.device_path / "carrier"
        if not carrier_file.exists():
            return False
        try:
            return read_sys_file(carrier_file) == "1"
        except BlockError:
            return False

    def _statistic(self, name: str) -> int:
        text = read_sys_file(self.device_path / "statistics" / name)
        if not _DIGITS.fullmatch(text):
            raise BlockError("net", f"Failed to parse {name}")
        return int(text)

    def tx_bytes(self) -> int:
        return self._statistic("tx_bytes")

    def rx_bytes(self) -> int:
        return self._statistic("rx_bytes")

    def is_wireless(self) -> bool:
        return self.wireless

    def is_vpn(self) -> bool:
        return self.tun or self.wg or self.ppp

    def icon_name(self) -> str:
        """Name of the icon that represents this kind of device."""
        if self.wireless:
            return "net_wireless"
        if self.is_vpn():
            return "net_vpn"
        if self.device == "lo":
            return "net_loopback"
        return "net_wired"

    def _address(self, family: str) -> str | None:
        if not self.is_up():
            return None
        output = _run(
            ["ip", "-json", "-family", family, "address", "show", self.device],
            "Failed to execute IP address query.",
        )
        try:
            text = output.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BlockError("net", "Response contained non-UTF8 characters.") from exc
        return parse_ip_json(text)

    def ip_addr(self) -> str | None:
        """IPv4 address of the device, ``""`` if it has none, ``None`` if down."""
        return self._address("inet")

    def ipv6_addr(self) -> str | None:
        """IPv6 address of the device, ``""`` if it has none, ``None`` if down."""
        return self._address("inet6")

    def bitrate(self) -> str | None:
        """Link bitrate via iw (wireless) or ethtool (wired); ``None`` if unknown."""
        if not self.is_up():
            return None
        if self.wireless:
            output = _run(
                ["iw", "dev", self.device, "link"],
                "Failed to execute bitrate query with iw.",
            )
            return parse_iw_bitrate(output)
        output = _run(
            ["ethtool", self.device],
            "Failed to execute bitrate query with ethtool",
        )
        return parse_ethtool_speed(output)


class TrafficCounter:
    """Turns a growing byte counter into per-second rates with a short history."""

    def __init__(self, initial_bytes: int, interval: float, history: int = 10) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.last_bytes = initial_bytes
        self.interval = interval
        self.samples: deque[float] = deque([0.0] * history, maxlen=history)
        self.rate = 0

    def sample(self, current_bytes: int) -> int:
        """Record a new counter reading and return bytes per second since the last."""
        diff = max(0, current_bytes - self.last_bytes)
        self.rate = int(diff / self.interval)
        self.last_bytes = current_bytes
        self.samples.append(float(self.rate))
        return self.rate