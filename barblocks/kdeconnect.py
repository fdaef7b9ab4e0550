"""Presentation of a phone connected through KDE Connect."""

from __future__ import annotations

from dataclasses import dataclass

from barblocks.kdeconnect_state import PhoneState
from barblocks.state import State

_DEVICES_PATH = "/modules/kdeconnect/devices"


@dataclass
class KdeConnectConfig:
    """Settings of the KDE Connect block; thresholds are battery percents."""

    device_id: str | None = None
    bat_good: int = 60
    bat_info: int = 60
    bat_warning: int = 30
    bat_critical: int = 15
    format: str = "{name} {bat_icon}{bat_charge} {notif_icon}{notif_count}"
    format_disconnected: str = "{name}"


def is_old_kdeconnect(version_output: str) -> bool:
    """Whether ``kdeconnect-cli --version`` reports a 1.x release (20.08.3 or older)."""
    return "kdeconnect-cli 1." in version_output


def device_path(device_id: str, suffix: str | None = None) -> str:
    """D-Bus object path of a device, or of one of its plugins."""
    path = f"{_DEVICES_PATH}/{device_id}"
    return f"{path}/{suffix}" if suffix else path


def phone_values(state: PhoneState, device_id: str) -> dict[str, object]:
    """Values for the format string.

    ``bat_icon`` is the icon name while charging or when the charge is
    unknown, and ``None`` when the icon follows the battery level.
    """
    charge = state.charge
    charging = state.charging
    if charging:
        bat_icon: str | None = "bat_charging"
    elif charge < 0:
        bat_icon = "bat_full"
    else:
        bat_icon = None
    return {
        "bat_icon": bat_icon,
        "bat_charge": max(0, min(100, charge)),
        "bat_state": "true" if charging else "false",
        "notif_icon": "notification",
        "notif_count": state.notif_count,
        "name": state.name,
        "id": device_id,
    }


def phone_widget_state(state: PhoneState, config: KdeConnectConfig) -> State:
    """Widget state from battery, notifications and reachability."""
    if not state.reachable:
        return State.CRITICAL
    thresholds = (
        config.bat_critical,
        config.bat_warning,
        config.bat_info,
        config.bat_good,
    )
    if thresholds == (0, 0, 0, 0):
        return State.IDLE if state.notif_count == 0 else State.INFO
    if state.charging:
        return State.GOOD
    charge = state.charge
    if charge <= config.bat_critical:
        return State.CRITICAL
    if charge <= config.bat_warning:
        return State.WARNING
    if charge <= config.bat_info:
        return State.INFO
    if charge > config.bat_good:
        return State.GOOD
    return State.IDLE