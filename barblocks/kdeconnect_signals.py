"""Signals emitted by the KDE Connect daemon and its devices."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import astuple, dataclass, fields
from typing import Any, ClassVar

from barblocks.state import BlockError

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

_REGISTRY: dict[tuple[str, str], type[Signal]] = {}


def _matches(type_name: str, value: Any) -> bool:
    if type_name == "bool":
        return isinstance(value, bool)
    if type_name == "int":
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and _I32_MIN <= value <= _I32_MAX
        )
    if type_name == "str":
        return isinstance(value, str)
    return False


@dataclass(frozen=True)
class Signal:
    """Base of all signals; subclasses name their interface and member."""

    INTERFACE: ClassVar[str] = ""
    NAME: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.INTERFACE and cls.NAME:
            _REGISTRY[(cls.INTERFACE, cls.NAME)] = cls

    @classmethod
    def from_args(cls, args: Sequence[Any]) -> Signal:
        """Build the signal from its message arguments, checking their types."""
        params = fields(cls)
        args = list(args)
        if len(args) != len(params):
            raise BlockError(
                "kdeconnect",
                f"{cls.NAME}: expected {len(params)} arguments, got {len(args)}",
            )
        for param, value in zip(params, args):
            if not _matches(str(param.type), value):
                raise BlockError(
                    "kdeconnect",
                    f"{cls.NAME}: argument {param.name} has the wrong type",
                )
        return cls(*args)

    def to_args(self) -> tuple[Any, ...]:
        """The message arguments of this signal, in order."""
        return astuple(self)


@dataclass(frozen=True)
class DeviceNameChanged(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.device"
    NAME: ClassVar[str] = "nameChanged"
    name: str


@dataclass(frozen=True)
class DeviceReachableChanged(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.device"
    NAME: ClassVar[str] = "reachableChanged"
    reachable: bool


@dataclass(frozen=True)
class BatteryRefreshed(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.device.battery"
    NAME: ClassVar[str] = "refreshed"
    is_charging: bool
    charge: int


@dataclass(frozen=True)
class BatteryStateChanged(Signal):
    """Charging state, sent by daemons of version 20.08.3 and older."""

    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.device.battery"
    NAME: ClassVar[str] = "stateChanged"
    charging: bool


@dataclass(frozen=True)
class BatteryChargeChanged(Signal):
    """Charge level, sent by daemons of version 20.08.3 and older."""

    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.device.battery"
    NAME: ClassVar[str] = "chargeChanged"
    charge: int


@dataclass(frozen=True)
class NotificationPosted(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.device.notifications"
    NAME: ClassVar[str] = "notificationPosted"
    public_id: str


@dataclass(frozen=True)
class NotificationRemoved(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.device.notifications"
    NAME: ClassVar[str] = "notificationRemoved"
    public_id: str


@dataclass(frozen=True)
class NotificationUpdated(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.device.notifications"
    NAME: ClassVar[str] = "notificationUpdated"
    public_id: str


@dataclass(frozen=True)
class AllNotificationsRemoved(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.device.notifications"
    NAME: ClassVar[str] = "allNotificationsRemoved"


@dataclass(frozen=True)
class DaemonDeviceAdded(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.daemon"
    NAME: ClassVar[str] = "deviceAdded"
    id: str


@dataclass(frozen=True)
class DaemonDeviceRemoved(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.daemon"
    NAME: ClassVar[str] = "deviceRemoved"
    id: str


@dataclass(frozen=True)
class DaemonDeviceVisibilityChanged(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.daemon"
    NAME: ClassVar[str] = "deviceVisibilityChanged"
    id: str
    is_visible: bool


@dataclass(frozen=True)
class DaemonDeviceListChanged(Signal):
    INTERFACE: ClassVar[str] = "org.kde.kdeconnect.daemon"
    NAME: ClassVar[str] = "deviceListChanged"


def signal_from_args(interface: str, member: str, args: Sequence[Any]) -> Signal:
    """Decode a signal message given its interface, member and arguments."""
    cls = _REGISTRY.get((interface, member))
    if cls is None:
        raise BlockError("kdeconnect", f"unknown signal {interface}.{member}")
    return cls.from_args(args)