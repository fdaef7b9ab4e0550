"""Phone state tracked from KDE Connect signals."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from barblocks.kdeconnect_signals import (
    AllNotificationsRemoved,
    BatteryChargeChanged,
    BatteryRefreshed,
    BatteryStateChanged,
    DaemonDeviceVisibilityChanged,
    DeviceNameChanged,
    DeviceReachableChanged,
    NotificationPosted,
    NotificationRemoved,
    Signal,
)


@dataclass
class PhoneState:
    """What the block knows about the phone; safe to update from another thread."""

    name: str = ""
    charge: int = 0
    charging: bool = False
    notif_count: int = 0
    reachable: bool = False
    _lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def apply(self, signal: Signal) -> bool:
        """Update the state from a signal; returns whether the block should redraw.

        A charge change alone does not request a redraw: older daemons send
        it together with a state change, which does.
        """
        with self._lock:
            if isinstance(signal, DeviceNameChanged):
                self.name = signal.name
            elif isinstance(signal, DeviceReachableChanged):
                self.reachable = signal.reachable
            elif isinstance(signal, BatteryStateChanged):
                self.charging = signal.charging
            elif isinstance(signal, BatteryChargeChanged):
                self.charge = signal.charge
                return False
            elif isinstance(signal, BatteryRefreshed):
                self.battery_refreshed(signal.is_charging, signal.charge)
            elif isinstance(signal, NotificationPosted):
                self.notification_posted()
            elif isinstance(signal, NotificationRemoved):
                self.notification_removed()
            elif isinstance(signal, AllNotificationsRemoved):
                self.all_notifications_removed()
            elif isinstance(signal, DaemonDeviceVisibilityChanged):
                self.reachable = signal.is_visible
            else:
                return False
            return True

    def notification_posted(self) -> None:
        with self._lock:
            self.notif_count += 1

    def notification_removed(self) -> None:
        with self._lock:
            self.notif_count = max(0, self.notif_count - 1)

    def all_notifications_removed(self) -> None:
        with self._lock:
            self.notif_count = 0

    def battery_refreshed(self, is_charging: bool, charge: int) -> None:
        with self._lock:
            self.charging = is_charging
            self.charge = charge