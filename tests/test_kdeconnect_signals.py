import pytest

from barblocks.kdeconnect_signals import (
    AllNotificationsRemoved,
    BatteryChargeChanged,
    BatteryRefreshed,
    BatteryStateChanged,
    DaemonDeviceAdded,
    DaemonDeviceListChanged,
    DaemonDeviceRemoved,
    DaemonDeviceVisibilityChanged,
    DeviceNameChanged,
    DeviceReachableChanged,
    NotificationPosted,
    NotificationRemoved,
    NotificationUpdated,
    signal_from_args,
)
from barblocks.state import BlockError

SAMPLES = [
    DeviceNameChanged(name="Phone"),
    DeviceReachableChanged(reachable=True),
    BatteryRefreshed(is_charging=False, charge=57),
    BatteryStateChanged(charging=True),
    BatteryChargeChanged(charge=12),
    NotificationPosted(public_id="n1"),
    NotificationRemoved(public_id="n1"),
    NotificationUpdated(public_id="n2"),
    AllNotificationsRemoved(),
    DaemonDeviceAdded(id="dev-example"),
    DaemonDeviceRemoved(id="dev-example"),
    DaemonDeviceVisibilityChanged(id="dev-example", is_visible=False),
    DaemonDeviceListChanged(),
]


@pytest.mark.parametrize("signal", SAMPLES, ids=lambda s: type(s).__name__)
def test_round_trip(signal):
    decoded = signal_from_args(signal.INTERFACE, signal.NAME, signal.to_args())
    assert decoded == signal
    assert type(decoded) is type(signal)


def test_name_changed_decoding():
    sig = signal_from_args("org.kde.kdeconnect.device", "nameChanged", ["Phone"])
    assert sig == DeviceNameChanged(name="Phone")


def test_battery_refreshed_argument_order():
    sig = signal_from_args("org.kde.kdeconnect.device.battery", "refreshed", [True, 80])
    assert sig.is_charging is True
    assert sig.charge == 80


def test_visibility_changed_fields():
    sig = signal_from_args(
        "org.kde.kdeconnect.daemon", "deviceVisibilityChanged", ("abc", True)
    )
    assert (sig.id, sig.is_visible) == ("abc", True)


def test_same_member_differs_by_interface():
    assert isinstance(
        signal_from_args("org.kde.kdeconnect.device.battery", "chargeChanged", [5]),
        BatteryChargeChanged,
    )
    with pytest.raises(BlockError):
        signal_from_args("org.kde.kdeconnect.device", "chargeChanged", [5])


def test_unknown_signal():
    with pytest.raises(BlockError):
        signal_from_args("org.kde.kdeconnect.daemon", "noSuchSignal", [])


def test_wrong_argument_count():
    with pytest.raises(BlockError):
        signal_from_args("org.kde.kdeconnect.device", "nameChanged", [])
    with pytest.raises(BlockError):
        signal_from_args(
            "org.kde.kdeconnect.device.notifications", "allNotificationsRemoved", ["x"]
        )


def test_wrong_argument_type():
    with pytest.raises(BlockError):
        signal_from_args("org.kde.kdeconnect.device", "reachableChanged", [1])
    with pytest.raises(BlockError):
        signal_from_args("org.kde.kdeconnect.device.battery", "chargeChanged", [True])
    with pytest.raises(BlockError):
        signal_from_args("org.kde.kdeconnect.device", "nameChanged", [7])


def test_charge_out_of_int32_range():
    with pytest.raises(BlockError):
        signal_from_args(
            "org.kde.kdeconnect.device.battery", "chargeChanged", [2**31]
        )


def test_empty_signal_has_no_args():
    assert AllNotificationsRemoved().to_args() == ()