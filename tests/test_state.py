import math

import pytest

from barblocks.state import BlockError, State, threshold_state


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.95, State.CRITICAL),
        (0.7, State.WARNING),
        (0.4, State.INFO),
        (0.1, State.IDLE),
    ],
)
def test_threshold_levels(value, expected):
    assert threshold_state(value, 0.3, 0.6, 0.9) is expected


def test_threshold_boundaries_are_exclusive():
    assert threshold_state(0.9, 0.3, 0.6, 0.9) is State.WARNING
    assert threshold_state(0.6, 0.3, 0.6, 0.9) is State.INFO
    assert threshold_state(0.3, 0.3, 0.6, 0.9) is State.IDLE


def test_threshold_without_info_level():
    assert threshold_state(50.0, None, 80.0, 95.0) is State.IDLE
    assert threshold_state(81.0, None, 80.0, 95.0) is State.WARNING


def test_threshold_nan_is_idle():
    assert threshold_state(math.nan, 0.3, 0.6, 0.9) is State.IDLE


def test_block_error_carries_block_and_message():
    err = BlockError("load", "broken")
    assert err.block == "load"
    assert err.message == "broken"
    assert "broken" in str(err)
    with pytest.raises(BlockError):
        raise err