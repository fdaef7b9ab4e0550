"""Widget states shared by all blocks, and the error blocks raise."""

from __future__ import annotations

from enum import Enum


class State(Enum):
    """Visual state of a bar widget."""

    IDLE = "Idle"
    INFO = "Info"
    GOOD = "Good"
    WARNING = "Warning"
    CRITICAL = "Critical"


class BlockError(Exception):
    """A block failed to gather or present its data."""

    def __init__(self, block: str, message: str) -> None:
        super().__init__(f"{block}: {message}")
        self.block = block
        self.message = message


def threshold_state(
    value: float,
    info: float | None,
    warning: float,
    critical: float,
) -> State:
    """Map a value onto a state; each threshold must be strictly exceeded.

    ``info`` may be ``None`` for blocks that have no info level.
    """
    if value > critical:
        return State.CRITICAL
    if value > warning:
        return State.WARNING
    if info is not None and value > info:
        return State.INFO
    return State.IDLE