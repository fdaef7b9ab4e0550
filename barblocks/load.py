"""System load average block."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from barblocks.state import BlockError, State, threshold_state


@dataclass(frozen=True)
class LoadAverage:
    """The 1, 5 and 15 minute load averages."""

    one: float
    five: float
    fifteen: float

    def as_dict(self) -> dict[str, float]:
        return {"1m": self.one, "5m": self.five, "15m": self.fifteen}


@dataclass
class LoadConfig:
    """Settings of the load block; thresholds are load per logical core."""

    interval: float = 5.0
    info: float = 0.3
    warning: float = 0.6
    critical: float = 0.9


def count_logical_cores(cpuinfo: str) -> int:
    """Count the ``processor`` entries of a /proc/cpuinfo listing."""
    return sum(1 for line in cpuinfo.splitlines() if line.startswith("processor"))


def parse_loadavg(text: str) -> LoadAverage:
    """Parse the first three fields of /proc/loadavg."""
    fields = text.split(" ")[:3]
    if len(fields) < 3:
        raise BlockError("load", "Failed to read the load average of your system!")
    try:
        one, five, fifteen = (float(f) for f in fields)
    except ValueError as exc:
        raise BlockError("load", "Failed to parse the load average") from exc
    return LoadAverage(one, five, fifteen)


def load_state(load: LoadAverage, logical_cores: int, config: LoadConfig) -> State:
    """State for the one-minute load spread over the logical cores."""
    if logical_cores:
        used = load.one / logical_cores
    else:
        used = math.inf if load.one > 0 else math.nan
    return threshold_state(used, config.info, config.warning, config.critical)


@dataclass
class Load:
    """Reads the load average and classifies it."""

    config: LoadConfig = field(default_factory=LoadConfig)
    cpuinfo_path: str | Path = "/proc/cpuinfo"
    loadavg_path: str | Path = "/proc/loadavg"

    def __post_init__(self) -> None:
        try:
            content = Path(self.cpuinfo_path).read_text()
        except OSError as exc:
            raise BlockError("load", "Your system doesn't support /proc/cpuinfo") from exc
        self.logical_cores = count_logical_cores(content)
        self.state = State.INFO
        self.load: LoadAverage | None = None

    def update(self) -> float:
        """Refresh the reading; returns seconds until the next update."""
        try:
            text = Path(self.loadavg_path).read_text()
        except OSError as exc:
            raise BlockError(
                "load",
                "Your system does not support reading the load average from /proc/loadavg",
            ) from exc
        self.load = parse_loadavg(text)
        self.state = load_state(self.load, self.logical_cores, self.config)
        return self.config.interval