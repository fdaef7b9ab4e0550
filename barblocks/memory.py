"""Memory and swap usage block."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path

from barblocks.state import BlockError, State, threshold_state

_ARC_SIZE = re.compile(r"size\s+\d+\s+(\d+)")

_MEMINFO_KEYS = {
    "MemTotal:": "mem_total",
    "MemFree:": "mem_free",
    "Buffers:": "buffers",
    "Cached:": "cached",
    "SReclaimable:": "s_reclaimable",
    "Shmem:": "shmem",
    "SwapTotal:": "swap_total",
    "SwapFree:": "swap_free",
}


class Memtype(Enum):
    """Which view the block shows."""

    SWAP = "swap"
    MEMORY = "memory"


@dataclass
class MemState:
    """Raw figures from /proc/meminfo in KiB; the ZFS ARC size is in bytes."""

    mem_total: int = 0
    mem_free: int = 0
    buffers: int = 0
    cached: int = 0
    s_reclaimable: int = 0
    shmem: int = 0
    swap_total: int = 0
    swap_free: int = 0
    zfs_arc_cache: int = 0
    seen: set[str] = field(default_factory=set, repr=False, compare=False)

    @property
    def done(self) -> bool:
        return len(self.seen) == len(_MEMINFO_KEYS)


@dataclass(frozen=True)
class MemoryValues:
    """Derived figures in bytes and percents."""

    mem_total: float
    mem_free: float
    mem_free_percents: float
    mem_total_used: float
    mem_total_used_percents: float
    mem_used: float
    mem_used_percents: float
    mem_avail: float
    mem_avail_percents: float
    swap_total: float
    swap_free: float
    swap_free_percents: float
    swap_used: float
    swap_used_percents: float
    buffers: float
    buffers_percent: float
    cached: float
    cached_percent: float

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class MemoryConfig:
    """Settings of the memory block; thresholds are percents of usage."""

    display_type: Memtype = Memtype.MEMORY
    icons: bool = True
    clickable: bool = True
    interval: float = 5.0
    warning_mem: float = 80.0
    warning_swap: float = 80.0
    critical_mem: float = 95.0
    critical_swap: float = 95.0


def parse_meminfo(text: str) -> MemState:
    """Collect the figures the block needs from /proc/meminfo."""
    state = MemState()
    for line in text.splitlines():
        if state.done:
            break
        parts = line.split()
        if not parts or parts[0] not in _MEMINFO_KEYS:
            continue
        name = _MEMINFO_KEYS[parts[0]]
        try:
            value = int(parts[1])
        except (IndexError, ValueError) as exc:
            raise BlockError("memory", f"failed to parse {name}") from exc
        if value < 0:
            raise BlockError("memory", f"failed to parse {name}")
        setattr(state, name, value)
        state.seen.add(name)
    return state


def parse_arcstats(text: str) -> int:
    """The ZFS ARC size in bytes from /proc/spl/kstat/zfs/arcstats."""
    match = _ARC_SIZE.search(text)
    if match is None:
        raise BlockError("memory", "failed to find zfs_arc_cache size")
    return int(match.group(1))


def _percent(part: float, whole: float) -> float:
    if whole:
        return part / whole * 100.0
    if part == 0 or math.isnan(part):
        return math.nan
    return math.copysign(math.inf, part)


def compute_values(mem_state: MemState) -> MemoryValues:
    """Turn raw meminfo figures into byte counts and percentages."""
    mem_total = mem_state.mem_total * 1024.0
    mem_free = mem_state.mem_free * 1024.0
    swap_total = mem_state.swap_total * 1024.0
    swap_free = mem_state.swap_free * 1024.0
    swap_used = swap_total - swap_free
    mem_total_used = mem_total - mem_free
    buffers = mem_state.buffers * 1024.0
    cached = (
        mem_state.cached + mem_state.s_reclaimable - mem_state.shmem
    ) * 1024.0 + mem_state.zfs_arc_cache
    mem_used = mem_total_used - (buffers + cached)
    mem_avail = mem_total - mem_used
    return MemoryValues(
        mem_total=mem_total,
        mem_free=mem_free,
        mem_free_percents=_percent(mem_free, mem_total),
        mem_total_used=mem_total_used,
        mem_total_used_percents=_percent(mem_total_used, mem_total),
        mem_used=mem_used,
        mem_used_percents=_percent(mem_used, mem_total),
        mem_avail=mem_avail,
        mem_avail_percents=_percent(mem_avail, mem_total),
        swap_total=swap_total,
        swap_free=swap_free,
        swap_free_percents=_percent(swap_free, swap_total),
        swap_used=swap_used,
        swap_used_percents=_percent(swap_used, swap_total),
        buffers=buffers,
        buffers_percent=_percent(buffers, mem_total),
        cached=cached,
        cached_percent=_percent(cached, mem_total),
    )


def usage_state(used_percent: float, warning: float, critical: float) -> State:
    """State for a usage percentage; thresholds must be exceeded."""
    return threshold_state(used_percent, None, warning, critical)


class Memory:
    """Reads memory figures and tracks the state of the memory and swap views."""

    def __init__(
        self,
        config: MemoryConfig | None = None,
        meminfo_path: str | Path = "/proc/meminfo",
        arcstats_path: str | Path = "/proc/spl/kstat/zfs/arcstats",
    ) -> None:
        self.config = config or MemoryConfig()
        self.meminfo_path = Path(meminfo_path)
        self.arcstats_path = Path(arcstats_path)
        self.memtype = self.config.display_type
        self.states = {Memtype.MEMORY: State.IDLE, Memtype.SWAP: State.IDLE}
        self.values: MemoryValues | None = None

    @property
    def state(self) -> State:
        """State of the view currently shown."""
        return self.states[self.memtype]

    def switch(self) -> None:
        """Toggle between the memory and swap views."""
        self.memtype = Memtype.SWAP if self.memtype is Memtype.MEMORY else Memtype.MEMORY

    def update(self) -> float:
        """Refresh the figures; returns seconds until the next update."""
        try:
            text = self.meminfo_path.read_text()
        except OSError as exc:
            raise BlockError("memory", "/proc/meminfo does not exist") from exc
        mem_state = parse_meminfo(text)
        try:
            arcstats = self.arcstats_path.read_text()
        except OSError:
            arcstats = None
        if arcstats is not None:
            mem_state.zfs_arc_cache = parse_arcstats(arcstats)

        values = compute_values(mem_state)
        self.values = values
        if self.memtype is Memtype.MEMORY:
            self.states[Memtype.MEMORY] = usage_state(
                values.mem_used_percents, self.config.warning_mem, self.config.critical_mem
            )
        else:
            self.states[Memtype.SWAP] = usage_state(
                values.swap_used_percents, self.config.warning_swap, self.config.critical_swap
            )
        return self.config.interval