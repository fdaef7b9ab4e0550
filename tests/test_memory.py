import math

import pytest

from barblocks.memory import (
    MemState,
    Memory,
    MemoryConfig,
    Memtype,
    compute_values,
    parse_arcstats,
    parse_meminfo,
    usage_state,
)
from barblocks.state import BlockError, State

MEMINFO = """MemTotal:       16000000 kB
MemFree:         4000000 kB
MemAvailable:    9000000 kB
Buffers:          500000 kB
Cached:          3000000 kB
SwapCached:            0 kB
Shmem:            200000 kB
SReclaimable:     300000 kB
SwapTotal:       2000000 kB
SwapFree:        1500000 kB
"""

ARCSTATS = """13 1 0x01 123 33456 1234 5678
name                            type data
hits                            4    100
size                            4    1048576
c                               4    200
"""


def test_parse_meminfo_fields():
    state = parse_meminfo(MEMINFO)
    assert state.mem_total == 16000000
    assert state.mem_free == 4000000
    assert state.buffers == 500000
    assert state.cached == 3000000
    assert state.shmem == 200000
    assert state.s_reclaimable == 300000
    assert state.swap_total == 2000000
    assert state.swap_free == 1500000
    assert state.done


def test_parse_meminfo_partial_and_bad():
    state = parse_meminfo("MemTotal: 10 kB\n")
    assert state.mem_total == 10
    assert state.swap_total == 0
    assert not state.done
    with pytest.raises(BlockError):
        parse_meminfo("MemFree: lots kB\n")
    with pytest.raises(BlockError):
        parse_meminfo("SwapFree:\n")


def test_parse_arcstats():
    assert parse_arcstats(ARCSTATS) == 1048576
    with pytest.raises(BlockError):
        parse_arcstats("nothing here\n")


def test_compute_values_invariants():
    values = compute_values(parse_meminfo(MEMINFO))
    assert values.mem_used + values.mem_avail == pytest.approx(values.mem_total)
    assert values.mem_total_used == pytest.approx(values.mem_total - values.mem_free)
    assert values.swap_used == pytest.approx(values.swap_total - values.swap_free)
    assert values.mem_free_percents + values.mem_total_used_percents == pytest.approx(100)
    assert values.swap_free_percents + values.swap_used_percents == pytest.approx(100)
    assert values.mem_used == pytest.approx(
        values.mem_total_used - values.buffers - values.cached
    )
    assert set(values.as_dict()) >= {"mem_total", "cached_percent", "swap_used_percents"}


def test_compute_values_includes_arc_cache():
    base = parse_meminfo(MEMINFO)
    with_arc = parse_meminfo(MEMINFO)
    with_arc.zfs_arc_cache = 4096
    diff = compute_values(with_arc).cached - compute_values(base).cached
    assert diff == pytest.approx(4096)


def test_compute_values_without_swap():
    values = compute_values(MemState(mem_total=100, mem_free=50))
    assert math.isnan(values.swap_used_percents)
    assert usage_state(values.swap_used_percents, 80, 95) is State.IDLE


@pytest.mark.parametrize(
    "percent, expected",
    [(96.0, State.CRITICAL), (95.0, State.WARNING), (81.0, State.WARNING), (80.0, State.IDLE)],
)
def test_usage_state(percent, expected):
    assert usage_state(percent, 80.0, 95.0) is expected


def test_switch_toggles():
    block = Memory(MemoryConfig())
    assert block.memtype is Memtype.MEMORY
    block.switch()
    assert block.memtype is Memtype.SWAP
    block.switch()
    assert block.memtype is Memtype.MEMORY


def test_update_reads_files(tmp_path):
    meminfo = tmp_path / "meminfo"
    meminfo.write_text(MEMINFO)
    arc = tmp_path / "arcstats"
    arc.write_text(ARCSTATS)
    config = MemoryConfig(warning_mem=1.0, critical_mem=99.0, display_type=Memtype.SWAP)
    block = Memory(config, meminfo, arc)
    assert block.update() == config.interval
    assert block.values is not None
    assert block.values.cached == pytest.approx(
        (3000000 + 300000 - 200000) * 1024 + 1048576
    )
    # swap used is 25 percent, under the default swap thresholds
    assert block.state is State.IDLE
    block.switch()
    block.update()
    assert block.state is State.WARNING


def test_update_without_arcstats(tmp_path):
    meminfo = tmp_path / "meminfo"
    meminfo.write_text(MEMINFO)
    block = Memory(MemoryConfig(), meminfo, tmp_path / "absent")
    block.update()
    assert block.values.cached == pytest.approx((3000000 + 300000 - 200000) * 1024)


def test_update_missing_meminfo(tmp_path):
    block = Memory(MemoryConfig(), tmp_path / "absent", tmp_path / "absent")
    with pytest.raises(BlockError):
        block.update()