"""Parsers for the tools and files the network block reads."""

from __future__ import annotations

import json
import re
from pathlib import Path

from barblocks.state import BlockError

_ESCAPED_BYTE = re.compile(rb"\\x([0-9A-Fa-f]{2})")
_DEFAULT_DEV = re.compile(rb"default.*dev (\w*).*")
_ETHTOOL_SPEED = re.compile(rb"Speed: (\d+\w\w/s)")
_IW_BITRATE = re.compile(rb"tx bitrate: (\d+(?:\.?\d+) [A-Za-z]+/s)")


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def decode_escaped_unicode(raw: bytes | str) -> str:
    """Replace ``\\xHH`` escapes by their bytes and decode the result as UTF-8."""
    decoded = _ESCAPED_BYTE.sub(
        lambda m: bytes([int(m.group(1), 16)]), _as_bytes(raw)
    )
    return decoded.decode("utf-8", errors="replace")


def signal_percents(raw: int) -> int:
    """Convert a signal level in dBm to a quality percentage in 0..100."""
    level = float(raw)
    perfect = -20.0
    worst = -85.0
    d = perfect - worst
    percents = 100.0 - (perfect - level) * (15.0 * d + 62.0 * (perfect - level)) / (
        d * d
    )
    return max(0, min(100, int(percents)))


def parse_default_device(output: bytes | str) -> str | None:
    """The device of the default route in ``ip route show default`` output."""
    match = _DEFAULT_DEV.search(_as_bytes(output))
    if match is None:
        return None
    try:
        return match.group(1).decode("utf-8")
    except UnicodeDecodeError:
        return None


def parse_ip_json(output: str) -> str:
    """The first local address in ``ip -json address show`` output, or ``""``."""
    error = BlockError("net", "Failed to parse JSON response")
    try:
        devices = json.loads(output)
    except (json.JSONDecodeError, TypeError) as exc:
        raise error from exc
    if not isinstance(devices, list):
        raise error
    for device in devices:
        if not isinstance(device, dict):
            raise error
        addr_info = device.get("addr_info")
        if addr_info is None:
            continue
        if not isinstance(addr_info, list):
            raise error
        for addr in addr_info:
            if not isinstance(addr, dict):
                raise error
            local = addr.get("local")
            if local is None:
                continue
            if not isinstance(local, str):
                raise error
            return local
    return ""


def _first_capture(pattern: re.Pattern[bytes], output: bytes | str) -> str | None:
    match = pattern.search(_as_bytes(output))
    if match is None:
        return None
    try:
        return match.group(1).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BlockError("net", "Non-UTF8 bitrate") from exc


def parse_iw_bitrate(output: bytes | str) -> str | None:
    """The transmit bitrate in ``iw dev <dev> link`` output."""
    return _first_capture(_IW_BITRATE, output)


def parse_ethtool_speed(output: bytes | str) -> str | None:
    """The link speed in ``ethtool <dev>`` output."""
    return _first_capture(_ETHTOOL_SPEED, output)


def read_sys_file(path: str | Path) -> str:
    """Read a sysfs file and drop its final character (the trailing newline)."""
    path = Path(path)
    try:
        handle = path.open("r", encoding="utf-8")
    except OSError as exc:
        raise BlockError("net", f"failed to open file {path}") from exc
    with handle:
        try:
            content = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise BlockError("net", f"failed to read {path}") from exc
    return content[:-1]