"""Helpers for reading keyboard layouts from setxkbmap and sway."""

from __future__ import annotations

import re
import subprocess

from barblocks.state import BlockError

_WHITESPACE = re.compile(r"\s")


def parse_setxkbmap_layout(output: str) -> str:
    """Return the value of the ``layout`` entry in ``setxkbmap -query`` output."""
    line = next(
        (line for line in output.split("\n") if line.startswith("layout")),
        None,
    )
    if line is None:
        raise BlockError(
            "keyboard_layout", "Could not find the layout entry from setxkbmap."
        )
    return _WHITESPACE.split(line)[-1]


def setxkbmap_layouts() -> str:
    """Run ``setxkbmap -query`` and return the configured layouts."""
    try:
        result = subprocess.run(
            ["setxkbmap", "-query"], capture_output=True, check=False
        )
    except OSError as exc:
        raise BlockError("keyboard_layout", "Failed to execute setxkbmap.") from exc
    try:
        output = result.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BlockError("keyboard_layout", "Non-UTF8 input.") from exc
    return parse_setxkbmap_layout(output)


def select_layout(layouts: str, index: int) -> str:
    """Pick the layout at ``index`` from a comma separated layout list.

    A variant attached with ``:`` is dropped. When the index is out of
    range, the whole list is returned unchanged.
    """
    parts = layouts.split(",")
    if 0 <= index < len(parts):
        return parts[index].split(":")[0]
    return layouts


def split_sway_layout(name: str) -> tuple[str, str]:
    """Split a sway layout name such as ``English (US)`` into layout and variant.

    A name without a parenthesised variant yields the variant ``N/A``.
    """
    pos = name.find("(")
    if pos < 0:
        return name, "N/A"
    head, tail = name[:pos], name[pos:]
    words = head.split()
    layout = words[0] if words else head
    return layout, tail[1:-1]