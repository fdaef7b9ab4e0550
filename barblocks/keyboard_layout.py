"""Keyboard layout block and the layout sources it can read from."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from barblocks.state import BlockError
from barblocks.xkb import select_layout, setxkbmap_layouts, split_sway_layout

_NO_VARIANT = "N/A"


class KeyboardLayoutDriver(Enum):
    """Where the block reads the current layout from."""

    SETXKBMAP = "setxkbmap"
    LOCALEBUS = "localebus"
    KBDDBUS = "kbddbus"
    SWAY = "sway"


@dataclass
class KeyboardLayoutConfig:
    """Settings of the keyboard layout block."""

    format: str = "{layout}"
    driver: KeyboardLayoutDriver = KeyboardLayoutDriver.SETXKBMAP
    interval: float = 60.0
    sway_kb_identifier: str | None = None
    mappings: dict[str, str] | None = None


def apply_mappings(
    layout: str, variant: str, mappings: dict[str, str] | None
) -> str:
    """Replace a layout by its mapped name, looked up as ``"layout (variant)"``."""
    if not mappings:
        return layout
    return mappings.get(f"{layout} ({variant})", layout)


class _Monitor(Protocol):
    def keyboard_layout(self) -> str: ...

    def keyboard_variant(self) -> str: ...

    def must_poll(self) -> bool: ...


class SetXkbMap:
    """Reads the layout by querying setxkbmap; must be polled."""

    def keyboard_layout(self) -> str:
        return setxkbmap_layouts()

    def keyboard_variant(self) -> str:
        return _NO_VARIANT

    def must_poll(self) -> bool:
        return True


class KbddLayout:
    """Per-window layout as reported by the kbdd daemon's layout index."""

    def __init__(self, layout_id: int) -> None:
        self._lock = threading.Lock()
        self._layout_id = layout_id

    def set_layout_id(self, layout_id: int) -> None:
        """Record a new layout index announced by the daemon."""
        with self._lock:
            self._layout_id = layout_id

    def keyboard_layout(self) -> str:
        layouts = setxkbmap_layouts()
        with self._lock:
            index = self._layout_id
        return select_layout(layouts, index)

    def keyboard_variant(self) -> str:
        return _NO_VARIANT

    def must_poll(self) -> bool:
        return False


class SwayLayout:
    """Layout name as reported by sway, e.g. ``English (US)``."""

    def __init__(self, layout_name: str) -> None:
        self._lock = threading.Lock()
        self._name = layout_name

    def set_layout_name(self, name: str) -> None:
        """Record a new active layout name from an input event."""
        with self._lock:
            self._name = name

    def _split(self) -> tuple[str, str]:
        with self._lock:
            name = self._name
        return split_sway_layout(name)

    def keyboard_layout(self) -> str:
        return self._split()[0]

    def keyboard_variant(self) -> str:
        return self._split()[1]

    def must_poll(self) -> bool:
        return False


class KeyboardLayout:
    """Renders the current layout of a monitor with the configured format."""

    def __init__(
        self, config: KeyboardLayoutConfig | None, monitor: _Monitor
    ) -> None:
        self.config = config or KeyboardLayoutConfig()
        self.monitor = monitor
        self.update_interval = self.config.interval if monitor.must_poll() else None
        self.text = ""
        self.values: dict[str, str] = {}

    def update(self) -> float | None:
        """Refresh the text; returns seconds until the next poll, if any."""
        layout = self.monitor.keyboard_layout()
        variant = self.monitor.keyboard_variant()
        layout = apply_mappings(layout, variant, self.config.mappings)
        self.values = {"layout": layout, "variant": variant}
        try:
            self.text = self.config.format.format_map(self.values)
        except (KeyError, IndexError, ValueError) as exc:
            raise BlockError("keyboard_layout", f"invalid format: {exc}") from exc
        return self.update_interval