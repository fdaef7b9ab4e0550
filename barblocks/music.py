"""Tracking of MPRIS players for the music block."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from re import Pattern
from typing import Any

from barblocks.music_metadata import (
    PlaybackStatus,
    extract_from_metadata,
    extract_playback_status,
)
from barblocks.music_trim import ignored_player
from barblocks.state import BlockError, State

_BUTTONS = frozenset({"play", "next", "prev"})


@dataclass
class MusicConfig:
    """Settings of the music block; durations are in seconds."""

    player: str | None = None
    max_width: int = 21
    dynamic_width: bool = False
    marquee: bool = True
    marquee_interval: float = 10.0
    marquee_speed: float = 0.5
    smart_trim: bool = False
    separator: str = " - "
    buttons: list[str] = field(default_factory=list)
    on_collapsed_click: str | None = None
    seek_step: int = 1000
    interface_name_exclude: list[str] = field(default_factory=list)
    hide_when_empty: bool = False
    format: str = "{combo}"

    def __post_init__(self) -> None:
        for button in self.buttons:
            if button not in _BUTTONS:
                raise BlockError(
                    "music", f"unknown music button identifier: '{button}'"
                )


@dataclass
class Player:
    """One MPRIS player on the bus."""

    bus_name: str
    interface_name: str
    playback_status: PlaybackStatus = PlaybackStatus.UNKNOWN
    artist: str | None = None
    title: str | None = None


def _read_metadata(value: Any) -> tuple[str | None, str | None]:
    try:
        return extract_from_metadata(value)
    except BlockError:
        return None, None


class PlayerList:
    """The players the block tracks, first one being the one shown."""

    def __init__(
        self,
        players: Iterable[Player] = (),
        player_factory: Callable[[str, str], Player] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._players: list[Player] = []
        self._factory = player_factory or (
            lambda name, bus_name: Player(bus_name=bus_name, interface_name=name)
        )
        for player in players:
            self.add(player)

    def __len__(self) -> int:
        with self._lock:
            return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        with self._lock:
            return iter(list(self._players))

    def _find(self, bus_name: str) -> Player | None:
        return next((p for p in self._players if p.bus_name == bus_name), None)

    def add(self, player: Player) -> bool:
        """Append a player unless one with the same bus name is already tracked."""
        with self._lock:
            if self._find(player.bus_name) is not None:
                return False
            self._players.append(player)
            return True

    def remove_owner(self, bus_name: str) -> bool:
        """Drop the player owned by ``bus_name``; returns whether one was dropped."""
        with self._lock:
            player = self._find(bus_name)
            if player is None:
                return False
            self._players.remove(player)
            return True

    def rotate(self) -> None:
        """Move the first player to the end, showing the next one."""
        with self._lock:
            if self._players:
                self._players.append(self._players.pop(0))

    def current(self) -> Player | None:
        """The player currently shown, if any."""
        with self._lock:
            return self._players[0] if self._players else None

    def properties_changed(self, bus_name: str, changed: Mapping[str, Any]) -> bool:
        """Apply a PropertiesChanged signal; returns whether anything changed."""
        with self._lock:
            player = self._find(bus_name)
            if player is None:
                return False
            updated = False
            if "Metadata" in changed:
                title, artist = _read_metadata(changed["Metadata"])
                if player.title != title or player.artist != artist:
                    player.title = title
                    player.artist = artist
                    updated = True
            if "PlaybackStatus" in changed:
                status = extract_playback_status(changed["PlaybackStatus"])
                if player.playback_status != status:
                    player.playback_status = status
                    updated = True
            # A player aggregator keeps its bus name after the last real player
            # is gone; an empty player list means there is nothing to show.
            if "PlayerNames" in changed:
                names = changed["PlayerNames"]
                if not isinstance(names, Iterable):
                    raise BlockError("music", "PlayerNames is not a list")
                if next(iter(names), None) is None:
                    player.artist = None
                    player.title = None
                    updated = True
            return updated

    def name_owner_changed(
        self,
        name: str,
        old_owner: str,
        new_owner: str,
        exclude_patterns: Iterable[str | Pattern[str]],
        preferred_player: str | None,
    ) -> bool:
        """Apply a NameOwnerChanged signal; returns whether the list changed."""
        with self._lock:
            if old_owner == "":
                if self._find(new_owner) is not None:
                    return False
                if ignored_player(name, exclude_patterns, preferred_player):
                    return False
                self._players.append(self._factory(name, new_owner))
                return True
            if new_owner == "":
                return self.remove_owner(old_owner)
            return False


def play_button_icon(status: PlaybackStatus) -> str:
    """Icon of the play button: pause while playing, play otherwise."""
    return "music_pause" if status is PlaybackStatus.PLAYING else "music_play"


def widget_state(status: PlaybackStatus) -> State:
    """Widget state for a playback status."""
    return State.INFO if status is PlaybackStatus.PLAYING else State.IDLE