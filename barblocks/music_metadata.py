"""Reading MPRIS player metadata and playback status."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from barblocks.state import BlockError


class PlaybackStatus(Enum):
    """Playback status reported by an MPRIS player."""

    PLAYING = "Playing"
    PAUSED = "Paused"
    STOPPED = "Stopped"
    UNKNOWN = "Unknown"

    @classmethod
    def default(cls) -> PlaybackStatus:
        return cls.UNKNOWN


_KNOWN_STATUSES = {
    "Playing": PlaybackStatus.PLAYING,
    "Paused": PlaybackStatus.PAUSED,
    "Stopped": PlaybackStatus.STOPPED,
}


def extract_playback_status(value: Any) -> PlaybackStatus:
    """Map a ``PlaybackStatus`` property value onto the enum.

    Anything that is not one of the known status strings is ``UNKNOWN``.
    """
    if isinstance(value, str):
        return _KNOWN_STATUSES.get(value, PlaybackStatus.UNKNOWN)
    return PlaybackStatus.UNKNOWN


def extract_artist_from_value(value: Any) -> str:
    """The artist from an ``xesam:artist`` value.

    The value is either a string or a (possibly nested) list whose first
    element holds the artist.
    """
    while not isinstance(value, str):
        if isinstance(value, (bytes, bytearray)) or not isinstance(value, Iterable):
            raise BlockError("music", "failed to extract artist")
        try:
            value = next(iter(value))
        except StopIteration as exc:
            raise BlockError("music", "failed to extract artist") from exc
    return value


def extract_from_metadata(metadata: Any) -> tuple[str | None, str | None]:
    """Title and artist from an MPRIS ``Metadata`` dictionary."""
    if not isinstance(metadata, Mapping):
        raise BlockError("music", "failed to extract metadata")
    title: str | None = None
    artist: str | None = None
    for key, value in metadata.items():
        if not isinstance(key, str):
            raise BlockError("music", "failed to extract metadata")
        if key == "xesam:artist":
            artist = extract_artist_from_value(value)
        elif key == "xesam:title":
            if not isinstance(value, str):
                raise BlockError("music", "failed to extract metadata")
            title = value
    return title, artist