"""Text shaping for the music block: trimming, player names and filtering."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable

from barblocks.state import BlockError

_MPRIS_PREFIX = "org.mpris.MediaPlayer2"


def _take(text: str, count: int) -> str:
    return text[: max(count, 0)]


def smart_trim(artist: str, title: str, separator: str, max_width: int) -> str:
    """Shorten ``title`` and ``artist`` in proportion to their lengths.

    One of the two is trimmed alone when that is enough. The result is
    ``title + separator + artist``.
    """
    if not title:
        return f"{title}{separator}{_take(artist, max_width)}"
    if not artist:
        return f"{_take(title, max_width)}{separator}{artist}"

    textlen = len(title) + len(separator) + len(artist)
    if textlen < max_width:
        raise ValueError("text already fits within max_width")
    if textlen <= 3:
        raise ValueError("text is too short to trim")

    overshoot = float(textlen - max_width)
    substance = float(textlen - 3)

    tlen = len(title)
    tnum = math.ceil(overshoot * (tlen / substance))
    alen = len(artist)
    anum = math.ceil(overshoot * (alen / substance))

    # Prefer trimming only one of the two.
    if anum < tnum and anum <= 3 and tnum + anum < tlen:
        anum = 0
    if tnum < anum and tnum <= 3 and anum + tnum < alen:
        tnum = 0

    ttrc = tlen - tnum
    if not 1 <= ttrc <= 5000:
        ttrc = 1
    atrc = alen - anum
    if not 1 <= atrc <= 5000:
        atrc = 1

    return f"{title[:ttrc]}{separator}{artist[:atrc]}"


def combo_text(
    artist: str, title: str, separator: str, max_width: int, use_smart_trim: bool
) -> str:
    """The combined title and artist, smart-trimmed when enabled and too long."""
    length = len(title) + len(separator) + len(artist)
    if length < max_width or not use_smart_trim:
        return f"{title}{separator}{artist}"
    return smart_trim(artist, title, separator, max_width)


def _compile(patterns: Iterable[str | re.Pattern[str]]) -> list[re.Pattern[str]]:
    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise BlockError("music", "failed to parse exclude patterns") from exc
    return compiled


def ignored_player(
    name: str,
    exclude_patterns: Iterable[str | re.Pattern[str]],
    preferred_player: str | None,
) -> bool:
    """Whether the bus name ``name`` should not be tracked as a player."""
    if preferred_player is not None and not name.startswith(
        f"{_MPRIS_PREFIX}.{preferred_player}"
    ):
        return True
    if not name.startswith(_MPRIS_PREFIX):
        return True
    return any(pattern.search(name) for pattern in _compile(exclude_patterns))


def player_name(interface_name: str) -> str:
    """The player part of an MPRIS interface name, e.g. ``spotify``."""
    parts = interface_name.split(".")
    if len(parts) < 4:
        raise BlockError("music", f"invalid player interface name: {interface_name!r}")
    return parts[3]