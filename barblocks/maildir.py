"""Count messages in maildir inboxes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from barblocks.state import State


class MailType(Enum):
    """Which maildir folders are counted."""

    NEW = "new"
    CUR = "cur"
    ALL = "all"

    @property
    def folders(self) -> tuple[str, ...]:
        if self is MailType.ALL:
            return ("new", "cur")
        return (self.value,)


@dataclass
class MaildirConfig:
    """Settings of the maildir block."""

    interval: float = 5.0
    inboxes: list[str] = field(default_factory=list)
    threshold_warning: int = 1
    threshold_critical: int = 10
    display_type: MailType = MailType.NEW
    icon: bool = True


def _count_folder(folder: Path) -> int:
    try:
        entries = list(folder.iterdir())
    except OSError:
        return 0
    return sum(1 for e in entries if not e.name.startswith(".") and e.is_file())


def count_mail(path: str | Path, mail_type: MailType) -> int:
    """Number of messages of the given kind in one maildir."""
    root = Path(path)
    return sum(_count_folder(root / name) for name in mail_type.folders)


def mail_state(count: int, threshold_warning: int, threshold_critical: int) -> State:
    """State for a message count; thresholds are inclusive."""
    if count >= threshold_critical:
        return State.CRITICAL
    if count >= threshold_warning:
        return State.WARNING
    return State.IDLE


def check_inboxes(config: MaildirConfig) -> tuple[int, State]:
    """Total message count over all inboxes and the matching state."""
    total = sum(count_mail(inbox, config.display_type) for inbox in config.inboxes)
    return total, mail_state(total, config.threshold_warning, config.threshold_critical)