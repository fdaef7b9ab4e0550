import pytest

from barblocks.maildir import (
    MailType,
    MaildirConfig,
    check_inboxes,
    count_mail,
    mail_state,
)
from barblocks.state import State


def make_maildir(root, new, cur):
    for folder, count in (("new", new), ("cur", cur)):
        (root / folder).mkdir(parents=True)
        for i in range(count):
            (root / folder / f"msg{i}").write_text("Subject: hi\n\nbody\n")
    (root / "tmp").mkdir()
    return root


def test_count_mail_types(tmp_path):
    box = make_maildir(tmp_path / "box", new=2, cur=3)
    assert count_mail(box, MailType.NEW) == 2
    assert count_mail(box, MailType.CUR) == 3
    assert count_mail(box, MailType.ALL) == 5


def test_count_mail_ignores_hidden_and_missing(tmp_path):
    box = make_maildir(tmp_path / "box", new=1, cur=0)
    (box / "new" / ".hidden").write_text("x")
    assert count_mail(box, MailType.NEW) == 1
    assert count_mail(tmp_path / "absent", MailType.ALL) == 0


@pytest.mark.parametrize(
    "count, expected",
    [(0, State.IDLE), (1, State.WARNING), (9, State.WARNING), (10, State.CRITICAL)],
)
def test_mail_state(count, expected):
    assert mail_state(count, 1, 10) is expected


def test_check_inboxes_sums(tmp_path):
    a = make_maildir(tmp_path / "a", new=4, cur=1)
    b = make_maildir(tmp_path / "b", new=7, cur=2)
    config = MaildirConfig(inboxes=[str(a), str(b)])
    total, state = check_inboxes(config)
    assert total == 11
    assert state is State.CRITICAL


def test_check_inboxes_empty_config():
    assert check_inboxes(MaildirConfig()) == (0, State.IDLE)