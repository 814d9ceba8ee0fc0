import logging

import pytest

from utils.core.logging import SecretRedactingFilter, log_section


def make_record(msg, *args):
    return logging.LogRecord("t", logging.INFO, __file__, 1, msg, args, None)


@pytest.mark.parametrize("msg, hidden", [
    ("Data Source=app.db;Password=s3cret;", "s3cret"),
    ("pwd = hunter2 given", "hunter2"),
    ("PRAGMA key = 'abcdef'", "abcdef"),
])
def test_filter_masks_secrets(msg, hidden):
    record = make_record(msg)
    assert SecretRedactingFilter().filter(record) is True
    assert hidden not in record.getMessage()
    assert "***" in record.getMessage()


def test_filter_masks_interpolated_args():
    record = make_record("connecting with %s", "password=topsecret")
    SecretRedactingFilter().filter(record)
    assert "topsecret" not in record.getMessage()


def test_filter_leaves_plain_messages():
    record = make_record("Applied %d statement(s)", 3)
    SecretRedactingFilter().filter(record)
    assert record.args == (3,)
    assert record.getMessage() == "Applied 3 statement(s)"


def test_log_section_customer_is_one_line(caplog):
    logger = logging.getLogger("section-test")
    with caplog.at_level(logging.INFO, logger="section-test"):
        log_section(logger, "Update batch", {"Tasks": 1}, mode="customer")
    assert [r.getMessage() for r in caplog.records] == ["Update batch (Tasks: 1)"]


def test_log_section_verbose_has_banner(caplog):
    logger = logging.getLogger("section-test")
    with caplog.at_level(logging.INFO, logger="section-test"):
        log_section(logger, "Update batch", {"Tasks": 1}, mode="verbose")
    messages = [r.getMessage() for r in caplog.records]
    assert "UPDATE BATCH" in messages
    assert "   Tasks: 1" in messages
    assert messages[0] == messages[-1] and set(messages[0]) == {"="}


def test_cleanup_logs_removes_only_expired_files():
    import os
    import time

    from config import LOG_MAX_AGE_S
    from utils.core.logging import cleanup_logs
    from utils.core.paths import get_logs_dir

    logs = get_logs_dir()
    old_main = logs / "dbscript_01-01-2020_00-00-00.log"
    old_part = logs / "log_updater_01-01-2020_00-00-00.log.1"
    fresh = logs / "dbscript_fresh.log"
    unrelated = logs / "notes.txt"
    for p in (old_main, old_part, fresh, unrelated):
        p.write_text("x", encoding="utf-8")
    expired = time.time() - LOG_MAX_AGE_S - 60
    for p in (old_main, old_part, unrelated):
        os.utime(p, (expired, expired))

    cleanup_logs()

    assert not old_main.exists()
    assert not old_part.exists()
    assert fresh.exists()
    assert unrelated.exists()
