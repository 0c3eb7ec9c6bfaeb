import logging
import sqlite3
from datetime import datetime, timezone

import pytest

from config import Settings
from models.board import EDIT_MARKER, mark_edited
from repositories.board_repository import search_pattern
from utils.logger import (
    ContextFormatter,
    RequestLogger,
    db_error_code,
    log_db_error,
    log_with_context,
    setup_logging,
)
from utils.time import format_duration, format_kst, format_uptime

pytestmark = pytest.mark.unit


def test_mark_edited_is_idempotent():
    once = mark_edited("hello")

    assert once == f"{EDIT_MARKER} hello"
    assert mark_edited(once) == once
    assert mark_edited(mark_edited(once)).count(EDIT_MARKER) == 1


def test_search_pattern_escapes_and_trims():
    assert search_pattern(None) is None
    assert search_pattern("   ") is None
    assert search_pattern(" Foo ") == "%foo%"
    assert search_pattern("50%_off") == "%50\\%\\_off%"


def test_format_kst_converts_naive_utc():
    assert format_kst(datetime(2024, 1, 1, 15, 30, 0)) == "2024-01-02 00:30:00"
    assert format_kst(datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc), "%H:%M") == "09:00"


@pytest.mark.parametrize("ms,expected", [(0, "0ms"), (850.4, "850ms"), (1000, "1.0s"), (1234, "1.2s")])
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected


@pytest.mark.parametrize("seconds,expected", [(5, "5s"), (65, "1m 5s"), (3725, "1h 2m 5s")])
def test_format_uptime(seconds, expected):
    assert format_uptime(seconds) == expected


def test_db_error_code():
    err = sqlite3.OperationalError("no such table: board")
    err.sqlite_errorname = "SQLITE_ERROR"

    assert db_error_code(err) == "SQLITE_ERROR"
    assert db_error_code(ValueError("x")) == "ValueError"


def test_log_db_error_carries_context(caplog):
    log_db_error("board", "board", "insert", ValueError("bad"))

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.context == {
        "db": "board", "table": "board", "operation": "insert", "errorCode": "ValueError",
    }


def test_log_with_context_adds_service(caplog):
    logger = logging.getLogger("ctx-test")
    with caplog.at_level(logging.DEBUG, logger="ctx-test"):
        log_with_context(logger, "info", "hello", user="u1")
        log_with_context(logger, "warn", "aliased")
        log_with_context(logger, "critical", "loud")

    assert [r.getMessage() for r in caplog.records] == ["hello", "aliased", "loud"]
    assert [r.levelno for r in caplog.records] == [logging.INFO, logging.WARNING, logging.CRITICAL]
    assert caplog.records[0].context == {"user": "u1", "service": "board"}


def test_log_with_context_rejects_unknown_level():
    with pytest.raises(ValueError, match="bogus"):
        log_with_context(logging.getLogger("ctx-test"), "bogus", "dropped")


def test_context_formatter_appends_pairs():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    record.context = {"a": 1, "b": "two"}

    line = ContextFormatter("%(message)s").format(record)

    assert line == "msg | a=1 b=two"


def test_setup_logging_writes_files(tmp_path):
    settings = Settings(
        log_to_file=True,
        log_file=str(tmp_path / "logs" / "app.log"),
        log_error_file=str(tmp_path / "logs" / "error.log"),
        log_level="info",
    )
    setup_logging(settings)
    try:
        logging.getLogger("file-test").info("just info")
        logging.getLogger("file-test").error("an error")
        for handler in logging.getLogger().handlers:
            handler.flush()

        app_log = (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")
        error_log = (tmp_path / "logs" / "error.log").read_text(encoding="utf-8")
    finally:
        setup_logging(Settings(log_level="warning"))

    assert "just info" in app_log and "an error" in app_log
    assert "an error" in error_log and "just info" not in error_log


def test_request_logger_performance_levels(caplog):
    interceptor = RequestLogger(logger=logging.getLogger("perf-test"))
    with caplog.at_level(logging.DEBUG, logger="perf-test"):
        interceptor.performance("fast", 10)
        interceptor.performance("slow", 2000)
        interceptor.performance("very slow", 6000)

    assert [r.levelno for r in caplog.records] == [logging.DEBUG, logging.INFO, logging.WARNING]
