"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.

Structured fields go through ``extra={"context": {...}}`` and are rendered
as ``key=value`` pairs after the message.
"""

import logging
import os
import sys
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from starlette.requests import Request
from starlette.responses import Response

from utils.time import format_duration, format_kst

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_SERVICE = "board"
_handlers: list[logging.Handler] = []

# pino 스타일 레벨 이름 호환
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL", "TRACE": "DEBUG"}


class ContextFormatter(logging.Formatter):
    """Formatter with KST timestamps and trailing structured context."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        return format_kst(datetime.fromtimestamp(record.created, tz=timezone.utc))

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            line = f"{line} | {pairs}"
        return line


def setup_logging(settings) -> None:
    """Configure the root logger once (re-running replaces our handlers)."""
    root = logging.getLogger()
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()

    formatter = ContextFormatter(_LOG_FORMAT)

    stream = logging.StreamHandler(sys.stdout)
    _handlers.append(stream)

    # 파일 로그: 전체 로그 + 에러 전용 로그
    if settings.log_to_file:
        for path in (settings.log_file, settings.log_error_file):
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)
        _handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
        error_handler = logging.FileHandler(settings.log_error_file, encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        _handlers.append(error_handler)

    for handler in _handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    level = settings.log_level.upper()
    root.setLevel(_LEVEL_ALIASES.get(level, level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **context: Any) -> None:
    name = level.upper()
    levelno = logging.getLevelName(_LEVEL_ALIASES.get(name, name))
    if not isinstance(levelno, int):
        raise ValueError(f"unknown log level: {level}")
    context["service"] = _SERVICE
    logger.log(levelno, message, extra={"context": context})


def db_error_code(error: BaseException) -> str:
    """Driver error code: sqlite3 name, PostgreSQL SQLSTATE, else the class name."""
    for attr in ("sqlite_errorname", "sqlstate", "pgcode"):
        code = getattr(error, attr, None)
        if code:
            return str(code)
    return type(error).__name__


def log_db_error(db: str, table: str, operation: str, error: BaseException) -> None:
    # 연결 에러 / SQL 에러 / lock 에러 모두 여기로 모은다
    get_logger("db").error(
        f"{operation} failed: {error}",
        extra={"context": {
            "db": db,
            "table": table,
            "operation": operation,
            "errorCode": db_error_code(error),
        }},
    )


class RequestLogger:
    """Request/response interceptor invoked by the board routes around dispatch."""

    def __init__(self, enabled: bool = True, logger: Optional[logging.Logger] = None):
        self.enabled = enabled
        self.logger = logger or get_logger("http")

    def before(self, request: Request) -> float:
        request.state.request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        started = time.perf_counter()
        if self.enabled:
            self.logger.info("Request received", extra={"context": {
                "requestId": request.state.request_id,
                "method": request.method,
                "url": request.url.path,
                "userAgent": request.headers.get("user-agent"),
                "ip": request.client.host if request.client else None,
            }})
        return started

    def after(self, request: Request, response: Response, started: float) -> None:
        elapsed = (time.perf_counter() - started) * 1000
        if self.enabled:
            self.logger.info("Request completed", extra={"context": {
                "requestId": getattr(request.state, "request_id", None),
                "method": request.method,
                "url": request.url.path,
                "statusCode": response.status_code,
                "responseTime": format_duration(elapsed),
            }})
        self.performance(f"{request.method} {request.url.path}", elapsed)

    def on_error(self, request: Request, error: BaseException, started: float) -> None:
        elapsed = (time.perf_counter() - started) * 1000
        self.logger.error("Request error occurred", extra={"context": {
            "requestId": getattr(request.state, "request_id", None),
            "method": request.method,
            "url": request.url.path,
            "responseTime": format_duration(elapsed),
            "error": f"{type(error).__name__}: {error}",
        }})

    def performance(self, event: str, duration_ms: float) -> None:
        if duration_ms > 5000:
            level = logging.WARNING
        elif duration_ms > 1000:
            level = logging.INFO
        else:
            level = logging.DEBUG
        duration = format_duration(duration_ms)
        self.logger.log(level, f"Operation {event} completed in {duration}", extra={"context": {
            "operation": event,
            "durationMs": round(duration_ms, 1),
        }})
