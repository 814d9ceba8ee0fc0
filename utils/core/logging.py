#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration and utilities
"""

# Standard library imports
import io
import os
import queue
import re
import sys
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Dict

# Third-party imports
import logging
import urllib3
from urllib3.exceptions import InsecureRequestWarning

# Local imports
from config import (
    LOG_FILE_PATTERN,
    LOG_MAX_AGE_S,
    LOG_MAX_FILE_SIZE_MB_DEFAULT,
    LOG_SEPARATOR_WIDTH,
    LOG_TIMESTAMP_FORMAT,
    UPDATER_LOG_FILE_PATTERN,
)

# Add custom TRACE logging level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

def trace(self, message, *args, **kwargs):
    """Log a trace message (ultra-detailed, below DEBUG)"""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)

# Add trace() method to Logger class
logging.Logger.trace = trace

# Global log mode (set by setup_logging)
_CURRENT_LOG_MODE = 'customer'
_NAMED_LOGGERS: Dict[str, logging.Logger] = {}

_FORMATS = {
    'customer': "%(_when)s | %(message)s",
    'verbose': "%(_when)s | %(levelname)-7s | %(message)s",
    'debug': "%(_when)s | %(levelname)-7s | %(name)-15s | %(funcName)-20s | %(message)s",
}


def get_log_mode() -> str:
    """Get the current logging mode"""
    return _CURRENT_LOG_MODE


def _level_for_mode(log_mode: str) -> int:
    if log_mode == 'debug':
        return TRACE
    if log_mode == 'verbose':
        return logging.DEBUG
    return logging.INFO


class _Fmt(logging.Formatter):
    """Formatter that stamps records with a local wall-clock time"""

    def __init__(self, fmt: str, when_format: str):
        super().__init__(fmt)
        self.when_format = when_format

    def format(self, record):
        record._when = time.strftime(self.when_format, time.localtime())
        return super().format(record)


class SecretRedactingFilter(logging.Filter):
    """Mask credentials that slip into a log message.

    Connection strings are rendered masked by the database layer already;
    this filter catches anything formatted by hand.
    """

    PATTERNS = [
        (re.compile(r'(password|pwd)\s*=\s*[^;\s]+', re.IGNORECASE), r'\1=***'),
        (re.compile(r'(PRAGMA\s+key\s*=\s*)\'[^\']*\'', re.IGNORECASE), r"\1'***'"),
    ]

    def filter(self, record):
        try:
            msg = record.getMessage()
        except Exception:  # noqa: BLE001
            return True
        redacted = msg
        for pattern, replacement in self.PATTERNS:
            redacted = pattern.sub(replacement, redacted)
        if redacted != msg:
            record.msg = redacted
            record.args = None
        return True


class SizeRotatingCompositeHandler(logging.Handler):
    """
    A handler that delegates to an inner file handler and rolls over
    to a new file when the current file size reaches a threshold.

    - Creates files as: base.ext, base.ext.1, base.ext.2, ...
    - Does not delete on rotation (retention handled by cleanup_logs)
    """
    def __init__(self, base_path: Path, create_handler_fn, max_bytes: int):
        super().__init__()
        self.base_path = Path(base_path)
        self.create_handler_fn = create_handler_fn
        self.max_bytes = max_bytes
        self._index = 0
        self.current_path = self._compute_current_path()
        self.current_handler = self.create_handler_fn(self.current_path)
        self._stored_formatter = None

    def _compute_current_path(self) -> Path:
        if self._index == 0:
            return self.base_path
        return self.base_path.with_name(f"{self.base_path.name}.{self._index}")

    def _maybe_rotate(self):
        current_size = self.current_path.stat().st_size if self.current_path.exists() else 0
        if current_size < self.max_bytes:
            return
        self.current_handler.close()
        self._index += 1
        self.current_path = self._compute_current_path()
        self.current_handler = self.create_handler_fn(self.current_path)
        self.current_handler.setLevel(self.level)
        if self._stored_formatter is not None:
            self.current_handler.setFormatter(self._stored_formatter)

    def emit(self, record):
        try:
            self._maybe_rotate()
            self.current_handler.emit(record)
        except Exception:  # noqa: BLE001
            # Never break the update because a log file could not be written
            self.handleError(record)

    def setFormatter(self, fmt):
        self._stored_formatter = fmt
        self.current_handler.setFormatter(fmt)
        super().setFormatter(fmt)

    def setLevel(self, level):
        super().setLevel(level)
        self.current_handler.setLevel(level)

    def close(self):
        self.current_handler.close()
        super().close()


class QueueHandler(logging.Handler):
    """A queue-based handler that never blocks the calling thread"""

    def __init__(self, target_handler: logging.Handler):
        super().__init__()
        self.target_handler = target_handler
        self.queue = queue.Queue(maxsize=1000)
        self._stop_event = threading.Event()
        self.worker_thread = threading.Thread(target=self._worker, daemon=True, name="LogQueueWorker")
        self.worker_thread.start()

    def _worker(self):
        while not self._stop_event.is_set():
            try:
                record = self.queue.get(timeout=0.1)
            except queue.Empty:
                continue
            if record is None:  # Sentinel value to stop
                break
            try:
                self.target_handler.handle(record)
            finally:
                self.queue.task_done()

    def emit(self, record):
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            # Drop rather than block the update under extreme log load
            pass

    def flush(self):
        self.queue.join()

    def close(self):
        self._stop_event.set()
        try:
            self.queue.put_nowait(None)
        except queue.Full:
            pass
        if self.worker_thread.is_alive():
            self.worker_thread.join(timeout=1.0)
        super().close()


def _output_stream():
    # Windowed builds may have stdout/stderr set to None or devnull
    if sys.stdout is not None and getattr(sys.stdout, 'name', None) == os.devnull:
        stream = sys.stderr
    else:
        stream = sys.stdout if sys.stdout is not None else sys.stderr
    return stream if stream is not None else io.StringIO()


def _make_file_handler(base_path: Path, log_mode: str) -> SizeRotatingCompositeHandler:
    max_bytes = int(LOG_MAX_FILE_SIZE_MB_DEFAULT * 1024 * 1024)

    def _factory_plain(p: Path):
        return logging.FileHandler(p, encoding='utf-8')

    file_handler = SizeRotatingCompositeHandler(base_path, _factory_plain, max_bytes)
    file_handler.setFormatter(_Fmt(_FORMATS.get(log_mode, _FORMATS['customer']), "%Y-%m-%d %H:%M:%S"))
    file_handler.setLevel(_level_for_mode(log_mode))
    file_handler.addFilter(SecretRedactingFilter())
    return file_handler


def setup_logging(log_mode: str = 'customer', *, write_logs: bool = True):
    """
    Setup logging configuration with three modes.

    Args:
        log_mode: 'customer' (clean logs), 'verbose' (developer), or 'debug' (ultra-detailed)
        write_logs: If False, skip creating log files (useful for --no-log-files runs).
    """
    global _CURRENT_LOG_MODE
    _CURRENT_LOG_MODE = log_mode

    console = logging.StreamHandler(_output_stream())
    console.setFormatter(_Fmt(_FORMATS.get(log_mode, _FORMATS['customer']), "%H:%M:%S"))
    console.addFilter(SecretRedactingFilter())

    # Wrap in queue handler to prevent blocking
    h = QueueHandler(console)
    h.setLevel(_level_for_mode(log_mode))

    file_handler = None
    log_file = None
    if write_logs:
        try:
            from .paths import get_logs_dir
            timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
            log_file = get_logs_dir() / f"dbscript_{timestamp}.log"
            file_handler = _make_file_handler(log_file, log_mode)
        except OSError as e:
            # If file logging fails, continue without it
            file_handler = None
            log_file = None
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.addHandler(h)
    if file_handler:
        root.addHandler(file_handler)

    # Root logger must be at TRACE to allow all handlers to receive all messages
    root.setLevel(TRACE)

    logger = logging.getLogger("startup")
    if log_mode == 'customer':
        if log_file:
            logger.info(f"Updater started (Log: {log_file.name})")
        else:
            logger.info("Updater started (logs disabled)")
    else:
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        logger.info(f"Updater - Starting... ({log_file.name if log_file else 'logs disabled'})")
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        if log_file:
            logger.debug(f"Log file location: {log_file.absolute()}")

    # Suppress HTTPS/HTTP logs
    logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    urllib3.disable_warnings(InsecureRequestWarning)

    return log_file


def get_logger(name: str = "tracer") -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(name)


def get_named_logger(name: str, prefix: str, log_mode: str = None) -> logging.Logger:
    """
    Create (or return) a dedicated logger that writes to its own rotating file.

    The logger also propagates to the root handlers so console output and
    test capture see the same records.

    Args:
        name: Logger name (unique key).
        prefix: File prefix (e.g., 'log_updater').
        log_mode: Optional override for formatting levels; defaults to current global mode.
    """
    if name in _NAMED_LOGGERS:
        return _NAMED_LOGGERS[name]

    if log_mode is None:
        log_mode = _CURRENT_LOG_MODE

    logger = logging.getLogger(name)
    logger.setLevel(TRACE)
    try:
        from .paths import get_logs_dir
        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        file_handler = _make_file_handler(get_logs_dir() / f"{prefix}_{timestamp}.log", log_mode)
        logger.handlers.clear()
        logger.addHandler(file_handler)
    except OSError as exc:
        logger.warning(f"Failed to configure dedicated logger '{name}': {exc}")

    _NAMED_LOGGERS[name] = logger
    return logger


def cleanup_logs():
    """
    Clean up old log files based on age.

    Deletes main and updater logs (rotated parts included) older than LOG_MAX_AGE_S.
    """
    try:
        from .paths import get_logs_dir
        logs_dir = get_logs_dir()

        now = time.time()
        for pattern in (LOG_FILE_PATTERN, UPDATER_LOG_FILE_PATTERN):
            for log_file in logs_dir.glob(f"{pattern}*"):
                try:
                    if now - log_file.stat().st_mtime > LOG_MAX_AGE_S:
                        log_file.unlink()
                except OSError:
                    continue
    except OSError as e:
        # Don't log this error to avoid recursion
        print(f"Warning: Failed to cleanup logs: {e}", file=sys.stderr)


# ==================== Pretty Logging Helpers ====================

def log_section(logger: logging.Logger, title: str, details: dict = None, mode: str = None):
    """
    Log a section header with optional details

    Args:
        logger: Logger instance
        title: Main title text (will be uppercased in verbose/debug mode)
        details: Optional dict of key-value pairs to display
        mode: 'customer' (simple), 'verbose' (detailed), or 'debug' (ultra-detailed).
              If None, uses current global log mode.

    Example:
        log_section(log, "Applying script", {"Task": "sqliteScript", "Db": "app.db"})
    """
    if mode is None:
        mode = get_log_mode()

    if mode == 'customer':
        if details:
            detail_str = ", ".join(f"{k}: {v}" for k, v in details.items())
            logger.info(f"{title} ({detail_str})")
        else:
            logger.info(title)
    else:
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        logger.info(title.upper())
        if details:
            for key, value in details.items():
                logger.info(f"   {key}: {value}")
        logger.info("=" * LOG_SEPARATOR_WIDTH)


def log_success(logger: logging.Logger, message: str):
    """Log a success message"""
    logger.info(f"OK: {message}")
