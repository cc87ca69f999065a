# 📄 File: plantswap/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Decides what a log line looks like. Every line carries the request id and the signed-in user,
# so one offer moving through its steps can be followed across requests.

# 🧪 Purpose (Technical Summary):
# Root logger setup with a python-json-logger formatter (or a text one for local runs). Request
# and user ids live in contextvars set by the middleware; StructuredLogger forwards keyword
# fields as "extra".

# 🔗 Dependencies:
# - python-json-logger
# - logging, contextvars

# 🔄 Connected Modules / Calls From:
# plantswap.main (lifespan), api.middleware (request and user ids), shared.events (publisher
# and event metadata)

import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from plantswap.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

_logging_configured = False

SERVICE_NAME = 'plantswap-api'


def _hostname() -> str:
    return os.uname().nodename if hasattr(os, 'uname') else 'unknown'


class ContextualFormatter(logging.Formatter):
    """Plain text lines with the request context attached to the record."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hostname = _hostname()

    def format(self, record):
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.hostname = self.hostname
        record.service = SERVICE_NAME
        record.timestamp = datetime.now(timezone.utc).isoformat()

        if getattr(record, 'extra_fields', None):
            for key, value in record.extra_fields.items():
                setattr(record, key, value)

        return super().format(record)


class ContextualJSONFormatter(JsonFormatter):
    """
    One JSON object per record. ``extra_fields`` from StructuredLogger end up
    under ``extra``; request and user ids only appear inside a request.
    """

    def __init__(self):
        super().__init__(
            '%(levelname)s %(name)s %(message)s %(module)s %(funcName)s %(lineno)d',
            rename_fields={'levelname': 'level', 'name': 'logger', 'funcName': 'function', 'lineno': 'line'},
            json_ensure_ascii=False,
        )
        self.hostname = _hostname()

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['service'] = SERVICE_NAME
        log_record['hostname'] = self.hostname

        if request_id_var.get():
            log_record['request_id'] = request_id_var.get()
        if user_id_var.get():
            log_record['user_id'] = user_id_var.get()

        extra_fields = log_record.pop('extra_fields', None)
        if extra_fields:
            log_record['extra'] = extra_fields


class StructuredLogger:
    """
    Wrapper around a standard logger that accepts an ``extra`` dict and
    keeps it under ``extra_fields`` so both formatters can render it.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.name = name

    def debug(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Dict = None, exc_info: bool = False, **kwargs):
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def critical(self, message: str, extra: Dict = None, exc_info: bool = False, **kwargs):
        self._log(logging.CRITICAL, message, extra, exc_info=exc_info, **kwargs)

    def _log(self, level: int, message: str, extra: Dict = None, **kwargs):
        extra_fields = dict(extra or {})
        exc_info = kwargs.pop('exc_info', False)
        extra_fields.update(kwargs)

        self.logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={'extra_fields': extra_fields} if extra_fields else None,
        )


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Configure the root logger once per process; later calls are no-ops.

    Arguments left as None fall back to LOG_LEVEL, LOG_FORMAT and LOG_FILE.
    Returns the "startup" logger.
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    log_file = log_file or settings.LOG_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = ContextualJSONFormatter()
    else:
        formatter = ContextualFormatter('%(timestamp)s - %(name)s - %(levelname)s - %(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


def get_logger(name: str) -> StructuredLogger:
    """StructuredLogger for ``name`` (usually ``__name__``)."""
    return StructuredLogger(name)


def log_startup_event(service_name: str, version: str, extra: Dict = None):
    get_logger("startup").info(
        f"{service_name} v{version} starting",
        extra={'event_type': 'startup', 'service': service_name, 'version': version, **(extra or {})},
    )


def log_shutdown_event(service_name: str, extra: Dict = None):
    get_logger("startup").info(
        f"{service_name} shutting down",
        extra={'event_type': 'shutdown', 'service': service_name, **(extra or {})},
    )
