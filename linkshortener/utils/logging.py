"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once, at application start-up, before
any other logging is done.

Logging format (stdout):
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkshortener.registry",
    "message": "Created short URL."
}

Besides stdout, every record is kept in a bounded in-memory ring buffer
(LogBufferHandler) so that a view layer can display recent diagnostics.
"""

import os
import json
import logging
import logging.config
from collections import deque
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any

from linkshortener.utils.constants import LOG_LEVEL_ENV, LOG_BUFFER_CAPACITY


STANDARD_ATTRS = frozenset(
    {
        'args',
        'asctime',
        'created',
        'exc_info',
        'exc_text',
        'filename',
        'funcName',
        'levelname',
        'levelno',
        'lineno',
        'module',
        'msecs',
        'message',
        'msg',
        'name',
        'pathname',
        'process',
        'processName',
        'relativeCreated',
        'stack_info',
        'thread',
        'threadName',
        'taskName',
    }
)


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the `extra` fields attached to a LogRecord"""
    return {key: value for key, value in record.__dict__.items() if key not in STANDARD_ATTRS}


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        log.update(_extras(record))

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


@dataclass(frozen=True)
class LogEntry:
    """Single entry of the in-memory log ring buffer."""

    timestamp: datetime
    level: str
    message: str
    data: dict[str, Any]


class LogBufferHandler(logging.Handler):
    """Logging handler keeping the most recent records in memory

    Once `capacity` entries are held, every new entry evicts the oldest one.

    Attributes:
        capacity (int):
            Maximum number of entries kept.

    Example:
        >>> handler = LogBufferHandler(capacity=2)
        >>> logging.getLogger().addHandler(handler)
        >>> logging.getLogger().warning('one'); logging.getLogger().warning('two')
        >>> logging.getLogger().warning('three')
        >>> [entry.message for entry in handler.entries()]
        ['two', 'three']
    """

    def __init__(self, capacity: int = LOG_BUFFER_CAPACITY, level: int = logging.NOTSET):
        if capacity <= 0:
            raise ValueError(f'Capacity must be a positive integer (given value: {capacity}).')

        super().__init__(level=level)
        self.capacity = capacity
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = LogEntry(
                timestamp=datetime.fromtimestamp(record.created, tz=UTC),
                level=record.levelname,
                message=record.getMessage(),
                data=_extras(record),
            )
        except Exception:
            self.handleError(record)
        else:
            self._entries.append(entry)

    def entries(self) -> list[LogEntry]:
        """Return a copy of the buffered entries, oldest first"""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()


def initialize_logging(buffer: LogBufferHandler | None = None) -> LogBufferHandler:
    """Configure the root logger with JSON stdout output and a ring buffer

    The log level is read from the LOG_LEVEL environment variable ('INFO' by default).

    Args:
        buffer (LogBufferHandler | None):
            Ring buffer handler to attach. A new one is created if None.

    Returns:
        LogBufferHandler: the attached ring buffer, for diagnostics reads.
    """
    log_level = os.getenv(LOG_LEVEL_ENV, 'INFO').upper()
    buffer = buffer or LogBufferHandler()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                },
                'buffer': {
                    '()': lambda: buffer,
                },
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout', 'buffer'],
            },
        }
    )
    return buffer
