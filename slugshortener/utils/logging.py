"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at process start (e.g. in the
transport layer's entrypoint) before any other logging is done.

Every record becomes one JSON line. Fields passed through `extra=` are
attached at the top level; exceptions and stack traces are rendered as text.

Logging format:
{
    "timestamp": "2026-10-18T12:00:00.000Z",
    "level": "INFO",
    "logger": "slugshortener.dao.redis.short_url_redis_dao",
    "message": "Created short URL.",
    "slug": "Rk7dPq2x",
    "attempt": 1
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from slugshortener.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra=`
RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}

# Third-party loggers which are chatty at DEBUG/INFO
QUIET_LOGGERS = ('botocore', 'boto3', 'urllib3')


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON objects"""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        # Millisecond precision, UTC, 'Z' suffix
        timestamp = datetime.fromtimestamp(record.created, tz=UTC)
        return timestamp.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update((key, value) for key, value in vars(record).items() if key not in RESERVED_ATTRS)

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            entry['stack'] = self.formatStack(record.stack_info)

        # Non-JSON extras (bytes keys, timedeltas, models) are logged via str()
        return json.dumps(entry, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Route all logging to stdout as JSON

    Args:
        level (str | None):
            Root log level. Defaults to $LOG_LEVEL, or INFO.
    """
    level = (level or os.getenv(ENV.App.LOG_LEVEL, 'INFO')).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {'()': JsonFormatter},
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                },
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {'level': level, 'handlers': ['stdout']},
        }
    )
