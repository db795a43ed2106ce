"""
Structured JSON logging for the SendGrid adapter.

One-line JSON records on stdout (and an optional rotating file when LOG_FILE
is set); keyword arguments to info/warn/error/debug become record fields.
"""

import logging
import os
import sys
from datetime import datetime, timezone
import json
from logging.handlers import RotatingFileHandler


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging similar to pino."""

    def format(self, record):
        log_data = {
            'level': record.levelname.lower(),
            'time': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'service': 'sendgrid-rest',
            'msg': record.getMessage()
        }

        # Add exception info if present
        if record.exc_info:
            log_data['err'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'stack': self.formatException(record.exc_info)
            }

        # Add extra fields from the record
        if hasattr(record, 'extra_data'):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


# Configure the logger
logger = logging.getLogger('sendgrid-rest')
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())

# Create console handler with JSON formatter
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(JSONFormatter())
logger.addHandler(console_handler)

# File logging is opt-in for a library (10MB max, keep 5 backups)
log_file_path = os.getenv('LOG_FILE')
if log_file_path:
    file_handler = RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setFormatter(JSONFormatter())
    logger.addHandler(file_handler)

# Prevent propagation to root logger
logger.propagate = False


def _log_with_context(level, msg, **context):
    """Helper function to log with additional context fields."""
    extra = {'extra_data': context} if context else {}
    logger.log(level, msg, extra=extra)


# Convenience methods
def info(msg, **context):
    _log_with_context(logging.INFO, msg, **context)


def error(msg, err=None, **context):
    if err:
        context['err'] = {'message': str(err), 'type': type(err).__name__}
    _log_with_context(logging.ERROR, msg, **context)


def warn(msg, **context):
    _log_with_context(logging.WARNING, msg, **context)


def debug(msg, **context):
    _log_with_context(logging.DEBUG, msg, **context)
