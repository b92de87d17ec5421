import logging
import re
import uuid
from datetime import datetime, timedelta, timezone

from exceptions import ValidationException


# Custom logging formatter to support colors
class ColoredFormatter(logging.Formatter):
    # Define color codes
    COLORS = {
        'DEBUG': '\033[94m',   # Blue
        'INFO': '\033[92m',    # Green
        'WARNING': '\033[93m', # Yellow
        'ERROR': '\033[91m',   # Red
        'CRITICAL': '\033[95m' # Magenta
    }
    RESET = '\033[0m'  # Reset color

    def format(self, record):
        # Add color to the log level name
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        return super().format(record)


# Filter to remove date from http access logs
class FilterRemoveDateFromWerkzeugLogs(logging.Filter):
    # '192.168.0.102 - - [30/Jun/2024 01:14:03] "%s" %s %s' -> '192.168.0.102 - "%s" %s %s'
    pattern: re.Pattern = re.compile(r' - - \[.+?] "')

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.pattern.sub(' - "', record.msg)
        return True


YELLOW = '\033[93m'
BRIGHT_GREEN = '\033[92;1m'
RESET = ColoredFormatter.RESET


def format_query_log(statement, parameters, duration_ms):
    """Render one executed statement as `<params> -> <sql> <duration>ms`."""
    params = sanitize_sensitive_data(parameters) if isinstance(parameters, dict) else parameters
    statement = " ".join(statement.split())
    return f"{YELLOW}{params}{RESET} -> {statement} {BRIGHT_GREEN}{duration_ms:.1f}ms{RESET}"


def sanitize_sensitive_data(data, sensitive_keys=None):
    """
    Mask sensitive values before logging.

    Args:
        data: Dictionary, list or scalar to sanitize
        sensitive_keys: Key fragments to mask (default: common credential names)

    Returns:
        Sanitized copy of the data
    """
    if sensitive_keys is None:
        sensitive_keys = [
            'password', 'passwd', 'pwd',
            'secret', 'token', 'api_key',
        ]

    if isinstance(data, dict):
        sanitized = {}
        for k, v in data.items():
            key_lower = str(k).lower()
            if any(sens in key_lower for sens in sensitive_keys):
                sanitized[k] = "***"
            elif isinstance(v, (dict, list)):
                sanitized[k] = sanitize_sensitive_data(v, sensitive_keys)
            else:
                sanitized[k] = v
        return sanitized

    if isinstance(data, list):
        return [sanitize_sensitive_data(item, sensitive_keys) if isinstance(item, (dict, list)) else item for item in data]

    return data


def now_utc():
    """Returns current datetime in UTC (aware)"""
    return datetime.now(timezone.utc)


def ensure_utc(dt):
    """
    Ensure a datetime object is aware and in UTC.
    Naive datetimes are assumed to already be UTC, which is how
    SQLite hands back stored timestamps.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def from_epoch_ms(value):
    """Parse an epoch-milliseconds query value into an aware UTC datetime"""
    try:
        return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        raise ValidationException(f"Invalid timestamp: {value!r}")


def as_uuid(value):
    """Coerce a UUID or its string form, rejecting anything else"""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationException(f"Invalid UUID: {value!r}")


def truncate_datetime(dt, unit):
    """Truncate a datetime to the start of its minute/hour/day/week/month/year.

    Weeks start on Monday, matching PostgreSQL date_trunc('week', ...).
    """
    if unit == 'minute':
        return dt.replace(second=0, microsecond=0)
    if unit == 'hour':
        return dt.replace(minute=0, second=0, microsecond=0)

    day = dt.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit == 'day':
        return day
    if unit == 'week':
        return day - timedelta(days=day.weekday())
    if unit == 'month':
        return day.replace(day=1)
    if unit == 'year':
        return day.replace(month=1, day=1)

    raise ValidationException(f"Invalid time unit: {unit!r}")
