"""Actor and severity codes carried in every log entry.

Both are small integers on the wire. The numeric values are part of the
exchange format and of the hashed payload, so they must never be
renumbered.
"""
from enum import IntEnum


class Actor(IntEnum):
    """Who or what triggered the event (serialized as ``user_id``)."""

    SYSTEM = 0
    ADMIN = 1
    OPERATOR = 2
    SERVICE = 3
    UNAUTHORIZED = 255


class Severity(IntEnum):
    """Event severity, ordered by ascending criticality."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4
