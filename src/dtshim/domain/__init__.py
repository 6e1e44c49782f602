"""Domain model for dtshim.

Re-exports all public types for convenient access:
    from dtshim.domain import Actor, Severity, LogEntry
"""
from dtshim.domain.codes import Actor, Severity
from dtshim.domain.entry import LogEntry
from dtshim.domain.types import DeviceId, HexDigest, Timestamp

__all__ = [
    "Actor",
    "Severity",
    "LogEntry",
    "DeviceId",
    "HexDigest",
    "Timestamp",
]
