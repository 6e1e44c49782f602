"""Shared type aliases used across the domain."""
from __future__ import annotations

from typing import TypeAlias

DeviceId: TypeAlias = str
HexDigest: TypeAlias = str  # 64 lowercase hex characters
Timestamp: TypeAlias = str  # YYYY-MM-DDTHH:MM:SS.mmmZ, always UTC
