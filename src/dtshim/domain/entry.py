"""LogEntry -- immutable value object for one chained event.

An entry is produced once by AuditChain.append_entry() and never changes
afterwards. It holds no reference back to the chain that produced it:
everything needed to re-derive chain_hash is in its own fields.

Digests are kept in their hex rendering because that is how they are
written into the exchange format and into the hashed payload.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from dtshim.domain.codes import Actor, Severity
from dtshim.domain.types import DeviceId, HexDigest, Timestamp

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One tamper-evident log record."""

    device_id: DeviceId
    timestamp: Timestamp
    actor: Actor
    severity: Severity
    message: str
    previous_hash: HexDigest  # rolling digest before this entry
    chain_hash: HexDigest     # digest over all of the above

    @property
    def datetime_utc(self) -> datetime:
        """Parse the millisecond timestamp back into an aware datetime."""
        parsed = datetime.strptime(self.timestamp, TIMESTAMP_FORMAT)
        return parsed.replace(tzinfo=timezone.utc)

    def links_to(self, previous: LogEntry) -> bool:
        """Does this entry declare `previous` as its predecessor?"""
        return self.previous_hash == previous.chain_hash
