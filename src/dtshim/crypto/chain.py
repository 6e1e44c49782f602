"""Append-only hash chain for tamper-evident device logging.

An AuditChain is the per-device chain state:
- device_id: fixed at construction
- the rolling digest: hash of the most recent entry, or the genesis
  digest (SHA-256 of b"DTS_INIT") before anything has been logged
- a sequence counter: 0 at construction, +1 per append, never reset

Each append captures the wall clock, hashes the entry's fields together
with the current rolling digest, hands back the serialized entry, and
advances the rolling digest to the new hash. Modifying, deleting, or
reordering any exported entry therefore breaks every link that follows.

The chain keeps no entries. Once append() returns, the serialized text
belongs to the caller (persist it, upload it, print it); the chain only
remembers the one digest it needs for the next link.

The chain is tamper-evident, not tamper-proof: it detects modifications
but does not prevent them.

Single writer. There is no locking here; callers that append from
several threads must serialize access themselves.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from dtshim.crypto.codec import encode_entry, format_timestamp
from dtshim.crypto.hasher import compute_chain_hash, genesis_digest
from dtshim.crypto.sha256 import Digest
from dtshim.domain.codes import Actor, Severity
from dtshim.domain.entry import LogEntry

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditChain:
    """Tamper-evident audit chain logger for one device identity.

    Args:
        device_id: Unique device identifier (e.g. serial number).
        clock: Zero-argument callable returning the current time.
            Defaults to the UTC wall clock; tests pass a fixed clock.
    """

    def __init__(self, device_id: str, clock: Clock | None = None) -> None:
        if not isinstance(device_id, str):
            raise TypeError(
                f"device_id must be str, got {type(device_id).__name__}"
            )
        self._device_id = device_id
        self._clock: Clock = clock or _utc_now
        self._head: Digest = genesis_digest()
        self._sequence = 0

    @property
    def device_id(self) -> str:
        return self._device_id

    @property
    def head_digest(self) -> Digest:
        """The rolling digest (genesis digest if nothing was appended)."""
        return self._head

    @property
    def chain_hash(self) -> str:
        """Hex of the rolling digest."""
        return self._head.hex()

    @property
    def sequence_number(self) -> int:
        """Total number of entries appended through this instance."""
        return self._sequence

    def current_chain_digest(self) -> str:
        return self._head.hex()

    def current_sequence_number(self) -> int:
        return self._sequence

    def __len__(self) -> int:
        return self._sequence

    def append_entry(
        self,
        message: str,
        actor: Actor | int = Actor.SYSTEM,
        severity: Severity | int = Severity.INFO,
    ) -> LogEntry:
        """Hash and link one event, returning the LogEntry value object.

        actor/severity accept enum members or their integer codes.
        Unknown codes raise ValueError before the chain state changes.
        """
        if not isinstance(message, str):
            raise TypeError(f"message must be str, got {type(message).__name__}")
        actor = Actor(actor)
        severity = Severity(severity)

        timestamp = format_timestamp(self._clock())
        previous = self._head.hex()
        current = compute_chain_hash(
            self._device_id, timestamp, actor, severity, message, previous
        )

        entry = LogEntry(
            device_id=self._device_id,
            timestamp=timestamp,
            actor=actor,
            severity=severity,
            message=message,
            previous_hash=previous,
            chain_hash=current.hex(),
        )
        self._head = current
        self._sequence += 1
        log.debug(
            "%s: appended seq=%d hash=%s...",
            self._device_id, self._sequence, entry.chain_hash[:16],
        )
        return entry

    def append(
        self,
        message: str,
        actor: Actor | int = Actor.SYSTEM,
        severity: Severity | int = Severity.INFO,
    ) -> str:
        """Log an event and return its serialized, hash-linked entry."""
        return encode_entry(self.append_entry(message, actor, severity))
