"""Chain-hash derivation for log entries.

An entry's chain_hash is SHA-256 over a pipe-separated payload:

    device_id|timestamp|actor|severity|message|previous_hash_hex

actor and severity are written as decimal integers and previous_hash as
64 lowercase hex characters. The payload is UTF-8 encoded with
"surrogatepass" so every Python str has an encoding and append() cannot
fail on odd message content.

Field order is fixed and must never change once entries have been
hashed -- changing it would silently break every exported chain.

The previous_hash is part of the payload, so each entry's hash depends
on the entire chain before it, not just its own fields.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dtshim.crypto.sha256 import Digest, sha256

if TYPE_CHECKING:
    from dtshim.domain.entry import LogEntry


FIELD_SEPARATOR = "|"

# Public, documented seed. The chain's guarantee comes from linkage,
# not from keeping this value secret.
GENESIS_SEED = b"DTS_INIT"

_GENESIS = sha256(GENESIS_SEED)
GENESIS_HASH: str = _GENESIS.hex()


def genesis_digest() -> Digest:
    """The rolling digest of a chain that has no entries yet."""
    return _GENESIS


def build_payload(
    device_id: str,
    timestamp: str,
    actor: int,
    severity: int,
    message: str,
    previous_hash: str,
) -> bytes:
    """Assemble the exact byte string that chain_hash is computed over."""
    payload = FIELD_SEPARATOR.join((
        device_id,
        timestamp,
        str(int(actor)),
        str(int(severity)),
        message,
        previous_hash,
    ))
    return payload.encode("utf-8", "surrogatepass")


def compute_chain_hash(
    device_id: str,
    timestamp: str,
    actor: int,
    severity: int,
    message: str,
    previous_hash: str,
) -> Digest:
    """SHA-256 of build_payload(...)."""
    return sha256(
        build_payload(device_id, timestamp, actor, severity, message, previous_hash)
    )


def hash_entry(entry: LogEntry) -> str:
    """Recompute an entry's chain_hash from its own fields (hex)."""
    return compute_chain_hash(
        entry.device_id,
        entry.timestamp,
        entry.actor,
        entry.severity,
        entry.message,
        entry.previous_hash,
    ).hex()
