"""Offline chain verification over exported entries.

The verifier does not need the AuditChain that produced the entries.
It starts from the genesis digest and walks the exported sequence in
order, checking that every entry's previous_hash equals the chain_hash
of the entry before it. That catches deletion, insertion, and
reordering.

Linkage alone does not catch an edited message whose chain_hash was
left untouched, nor an edited chain_hash on the final entry. So by
default each entry's chain_hash is also recomputed from its own fields
and compared. Pass recompute=False for the linkage-only walk.

Two ways in:
- verify_chain(entries) -> bool. Malformed input is just False; no
  indication of where it failed.
- ChainVerifier(entries).verify_full() -> ChainVerificationResult, which
  reports the first failing position, the expected and actual hashes,
  and a message.

Verification is read-only over caller data and keeps no state between
calls, so it is safe to run concurrently with anything, including
appends to a live chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Union

from dtshim.crypto.codec import EntryFormatError, decode_entry, validate_entry
from dtshim.crypto.hasher import GENESIS_HASH, hash_entry
from dtshim.domain.entry import LogEntry

log = logging.getLogger(__name__)

EntryLike = Union[str, bytes, LogEntry]


@dataclass(frozen=True, slots=True)
class ChainVerificationResult:
    """Result of a chain verification operation."""

    is_valid: bool
    entries_verified: int
    first_invalid_sequence: int | None = None
    expected_hash: str | None = None
    actual_hash: str | None = None
    error_message: str | None = None


def _as_entry(item: EntryLike) -> LogEntry:
    """Decode serialized text; check every field of ready-made entries."""
    if isinstance(item, LogEntry):
        return validate_entry(item)
    return decode_entry(item)


class ChainVerifier:
    """Verifies the linkage (and by default the content) of exported entries.

    Args:
        entries: Serialized entries (str or bytes) and/or LogEntry
            objects, in the order they were appended.
        recompute: Also re-derive each chain_hash from the entry's own
            fields. False gives the linkage-only check.
    """

    def __init__(self, entries: Iterable[EntryLike], recompute: bool = True) -> None:
        self._entries = list(entries)
        self._recompute = recompute

    def __len__(self) -> int:
        return len(self._entries)

    def verify_full(self) -> ChainVerificationResult:
        """Verify every entry, starting from the genesis digest.

        Stops at the first failure. O(n) in the number of entries.
        """
        if not self._entries:
            return ChainVerificationResult(is_valid=True, entries_verified=0)
        result = self._verify_range_internal(0, len(self._entries))
        if result.is_valid:
            log.info("Chain verified: %d entries", result.entries_verified)
        return result

    def verify_range(self, start: int, end: int) -> ChainVerificationResult:
        """Verify entries[start] through entries[end-1].

        For start > 0 the stored previous_hash of entries[start] is
        trusted as the anchor. For full integrity, use verify_full().

        Raises ValueError if start or end is out of bounds.
        """
        count = len(self._entries)
        if start < 0 or end > count or start >= end:
            raise ValueError(
                f"Invalid range [{start}, {end}) for {count} entries"
            )
        return self._verify_range_internal(start, end)

    def verify_entry(self, index: int) -> ChainVerificationResult:
        """Recompute one entry's chain_hash against its own fields.

        Proves only that this entry is self-consistent; says nothing
        about its predecessor. Raises IndexError if out of range.
        """
        if index < 0 or index >= len(self._entries):
            raise IndexError(
                f"Index {index} out of range ({len(self._entries)} entries)"
            )
        try:
            entry = _as_entry(self._entries[index])
        except EntryFormatError as exc:
            return self._malformed(index, 0, exc)
        return self._check_content(index, entry, verified=0) or (
            ChainVerificationResult(is_valid=True, entries_verified=1)
        )

    def _verify_range_internal(self, start: int, end: int) -> ChainVerificationResult:
        verified = 0
        expected_prev: str | None = GENESIS_HASH if start == 0 else None

        for seq in range(start, end):
            try:
                entry = _as_entry(self._entries[seq])
            except EntryFormatError as exc:
                return self._malformed(seq, verified, exc)

            if expected_prev is None:
                # Start of a range check -- trust the stored previous_hash
                expected_prev = entry.previous_hash

            if entry.previous_hash != expected_prev:
                return self._fail(
                    seq, verified, expected_prev, entry.previous_hash,
                    f"Chain link broken at sequence {seq}: previous_hash does "
                    f"not match the predecessor's chain_hash. An entry may "
                    f"have been deleted, inserted, or reordered.",
                )

            if self._recompute:
                failure = self._check_content(seq, entry, verified)
                if failure is not None:
                    return failure

            expected_prev = entry.chain_hash
            verified += 1

        return ChainVerificationResult(is_valid=True, entries_verified=verified)

    def _check_content(
        self, seq: int, entry: LogEntry, verified: int
    ) -> ChainVerificationResult | None:
        recomputed = hash_entry(entry)
        if recomputed == entry.chain_hash:
            return None
        return self._fail(
            seq, verified, recomputed, entry.chain_hash,
            f"Hash mismatch at sequence {seq}: entry fields have been "
            f"modified. Expected {recomputed[:16]}..., "
            f"got {entry.chain_hash[:16]}...",
        )

    def _malformed(
        self, seq: int, verified: int, exc: EntryFormatError
    ) -> ChainVerificationResult:
        return self._fail(
            seq, verified, None, None, f"Malformed entry at sequence {seq}: {exc}"
        )

    @staticmethod
    def _fail(
        seq: int,
        verified: int,
        expected: str | None,
        actual: str | None,
        message: str,
    ) -> ChainVerificationResult:
        log.warning(message)
        return ChainVerificationResult(
            is_valid=False,
            entries_verified=verified,
            first_invalid_sequence=seq,
            expected_hash=expected,
            actual_hash=actual,
            error_message=message,
        )


def verify_chain(entries: Iterable[EntryLike], *, recompute: bool = True) -> bool:
    """True if the ordered entries form an intact chain from genesis.

    An empty sequence is vacuously valid. Any malformed entry makes the
    whole sequence invalid.
    """
    return ChainVerifier(entries, recompute=recompute).verify_full().is_valid
