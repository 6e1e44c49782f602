"""Tamper detection: every way an exported chain can be altered."""
from __future__ import annotations

import pytest

from dtshim.crypto.codec import decode_entry, encode_entry
from dtshim.crypto.hasher import GENESIS_HASH, hash_entry
from dtshim.crypto.verifier import ChainVerifier, verify_chain
from dtshim.domain.codes import Actor, Severity
from dtshim.domain.entry import LogEntry

from tests.conftest import build_export


def _flip_hex(digest: str, index: int = 0) -> str:
    """Change one hex character, keeping the digest well-formed."""
    ch = digest[index]
    replacement = "0" if ch != "0" else "1"
    return digest[:index] + replacement + digest[index + 1:]


def _replace(entry_text: str, **changes) -> str:
    entry = decode_entry(entry_text)
    fields = {name: getattr(entry, name) for name in LogEntry.__slots__}
    fields.update(changes)
    return encode_entry(LogEntry(**fields))


class TestStructuralTampering:
    """Deletion, insertion, reordering: caught by linkage alone."""

    @pytest.mark.parametrize("recompute", [True, False])
    def test_delete_middle_entry(self, recompute):
        export = build_export(10)
        del export[4]
        result = ChainVerifier(export, recompute=recompute).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 4
        assert result.entries_verified == 4

    @pytest.mark.parametrize("recompute", [True, False])
    def test_delete_first_entry(self, recompute):
        export = build_export(5)
        result = ChainVerifier(export[1:], recompute=recompute).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 0
        assert result.expected_hash == GENESIS_HASH

    @pytest.mark.parametrize("recompute", [True, False])
    def test_swap_adjacent_entries(self, recompute):
        export = build_export(10)
        export[3], export[4] = export[4], export[3]
        result = ChainVerifier(export, recompute=recompute).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 3

    @pytest.mark.parametrize("recompute", [True, False])
    def test_insert_foreign_entry(self, recompute):
        export = build_export(10)
        other = build_export(10, device_id="DEV-2")
        export.insert(5, other[5])
        result = ChainVerifier(export, recompute=recompute).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 5

    def test_duplicate_entry(self):
        export = build_export(6)
        export.insert(3, export[2])
        assert not verify_chain(export)

    def test_truncated_tail_still_verifies(self):
        """Dropping trailing entries is not detectable from the export alone."""
        export = build_export(10)
        assert verify_chain(export[:7])


class TestDigestTampering:
    @pytest.mark.parametrize("recompute", [True, False])
    def test_altered_previous_hash(self, recompute):
        export = build_export(10)
        entry = decode_entry(export[6])
        export[6] = _replace(export[6], previous_hash=_flip_hex(entry.previous_hash))
        result = ChainVerifier(export, recompute=recompute).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 6

    @pytest.mark.parametrize("recompute", [True, False])
    def test_altered_middle_chain_hash(self, recompute):
        """The successor's previous_hash no longer matches."""
        export = build_export(10)
        entry = decode_entry(export[3])
        export[3] = _replace(export[3], chain_hash=_flip_hex(entry.chain_hash, 10))
        result = ChainVerifier(export, recompute=recompute).verify_full()
        assert not result.is_valid
        # Recompute catches it on the entry itself; linkage on the next one.
        assert result.first_invalid_sequence == (3 if recompute else 4)

    def test_altered_last_chain_hash_needs_recompute(self):
        export = build_export(10)
        entry = decode_entry(export[-1])
        export[-1] = _replace(export[-1], chain_hash=_flip_hex(entry.chain_hash))
        assert verify_chain(export, recompute=False)
        result = ChainVerifier(export).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 9
        assert result.expected_hash == entry.chain_hash

    def test_uppercase_digest_is_malformed(self):
        export = build_export(3)
        entry = decode_entry(export[1])
        export[1] = export[1].replace(entry.chain_hash, entry.chain_hash.upper())
        result = ChainVerifier(export).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 1
        assert "Malformed" in result.error_message

    def test_non_hex_digest_is_malformed(self):
        export = build_export(3)
        entry = decode_entry(export[2])
        bad = "z" + entry.previous_hash[1:]
        export[2] = export[2].replace(entry.previous_hash, bad)
        assert not verify_chain(export)
        assert not verify_chain(export, recompute=False)

    def test_short_digest_is_malformed(self):
        export = build_export(3)
        entry = decode_entry(export[0])
        export[0] = export[0].replace(entry.chain_hash, entry.chain_hash[:63])
        assert not verify_chain(export)

    def test_log_entry_with_bad_digest_is_malformed(self):
        export = [decode_entry(line) for line in build_export(3)]
        fields = {name: getattr(export[1], name) for name in LogEntry.__slots__}
        fields["chain_hash"] = "not-a-digest"
        export[1] = LogEntry(**fields)
        result = ChainVerifier(export).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 1


class TestContentTampering:
    """Edited fields with stale hashes: caught by recomputation."""

    @pytest.mark.parametrize(
        "edit",
        [
            lambda e: {"message": "Dose delivered: 0.0 mL"},
            lambda e: {"device_id": "DEV-EVIL"},
            lambda e: {"timestamp": "2030-01-01T00:00:00.000Z"},
            lambda e: {"actor": Actor((int(e.actor) + 1) % 4)},
            lambda e: {"severity": Severity((int(e.severity) + 1) % 5)},
        ],
        ids=["message", "device_id", "timestamp", "actor", "severity"],
    )
    def test_edited_field_detected(self, edit):
        export = build_export(10)
        original = decode_entry(export[5])
        tampered = _replace(export[5], **edit(original))
        assert decode_entry(tampered) != original
        export[5] = tampered

        result = ChainVerifier(export).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 5
        assert result.actual_hash == original.chain_hash

    def test_edited_message_passes_linkage_only(self):
        """The linkage-only walk cannot see content edits."""
        export = build_export(10)
        export[5] = _replace(export[5], message="rewritten")
        assert verify_chain(export, recompute=False)
        assert not verify_chain(export)

    def test_rehashed_entry_breaks_successor(self):
        """Fixing up the edited entry's own hash still breaks the next link."""
        export = build_export(10)
        edited = decode_entry(_replace(export[5], message="rewritten"))
        fields = {name: getattr(edited, name) for name in LogEntry.__slots__}
        fields["chain_hash"] = hash_entry(edited)
        export[5] = encode_entry(LogEntry(**fields))

        for recompute in (True, False):
            result = ChainVerifier(export, recompute=recompute).verify_full()
            assert not result.is_valid
            assert result.first_invalid_sequence == 6

    def test_single_character_edit(self):
        export = build_export(4)
        entry = decode_entry(export[2])
        message = entry.message
        flipped = ("X" if message[0] != "X" else "Y") + message[1:]
        export[2] = _replace(export[2], message=flipped)
        assert not verify_chain(export)


class TestMalformedInput:
    @pytest.mark.parametrize(
        "garbage",
        ["", "{}", "not json", '{"device_id":"DEV-1"}', b"\xff\xfe"],
    )
    def test_malformed_entry_fails_verification(self, garbage):
        export = build_export(3)
        export.insert(1, garbage)
        result = ChainVerifier(export).verify_full()
        assert not result.is_valid
        assert result.first_invalid_sequence == 1
        assert result.entries_verified == 1

    def test_whitespace_inside_object_rejected(self):
        export = build_export(2)
        export[0] = export[0].replace('","timestamp"', '", "timestamp"')
        assert not verify_chain(export)

    def test_trailing_newline_tolerated(self):
        export = [line + "\n" for line in build_export(5)]
        assert verify_chain(export)


class TestMalformedLogEntries:
    """Wrongly typed LogEntry fields are a failed verification, not a crash."""

    @pytest.mark.parametrize(
        "changes",
        [
            {"message": None},
            {"device_id": b"DEV-1"},
            {"timestamp": 0},
            {"actor": "SYSTEM"},
            {"severity": None},
            {"severity": 42},
        ],
    )
    def test_bad_field_fails(self, changes):
        export = [decode_entry(line) for line in build_export(3)]
        fields = {name: getattr(export[1], name) for name in LogEntry.__slots__}
        fields.update(changes)
        export[1] = LogEntry(**fields)

        assert not verify_chain(export)
        assert not verify_chain(export, recompute=False)
        result = ChainVerifier(export).verify_full()
        assert result.first_invalid_sequence == 1
        assert "Malformed" in result.error_message

    def test_first_entry_with_no_message(self):
        entry = LogEntry(
            "D", "2025-01-15T10:00:00.000Z", Actor.SYSTEM, Severity.INFO,
            None, GENESIS_HASH, "0" * 64,
        )
        assert verify_chain([entry]) is False

    def test_plain_integer_codes_still_verify(self):
        export = [decode_entry(line) for line in build_export(4)]
        fields = {name: getattr(export[2], name) for name in LogEntry.__slots__}
        fields["actor"] = int(fields["actor"])
        fields["severity"] = int(fields["severity"])
        export[2] = LogEntry(**fields)
        assert verify_chain(export)
