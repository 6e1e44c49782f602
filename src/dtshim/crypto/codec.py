"""Exchange format for log entries: one JSON object per entry, fixed layout.

    {"device_id":"..","timestamp":"..","user_id":N,"severity":N,
     "message":"..","previous_hash":"<64 hex>","chain_hash":"<64 hex>"}

(on a single line, no whitespace between tokens.)

The output is valid JSON, but decoding deliberately does not go through
json.loads. Verification depends on pulling exactly these seven fields
out of exactly this layout, so the decoder is a small cursor that
accepts the layout the encoder writes and nothing else: no reordered or
duplicate keys, no extra fields, no whitespace inside the object. Any
deviation raises EntryFormatError.

Escaping rule for string fields: quote, backslash, the five short
control escapes (\\b \\f \\n \\r \\t), \\u00XX for the remaining C0 and
C1 control characters and DEL, and \\uXXXX for U+2028, U+2029 and lone
surrogates. Everything else is written through as-is, so the escaped
text round-trips to the exact str that was hashed, and an encoded entry
never contains a character that str.splitlines() would break on.

Each \\uXXXX escape decodes to exactly one code point. An escaped
surrogate pair such as \\ud83d\\ude00 stays two lone surrogates and is
not combined into U+1F600 the way json.loads would: the encoder writes
that sequence for a str holding two adjacent lone surrogates, and
combining them would change what gets hashed. Only entries written by
encode_entry() are guaranteed to verify.
"""

from __future__ import annotations

import re
from dataclasses import replace
from datetime import datetime, timezone

from dtshim.domain.codes import Actor, Severity
from dtshim.domain.entry import LogEntry


class EntryFormatError(ValueError):
    """Serialized entry text does not match the exchange format."""


_ESCAPE_TABLE: dict[int, str] = {
    code: f"\\u{code:04x}"
    for code in (
        *range(0x20),
        *range(0x7F, 0xA0),
        0x2028,
        0x2029,
        *range(0xD800, 0xE000),
    )
}
_ESCAPE_TABLE.update({
    ord('"'): '\\"',
    ord("\\"): "\\\\",
    ord("\b"): "\\b",
    ord("\f"): "\\f",
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
})

_UNESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_STRING_CHUNK = re.compile(r'[^"\\\x00-\x1f]*')
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")
_INT = re.compile(r"0|[1-9][0-9]*")
_HEX_DIGEST = re.compile(r"[0-9a-f]{64}")
_TIMESTAMP = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}Z"
)


def escape_text(text: str) -> str:
    """Escape a str for embedding between double quotes."""
    return text.translate(_ESCAPE_TABLE)


def format_timestamp(moment: datetime) -> str:
    """Render as YYYY-MM-DDTHH:MM:SS.mmmZ in UTC (milliseconds truncated).

    Naive datetimes are taken to already be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond // 1000:03d}Z"
    )


def encode_entry(entry: LogEntry) -> str:
    """Serialize an entry. Field order is fixed and part of the format."""
    return (
        f'{{"device_id":"{escape_text(entry.device_id)}",'
        f'"timestamp":"{entry.timestamp}",'
        f'"user_id":{int(entry.actor)},'
        f'"severity":{int(entry.severity)},'
        f'"message":"{escape_text(entry.message)}",'
        f'"previous_hash":"{entry.previous_hash}",'
        f'"chain_hash":"{entry.chain_hash}"}}'
    )


class _Reader:
    """Cursor over one serialized entry."""

    __slots__ = ("text", "pos")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def expect(self, literal: str) -> None:
        if not self.text.startswith(literal, self.pos):
            raise EntryFormatError(
                f"Expected {literal!r} at offset {self.pos}, "
                f"found {self.text[self.pos:self.pos + len(literal)]!r}"
            )
        self.pos += len(literal)

    def read_string(self) -> str:
        self.expect('"')
        text = self.text
        pos = self.pos
        parts: list[str] = []
        while True:
            chunk = _STRING_CHUNK.match(text, pos)
            parts.append(chunk.group())
            pos = chunk.end()
            if pos >= len(text):
                raise EntryFormatError("Unterminated string")
            ch = text[pos]
            if ch == '"':
                self.pos = pos + 1
                return "".join(parts)
            if ch != "\\":
                raise EntryFormatError(
                    f"Unescaped control character {ch!r} at offset {pos}"
                )
            esc = text[pos + 1:pos + 2]
            if esc == "u":
                digits = text[pos + 2:pos + 6]
                if not _HEX4.fullmatch(digits):
                    raise EntryFormatError(f"Bad \\u escape at offset {pos}")
                parts.append(chr(int(digits, 16)))
                pos += 6
            elif esc in _UNESCAPES:
                parts.append(_UNESCAPES[esc])
                pos += 2
            else:
                raise EntryFormatError(f"Bad escape {esc!r} at offset {pos}")

    def read_int(self) -> int:
        match = _INT.match(self.text, self.pos)
        if match is None:
            raise EntryFormatError(f"Expected an integer at offset {self.pos}")
        self.pos = match.end()
        return int(match.group())

    def read_digest(self) -> str:
        value = self.read_string()
        if not _HEX_DIGEST.fullmatch(value):
            raise EntryFormatError(
                f"Digest must be 64 lowercase hex characters, got {value!r}"
            )
        return value


def decode_entry(text: str | bytes) -> LogEntry:
    """Parse one serialized entry, strictly.

    Leading and trailing whitespace is ignored so lines read from a
    JSON-lines export can be passed straight in. Raises EntryFormatError
    on anything else that differs from what encode_entry() writes.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EntryFormatError(f"Entry is not valid UTF-8: {exc}") from None
    if not isinstance(text, str):
        raise EntryFormatError(
            f"Expected serialized entry text, got {type(text).__name__}"
        )

    reader = _Reader(text.strip())
    reader.expect('{"device_id":')
    device_id = reader.read_string()
    reader.expect(',"timestamp":')
    timestamp = reader.read_string()
    reader.expect(',"user_id":')
    actor_code = reader.read_int()
    reader.expect(',"severity":')
    severity_code = reader.read_int()
    reader.expect(',"message":')
    message = reader.read_string()
    reader.expect(',"previous_hash":')
    previous_hash = reader.read_digest()
    reader.expect(',"chain_hash":')
    chain_hash = reader.read_digest()
    reader.expect("}")
    if reader.pos != len(reader.text):
        raise EntryFormatError(f"Trailing data at offset {reader.pos}")

    if not _TIMESTAMP.fullmatch(timestamp):
        raise EntryFormatError(f"Bad timestamp {timestamp!r}")
    try:
        actor = Actor(actor_code)
        severity = Severity(severity_code)
    except ValueError as exc:
        raise EntryFormatError(str(exc)) from None

    return LogEntry(
        device_id=device_id,
        timestamp=timestamp,
        actor=actor,
        severity=severity,
        message=message,
        previous_hash=previous_hash,
        chain_hash=chain_hash,
    )


def extract_digests(text: str | bytes) -> tuple[str, str]:
    """Return (previous_hash, chain_hash) from a serialized entry."""
    entry = decode_entry(text)
    return entry.previous_hash, entry.chain_hash


def validate_entry(entry: LogEntry) -> LogEntry:
    """Check a ready-made LogEntry against the same rules decode_entry applies.

    Returns the entry with actor and severity coerced to their enums.
    Raises EntryFormatError for a wrongly typed or malformed field.
    """
    for name in ("device_id", "timestamp", "message", "previous_hash", "chain_hash"):
        value = getattr(entry, name)
        if not isinstance(value, str):
            raise EntryFormatError(
                f"{name} must be str, got {type(value).__name__}"
            )
    if not _TIMESTAMP.fullmatch(entry.timestamp):
        raise EntryFormatError(f"Bad timestamp {entry.timestamp!r}")
    for name in ("previous_hash", "chain_hash"):
        if not _HEX_DIGEST.fullmatch(getattr(entry, name)):
            raise EntryFormatError(
                f"{name} must be 64 lowercase hex characters, "
                f"got {getattr(entry, name)!r}"
            )
    if type(entry.actor) is bool or not isinstance(entry.actor, int):
        raise EntryFormatError(f"actor must be int, got {type(entry.actor).__name__}")
    if type(entry.severity) is bool or not isinstance(entry.severity, int):
        raise EntryFormatError(
            f"severity must be int, got {type(entry.severity).__name__}"
        )
    try:
        actor = Actor(entry.actor)
        severity = Severity(entry.severity)
    except ValueError as exc:
        raise EntryFormatError(str(exc)) from None
    if actor is entry.actor and severity is entry.severity:
        return entry
    return replace(entry, actor=actor, severity=severity)
