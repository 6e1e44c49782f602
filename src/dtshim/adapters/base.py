"""Shared plumbing for the domain formatting adapters.

An adapter owns one AuditChain and turns domain events into a message
string. It reaches the chain only through append() and the two read-only
queries; it never touches chain state directly.

Messages are " | "-separated segments, e.g.

    Safety Alarm | Type:OCCLUSION | Priority:3 | Description:...

Optional segments whose value is empty are left out.
"""
from __future__ import annotations

from dtshim.crypto.chain import AuditChain, Clock
from dtshim.domain.codes import Actor, Severity

SEGMENT_SEPARATOR = " | "


def segment(label: str, value: object) -> str:
    """Return "Label:value", or "" when value is empty (segment dropped)."""
    if value is None or value == "":
        return ""
    return f"{label}:{value}"


def format_number(value: float) -> str:
    """Shortest general rendering, as a firmware printf("%g") would give."""
    return f"{value:g}"


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


class DeviceAdapter:
    """Base class: one chain per device, message assembly, chain queries."""

    def __init__(self, device_id: str, clock: Clock | None = None) -> None:
        self._chain = AuditChain(device_id, clock=clock)

    @property
    def chain(self) -> AuditChain:
        """The underlying audit chain."""
        return self._chain

    @property
    def chain_hash(self) -> str:
        return self._chain.current_chain_digest()

    @property
    def sequence_number(self) -> int:
        return self._chain.current_sequence_number()

    def _log(self, segments: list[str], actor: Actor, severity: Severity) -> str:
        message = SEGMENT_SEPARATOR.join(s for s in segments if s)
        return self._chain.append(message, actor, severity)
