"""Shared helpers: a deterministic clock and chain builders."""
from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

from dtshim.crypto.chain import AuditChain
from dtshim.domain.codes import Actor, Severity

SEED = 42
BASE_TIME = datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

MESSAGES = [
    "Device power-on initiated",
    "Firmware version 2.1.3 loaded",
    "Admin authentication successful",
    "Occlusion detected - Pressure threshold exceeded",
    "Infusion paused - Safety protocol activated",
    "Network connectivity lost during DICOM transfer",
    'Operator note: "check line 3"',
    "multi\nline\tmessage",
    "Temperature 22.5 °C",
]


class StepClock:
    """Returns BASE_TIME, then advances by `step_ms` on every call."""

    def __init__(self, start: datetime = BASE_TIME, step_ms: int = 1) -> None:
        self._next = start
        self._step = timedelta(milliseconds=step_ms)
        self.calls = 0

    def __call__(self) -> datetime:
        now = self._next
        self._next = now + self._step
        self.calls += 1
        return now


def make_chain(device_id: str = "DEV-1") -> AuditChain:
    return AuditChain(device_id, clock=StepClock())


def build_export(n: int, device_id: str = "DEV-1") -> list[str]:
    """Append n pseudo-random events and return the serialized entries."""
    rng = random.Random(SEED)
    chain = make_chain(device_id)
    return [
        chain.append(
            rng.choice(MESSAGES),
            rng.choice(list(Actor)),
            rng.choice(list(Severity)),
        )
        for _ in range(n)
    ]
