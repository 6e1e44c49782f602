"""Tests for the demo scenarios."""
from __future__ import annotations

import pytest

from dtshim.crypto.codec import decode_entry
from dtshim.crypto.verifier import verify_chain
from dtshim.scenarios import SCENARIOS

from tests.conftest import StepClock


@pytest.mark.parametrize("name", sorted(SCENARIOS))
def test_scenario_chain_verifies(name):
    chain, entries = SCENARIOS[name](clock=StepClock())
    assert len(entries) == chain.sequence_number > 0
    assert verify_chain(entries)
    assert decode_entry(entries[-1]).chain_hash == chain.chain_hash


@pytest.mark.parametrize("name", sorted(SCENARIOS))
def test_scenario_is_deterministic_with_fixed_clock(name):
    _, first = SCENARIOS[name](clock=StepClock())
    _, second = SCENARIOS[name](clock=StepClock())
    assert first == second


def test_device_id_override():
    chain, entries = SCENARIOS["industrial"]("PLC-X", clock=StepClock())
    assert chain.device_id == "PLC-X"
    assert all(decode_entry(e).device_id == "PLC-X" for e in entries)
