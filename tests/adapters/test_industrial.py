"""Tests for the industrial/OT adapter."""
from __future__ import annotations

import pytest

from dtshim.adapters.industrial import (
    IndustrialAdapter,
    ProductionEventType,
    ProtocolType,
)
from dtshim.crypto.codec import decode_entry
from dtshim.crypto.verifier import verify_chain
from dtshim.domain.codes import Actor, Severity

from tests.conftest import StepClock


@pytest.fixture
def plc():
    return IndustrialAdapter(
        "PLC-LINE-A", asset_tag="AST-0042", line_id="LINE-A", clock=StepClock()
    )


class TestEnums:
    def test_production_labels(self):
        assert ProductionEventType.BATCH_STARTED.label == "Batch Started"
        assert ProductionEventType.QUALITY_CHECK_FAILED.label == "Quality Check Failed"

    def test_failures(self):
        assert ProductionEventType.BATCH_ABORTED.is_failure()
        assert not ProductionEventType.BATCH_COMPLETED.is_failure()

    def test_protocol_labels(self):
        assert ProtocolType.OPCUA.label == "OPC UA"
        assert ProtocolType.OTHER.label == "Other"


class TestControlEvents:
    def test_plc_event(self, plc):
        entry = decode_entry(plc.log_plc_event("MAIN", 12, "Motor start"))
        assert entry.message == (
            "PLC Event | Program:MAIN | Rung:12 | Motor start | Asset:AST-0042"
        )

    def test_plc_event_without_rung(self, plc):
        entry = decode_entry(plc.log_plc_event("MAIN"))
        assert entry.message == "PLC Event | Program:MAIN | Asset:AST-0042"

    def test_io_change(self, plc):
        entry = decode_entry(plc.log_io_change("Q0.1", "0", "1", is_output=True))
        assert entry.message == "I/O Change | Output:Q0.1 | From:0 | To:1 | Asset:AST-0042"

    def test_scada_alarm(self, plc):
        entry = decode_entry(plc.log_scada_alarm("ALM-7", "Overpressure", Severity.ERROR))
        assert entry.message == (
            "SCADA Alarm | ID:ALM-7 | Message:Overpressure | Acknowledged:No"
            " | Asset:AST-0042"
        )
        assert entry.actor is Actor.OPERATOR
        assert entry.severity is Severity.ERROR

    def test_interlock(self, plc):
        tripped = decode_entry(plc.log_safety_interlock("ILK-1", True, "Guard open"))
        reset = decode_entry(plc.log_safety_interlock("ILK-1", False))
        assert tripped.message.startswith("Safety Interlock TRIGGERED | ID:ILK-1")
        assert tripped.severity is Severity.CRITICAL
        assert reset.message == "Safety Interlock RESET | ID:ILK-1 | Asset:AST-0042"
        assert reset.severity is Severity.INFO

    def test_parameter_change_is_warning(self, plc):
        entry = decode_entry(plc.log_parameter_change("Speed", "100", "120", Actor.ADMIN))
        assert entry.actor is Actor.ADMIN
        assert entry.severity is Severity.WARNING


class TestProduction:
    def test_batch_started(self, plc):
        entry = decode_entry(plc.log_production_event(
            ProductionEventType.BATCH_STARTED, "B-001", "P-9", 500
        ))
        assert entry.message == (
            "Batch Started | BatchID:B-001 | Product:P-9 | Quantity:500 | Line:LINE-A"
        )
        assert entry.severity is Severity.INFO

    def test_abort_is_error(self, plc):
        entry = decode_entry(plc.log_production_event(
            ProductionEventType.BATCH_ABORTED, "B-001"
        ))
        assert entry.severity is Severity.ERROR


class TestProtocolEvent:
    def test_success(self, plc):
        entry = decode_entry(plc.log_protocol_event(
            ProtocolType.MODBUS, "10.0.0.5", "10.0.0.9", "0x06"
        ))
        assert entry.message == (
            "Protocol Event | Modbus | From:10.0.0.5 | To:10.0.0.9"
            " | Function:0x06 | Status:Success"
        )

    def test_failure_is_warning(self, plc):
        entry = decode_entry(plc.log_protocol_event(
            ProtocolType.DNP3, "a", "b", success=False
        ))
        assert entry.message.endswith("Status:Failed")
        assert entry.severity is Severity.WARNING


def test_session_verifies(plc):
    export = [
        plc.log_equipment_status("PUMP-3", "Idle", "Running"),
        plc.log_maintenance("Lubrication", "TECH-1"),
        plc.log_safety_interlock("ILK-2", True),
    ]
    assert verify_chain(export)
    assert plc.sequence_number == 3
