"""Industrial/OT adapter -- PLCs, SCADA, production lines.

Event shapes follow what ISA/IEC 62443 and NIST 800-82 audits ask for:
I/O changes, alarms, interlocks, parameter changes, and protocol
traffic, each stamped with the asset tag and line where known.
"""
from __future__ import annotations

from enum import IntEnum

from dtshim.adapters.base import DeviceAdapter, segment, yes_no
from dtshim.crypto.chain import Clock
from dtshim.domain.codes import Actor, Severity


class ProtocolType(IntEnum):
    MODBUS = 1
    OPCUA = 2
    ETHERNET_IP = 3
    PROFINET = 4
    DNP3 = 5
    IEC61850 = 6
    BACNET = 7
    KNX = 8
    MQTT = 9
    OTHER = 255

    @property
    def label(self) -> str:
        return _PROTOCOL_LABELS.get(self, "Other")


_PROTOCOL_LABELS = {
    ProtocolType.MODBUS: "Modbus",
    ProtocolType.OPCUA: "OPC UA",
    ProtocolType.ETHERNET_IP: "EtherNet/IP",
    ProtocolType.PROFINET: "Profinet",
    ProtocolType.DNP3: "DNP3",
    ProtocolType.IEC61850: "IEC 61850",
    ProtocolType.BACNET: "BACnet",
    ProtocolType.KNX: "KNX",
    ProtocolType.MQTT: "MQTT",
}


class ProductionEventType(IntEnum):
    BATCH_STARTED = 1
    BATCH_COMPLETED = 2
    BATCH_ABORTED = 3
    RECIPE_LOADED = 4
    RECIPE_CHANGED = 5
    QUALITY_CHECK_PASSED = 6
    QUALITY_CHECK_FAILED = 7

    @property
    def label(self) -> str:
        # BATCH_STARTED -> "Batch Started"
        return self.name.replace("_", " ").title()

    def is_failure(self) -> bool:
        return self in (
            ProductionEventType.BATCH_ABORTED,
            ProductionEventType.QUALITY_CHECK_FAILED,
        )


class IndustrialAdapter(DeviceAdapter):
    """Audit logger for industrial control systems."""

    def __init__(
        self,
        device_id: str,
        asset_tag: str = "",
        line_id: str = "",
        clock: Clock | None = None,
    ) -> None:
        super().__init__(device_id, clock=clock)
        self.asset_tag = asset_tag
        self.line_id = line_id

    def _asset(self) -> str:
        return segment("Asset", self.asset_tag)

    def log_plc_event(
        self,
        program_name: str,
        rung_number: int = -1,
        description: str = "",
    ) -> str:
        return self._log(
            [
                "PLC Event",
                f"Program:{program_name}",
                f"Rung:{rung_number}" if rung_number >= 0 else "",
                description,
                self._asset(),
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_io_change(
        self,
        io_address: str,
        old_value: str,
        new_value: str,
        is_output: bool = False,
    ) -> str:
        return self._log(
            [
                "I/O Change",
                f"{'Output' if is_output else 'Input'}:{io_address}",
                f"From:{old_value}",
                f"To:{new_value}",
                self._asset(),
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_scada_alarm(
        self,
        alarm_id: str,
        alarm_message: str,
        severity: Severity = Severity.WARNING,
        acknowledged: bool = False,
    ) -> str:
        return self._log(
            [
                "SCADA Alarm",
                f"ID:{alarm_id}",
                f"Message:{alarm_message}",
                f"Acknowledged:{yes_no(acknowledged)}",
                self._asset(),
            ],
            Actor.OPERATOR,
            Severity(severity),
        )

    def log_production_event(
        self,
        event_type: ProductionEventType,
        batch_id: str,
        product_code: str = "",
        quantity: int = 0,
    ) -> str:
        """Batch/recipe/quality events. Aborts and failed checks are ERROR."""
        event_type = ProductionEventType(event_type)
        return self._log(
            [
                event_type.label,
                f"BatchID:{batch_id}",
                segment("Product", product_code),
                f"Quantity:{quantity}" if quantity > 0 else "",
                segment("Line", self.line_id),
            ],
            Actor.OPERATOR,
            Severity.ERROR if event_type.is_failure() else Severity.INFO,
        )

    def log_protocol_event(
        self,
        protocol: ProtocolType,
        source_address: str,
        destination_address: str,
        function_code: str = "",
        success: bool = True,
    ) -> str:
        return self._log(
            [
                "Protocol Event",
                ProtocolType(protocol).label,
                f"From:{source_address}",
                f"To:{destination_address}",
                segment("Function", function_code),
                f"Status:{'Success' if success else 'Failed'}",
            ],
            Actor.SYSTEM,
            Severity.INFO if success else Severity.WARNING,
        )

    def log_safety_interlock(
        self, interlock_id: str, triggered: bool, reason: str = ""
    ) -> str:
        """A triggered interlock is CRITICAL; a reset is INFO."""
        return self._log(
            [
                f"Safety Interlock {'TRIGGERED' if triggered else 'RESET'}",
                f"ID:{interlock_id}",
                segment("Reason", reason),
                self._asset(),
            ],
            Actor.SYSTEM,
            Severity.CRITICAL if triggered else Severity.INFO,
        )

    def log_equipment_status(
        self, equipment_id: str, old_status: str, new_status: str
    ) -> str:
        return self._log(
            [
                "Equipment Status Change",
                f"Equipment:{equipment_id}",
                f"From:{old_status}",
                f"To:{new_status}",
                segment("Line", self.line_id),
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_parameter_change(
        self,
        parameter_name: str,
        old_value: str,
        new_value: str,
        actor: Actor = Actor.OPERATOR,
    ) -> str:
        return self._log(
            [
                "Parameter Changed",
                f"Parameter:{parameter_name}",
                f"From:{old_value}",
                f"To:{new_value}",
                self._asset(),
            ],
            Actor(actor),
            Severity.WARNING,
        )

    def log_maintenance(
        self, maintenance_type: str, technician_id: str, description: str = ""
    ) -> str:
        return self._log(
            [
                "Maintenance",
                f"Type:{maintenance_type}",
                f"Technician:{technician_id}",
                segment("Description", description),
                self._asset(),
            ],
            Actor.SERVICE,
            Severity.INFO,
        )
