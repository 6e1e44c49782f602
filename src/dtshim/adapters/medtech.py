"""MedTech adapter -- infusion pumps, ventilators, other IEC 60601 devices.

Alarm priorities follow IEC 60601-1-8 and map onto log severity:
CRITICAL -> CRITICAL, HIGH -> ERROR, MEDIUM/LOW -> WARNING.
"""
from __future__ import annotations

from enum import IntEnum

from dtshim.adapters.base import DeviceAdapter, segment
from dtshim.crypto.chain import Clock
from dtshim.domain.codes import Actor, Severity


class AlarmPriority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    def severity(self) -> Severity:
        if self is AlarmPriority.CRITICAL:
            return Severity.CRITICAL
        if self is AlarmPriority.HIGH:
            return Severity.ERROR
        return Severity.WARNING


class MedicationEventType(IntEnum):
    LOADED = 1
    STARTED = 2
    PAUSED = 3
    STOPPED = 4
    COMPLETED = 5
    ERROR = 6

    @property
    def label(self) -> str:
        return _MEDICATION_LABELS[self]


_MEDICATION_LABELS = {
    MedicationEventType.LOADED: "Medication Loaded",
    MedicationEventType.STARTED: "Infusion Started",
    MedicationEventType.PAUSED: "Infusion Paused",
    MedicationEventType.STOPPED: "Infusion Stopped",
    MedicationEventType.COMPLETED: "Infusion Completed",
    MedicationEventType.ERROR: "Medication Error",
}


class MedTechAdapter(DeviceAdapter):
    """Audit logger for safety-critical medical devices."""

    def __init__(
        self,
        device_id: str,
        device_type: str = "",
        clock: Clock | None = None,
    ) -> None:
        super().__init__(device_id, clock=clock)
        self.device_type = device_type

    def log_post_result(self, passed: bool, details: str = "") -> str:
        """Power-on self-test outcome. A failed POST is CRITICAL."""
        return self._log(
            [f"POST {'PASSED' if passed else 'FAILED'}", details],
            Actor.SYSTEM,
            Severity.INFO if passed else Severity.CRITICAL,
        )

    def log_medication_event(
        self,
        event_type: MedicationEventType,
        drug_name: str,
        concentration: str = "",
        rate: str = "",
        duration_min: int = 0,
    ) -> str:
        event_type = MedicationEventType(event_type)
        return self._log(
            [
                event_type.label,
                f"Drug:{drug_name}",
                segment("Concentration", concentration),
                segment("Rate", rate),
                f"Duration:{duration_min}min" if duration_min > 0 else "",
            ],
            Actor.OPERATOR,
            Severity.ERROR if event_type is MedicationEventType.ERROR else Severity.INFO,
        )

    def log_safety_alarm(
        self,
        alarm_type: str,
        priority: AlarmPriority,
        description: str,
        action_taken: str = "",
    ) -> str:
        priority = AlarmPriority(priority)
        return self._log(
            [
                "Safety Alarm",
                f"Type:{alarm_type}",
                f"Priority:{int(priority)}",
                f"Description:{description}",
                segment("Action", action_taken),
            ],
            Actor.SYSTEM,
            priority.severity(),
        )

    def log_calibration(
        self, calibration_type: str, technician_id: str, passed: bool
    ) -> str:
        return self._log(
            [
                f"Calibration {'PASSED' if passed else 'FAILED'}",
                f"Type:{calibration_type}",
                f"Technician:{technician_id}",
            ],
            Actor.SERVICE,
            Severity.INFO if passed else Severity.WARNING,
        )

    def log_firmware_update(
        self, old_version: str, new_version: str, success: bool
    ) -> str:
        return self._log(
            [
                f"Firmware Update {'SUCCESS' if success else 'FAILED'}",
                f"From:{old_version}",
                f"To:{new_version}",
            ],
            Actor.ADMIN,
            Severity.INFO if success else Severity.ERROR,
        )

    def log_maintenance(
        self, maintenance_type: str, technician_id: str, notes: str = ""
    ) -> str:
        return self._log(
            [
                "Maintenance",
                f"Type:{maintenance_type}",
                f"Technician:{technician_id}",
                segment("Notes", notes),
            ],
            Actor.SERVICE,
            Severity.INFO,
        )
