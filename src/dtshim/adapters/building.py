"""Building automation adapter -- HVAC, lighting, access, fire, energy.

Covers the event shapes of KNX, BACnet and similar BAS protocols.
`building_id` and `zone_id` are context fields stamped onto the
messages where they add information.
"""
from __future__ import annotations

from enum import IntEnum

from dtshim.adapters.base import DeviceAdapter, format_number, segment, yes_no
from dtshim.crypto.chain import Clock
from dtshim.domain.codes import Actor, Severity


class BuildingSystemType(IntEnum):
    HVAC = 1
    LIGHTING = 2
    ACCESS_CONTROL = 3
    FIRE_SAFETY = 4
    ENERGY_MANAGEMENT = 5
    ELEVATOR = 6
    SECURITY = 7
    OTHER = 255


class BuildingAutomationAdapter(DeviceAdapter):
    """Audit logger for building automation controllers."""

    def __init__(
        self,
        device_id: str,
        building_id: str = "",
        zone_id: str = "",
        clock: Clock | None = None,
    ) -> None:
        super().__init__(device_id, clock=clock)
        self.building_id = building_id
        self.zone_id = zone_id

    def log_hvac_event(
        self, event_type: str, zone: str, value: float, unit: str = ""
    ) -> str:
        reading = format_number(value)
        if unit:
            reading = f"{reading} {unit}"
        return self._log(
            [
                "HVAC Event",
                f"Type:{event_type}",
                f"Zone:{zone}",
                f"Value:{reading}",
                segment("ZoneID", self.zone_id) if self.zone_id != zone else "",
            ],
            Actor.OPERATOR,
            Severity.INFO,
        )

    def log_lighting_event(
        self,
        zone: str,
        old_level: int,
        new_level: int,
        control_source: str = "manual",
    ) -> str:
        return self._log(
            [
                "Lighting Control",
                f"Zone:{zone}",
                f"From:{old_level}%",
                f"To:{new_level}%",
                f"Source:{control_source}",
            ],
            Actor.OPERATOR,
            Severity.INFO,
        )

    def log_access_control(
        self, door_id: str, user_id: str, granted: bool, reason: str = ""
    ) -> str:
        """Badge/door event. Denials are WARNING and carry the reason."""
        return self._log(
            [
                "Access Control",
                f"Door:{door_id}",
                f"User:{user_id}",
                f"Granted:{yes_no(granted)}",
                segment("Reason", reason) if not granted else "",
            ],
            Actor.SYSTEM,
            Severity.INFO if granted else Severity.WARNING,
        )

    def log_fire_safety_event(
        self,
        event_type: str,
        location: str,
        severity: Severity = Severity.CRITICAL,
    ) -> str:
        return self._log(
            [
                "Fire Safety Event",
                f"Type:{event_type}",
                f"Location:{location}",
                segment("Zone", self.zone_id),
            ],
            Actor.SYSTEM,
            Severity(severity),
        )

    def log_energy_consumption(
        self,
        meter_id: str,
        consumption_kwh: float,
        peak_demand_kw: float = 0.0,
    ) -> str:
        return self._log(
            [
                "Energy Consumption",
                f"Meter:{meter_id}",
                f"Consumption:{format_number(consumption_kwh)} kWh",
                f"Peak:{format_number(peak_demand_kw)} kW" if peak_demand_kw > 0 else "",
                segment("Building", self.building_id),
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_knx_event(
        self, group_address: str, data_value: str, data_type: str = ""
    ) -> str:
        return self._log(
            [
                "KNX Event",
                f"GroupAddress:{group_address}",
                f"Value:{data_value}",
                segment("DPT", data_type),
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_bacnet_event(
        self,
        object_type: str,
        object_instance: int,
        property_name: str,
        value: str,
    ) -> str:
        return self._log(
            [
                "BACnet Event",
                f"ObjectType:{object_type}",
                f"Instance:{object_instance}",
                f"Property:{property_name}",
                f"Value:{value}",
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_schedule_event(
        self, schedule_name: str, action: str, zone: str = ""
    ) -> str:
        return self._log(
            [
                "Schedule Event",
                f"Schedule:{schedule_name}",
                f"Action:{action}",
                segment("Zone", zone),
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_elevator_event(
        self, elevator_id: str, event_type: str, floor: int = -1
    ) -> str:
        return self._log(
            [
                "Elevator Event",
                f"Elevator:{elevator_id}",
                f"Type:{event_type}",
                f"Floor:{floor}" if floor >= 0 else "",
                segment("Building", self.building_id),
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_security_event(
        self,
        event_type: str,
        location: str,
        severity: Severity = Severity.WARNING,
    ) -> str:
        return self._log(
            [
                "Security Event",
                f"Type:{event_type}",
                f"Location:{location}",
                segment("Zone", self.zone_id),
            ],
            Actor.SYSTEM,
            Severity(severity),
        )
