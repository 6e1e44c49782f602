"""Demo scenarios replayed by `dtshim demo`.

Each scenario drives one adapter (or a bare AuditChain) through a short,
realistic event sequence and returns the chain plus the serialized
entries in append order.
"""
from __future__ import annotations

from typing import Callable

from dtshim.adapters.building import BuildingAutomationAdapter
from dtshim.adapters.clinical_trial import ClinicalTrialAdapter, TrialEventType
from dtshim.adapters.dicom import DicomAdapter
from dtshim.adapters.industrial import (
    IndustrialAdapter,
    ProductionEventType,
    ProtocolType,
)
from dtshim.adapters.medtech import AlarmPriority, MedicationEventType, MedTechAdapter
from dtshim.crypto.chain import AuditChain, Clock
from dtshim.domain.codes import Actor, Severity

ScenarioResult = tuple[AuditChain, list[str]]

STUDY_UID = "1.2.840.113619.2.55.3.1234567890.1234567890123456"


def radiology(device_id: str | None = None, clock: Clock | None = None) -> ScenarioResult:
    chain = AuditChain(device_id or "PACS-2025-001234", clock=clock)
    events = [
        ("Device power-on initiated", Actor.SYSTEM, Severity.INFO),
        ("Firmware version 2.1.3 loaded", Actor.SYSTEM, Severity.INFO),
        ("Admin authentication successful", Actor.ADMIN, Severity.INFO),
        ("Patient scan initiated - MRN: 12345678", Actor.OPERATOR, Severity.INFO),
        ("AI inference request - Model: radiology-v2, Input: DICOM-001.dcm",
         Actor.SYSTEM, Severity.WARNING),
        ("Network connectivity lost during DICOM transfer",
         Actor.SYSTEM, Severity.ERROR),
    ]
    return chain, [chain.append(*event) for event in events]


def infusion_pump(device_id: str | None = None, clock: Clock | None = None) -> ScenarioResult:
    chain = AuditChain(device_id or "INFUSION-PUMP-789012", clock=clock)
    events = [
        ("POST: All systems nominal", Actor.SYSTEM, Severity.INFO),
        ("Medication loaded - Drug: Insulin, Concentration: 100U/mL",
         Actor.OPERATOR, Severity.INFO),
        ("Infusion started - Rate: 2.5 mL/hr, Duration: 60 min",
         Actor.OPERATOR, Severity.INFO),
        ("Occlusion detected - Pressure threshold exceeded",
         Actor.SYSTEM, Severity.WARNING),
        ("Infusion paused - Safety protocol activated",
         Actor.SYSTEM, Severity.CRITICAL),
        ("Service technician access - Calibration performed",
         Actor.SERVICE, Severity.INFO),
    ]
    return chain, [chain.append(*event) for event in events]


def medtech(device_id: str | None = None, clock: Clock | None = None) -> ScenarioResult:
    pump = MedTechAdapter(device_id or "INFUSION-PUMP-789012", "infusion-pump", clock=clock)
    entries = [
        pump.log_post_result(True, "All systems nominal"),
        pump.log_medication_event(
            MedicationEventType.LOADED, "Insulin", concentration="100U/mL"
        ),
        pump.log_medication_event(
            MedicationEventType.STARTED, "Insulin", rate="2.5 mL/hr", duration_min=60
        ),
        pump.log_safety_alarm(
            "OCCLUSION", AlarmPriority.HIGH,
            "Pressure threshold exceeded", "Infusion paused",
        ),
        pump.log_calibration("Pressure sensor", "TECH-042", True),
        pump.log_firmware_update("3.2.0", "3.2.1", True),
    ]
    return pump.chain, entries


def building(device_id: str | None = None, clock: Clock | None = None) -> ScenarioResult:
    bas = BuildingAutomationAdapter(
        device_id or "BAS-CONTROLLER-001", "BUILDING-A", "ZONE-3F-01", clock=clock
    )
    entries = [
        bas.log_hvac_event("Setpoint Change", "ZONE-3F-01", 22.5, "°C"),
        bas.log_lighting_event("ZONE-3F-01", 0, 75, "schedule"),
        bas.log_access_control("DOOR-MAIN-ENTRANCE", "BADGE-12345", True),
        bas.log_access_control(
            "DOOR-SERVER-ROOM", "BADGE-67890", False, "Unauthorized access level"
        ),
        bas.log_fire_safety_event("Smoke Detector Activation", "ZONE-3F-01"),
        bas.log_energy_consumption("METER-MAIN-001", 1250.5, 45.2),
        bas.log_knx_event("1/2/3", "ON", "DPT1.001"),
        bas.log_bacnet_event("Analog Input", 12345, "Present Value", "22.5"),
        bas.log_schedule_event("SCHEDULE-WORK-HOURS", "HVAC Mode: Cooling", "ZONE-3F-01"),
        bas.log_elevator_event("ELEVATOR-A", "Arrival", 3),
        bas.log_security_event("Motion Detected", "ZONE-3F-01-AFTER-HOURS"),
    ]
    return bas.chain, entries


def industrial(device_id: str | None = None, clock: Clock | None = None) -> ScenarioResult:
    plc = IndustrialAdapter(
        device_id or "PLC-AB-1756-L75-001", "ASSET-PLC-001", "LINE-A", clock=clock
    )
    entries = [
        plc.log_plc_event("MainProgram", 42, "Bottle fill sequence initiated"),
        plc.log_io_change("FILL_VALVE_OUT", "0", "1", is_output=True),
        plc.log_scada_alarm("ALM-001", "High temperature detected in Zone 3"),
        plc.log_production_event(
            ProductionEventType.BATCH_STARTED, "BATCH-2025-001234", "PRODUCT-ABC-500ML"
        ),
        plc.log_protocol_event(
            ProtocolType.MODBUS, "192.168.1.10:502", "192.168.1.20:502",
            "Function 03 (Read Holding Registers)",
        ),
        plc.log_protocol_event(
            ProtocolType.OPCUA, "opc.tcp://plc.example.com:4840",
            "opc.tcp://scada.example.com:4840", "Read Node ns=2;s=Temperature",
        ),
        plc.log_safety_interlock(
            "INTERLOCK-EMERGENCY-STOP", True, "Emergency stop button pressed"
        ),
        plc.log_equipment_status("FILLER-STATION-01", "Running", "Stopped"),
        plc.log_parameter_change("FILL_VOLUME_SETPOINT", "500", "750"),
        plc.log_production_event(
            ProductionEventType.QUALITY_CHECK_PASSED, "BATCH-2025-001234",
            "PRODUCT-ABC-500ML", 1000,
        ),
    ]
    return plc.chain, entries


def clinical_trial(device_id: str | None = None, clock: Clock | None = None) -> ScenarioResult:
    trial = ClinicalTrialAdapter(
        device_id or "TRIAL-DEVICE-001", "PROTOCOL-2025-001", clock=clock
    )
    entries = [
        trial.log_patient_enrolled("PATIENT-12345", "SITE-001", "2025-01-15T10:00:00Z"),
        trial.log_visit_event(TrialEventType.VISIT_STARTED, "PATIENT-12345", 1, "Screening"),
        trial.log_data_collected("PATIENT-12345", "Vital Signs", "CRF-001", 5),
        trial.log_protocol_deviation(
            "PATIENT-12345", "Missed Visit",
            "Patient missed scheduled visit window by 2 days",
        ),
        trial.log_adverse_event("PATIENT-12345", "Headache", "Mild", related=False),
        trial.log_visit_event(TrialEventType.VISIT_COMPLETED, "PATIENT-12345", 1, "Screening"),
        trial.log_data_export("CRF", "EDC-System-001", 150, anonymized=True),
    ]
    return trial.chain, entries


def dicom(device_id: str | None = None, clock: Clock | None = None) -> ScenarioResult:
    pacs = DicomAdapter(device_id or "PACS-2025-001234", "PACS-AE-01", clock=clock)
    entries = [
        pacs.log_study_created(STUDY_UID, "ANON-12345678", "MR"),
        pacs.log_instance_stored(
            STUDY_UID,
            "1.2.840.113619.2.55.3.1234567890.1234567890123457",
            "1.2.840.10008.5.1.4.1.1.4",
        ),
        pacs.log_ai_inference_request(STUDY_UID, "radiology-detection-v2", "2.1.0", 120),
        pacs.log_ai_inference_completed(
            STUDY_UID, "radiology-detection-v2", "INF-20250115-001",
            "Priority: HIGH | Findings: 2 lesions detected",
        ),
        pacs.log_transfer_initiated(
            STUDY_UID,
            "https://healthcare-api.example.com/dicomweb/studies",
            "1.2.840.10008.1.2.4.70",
        ),
        pacs.log_access_event(STUDY_UID, Actor.ADMIN, True),
    ]
    return pacs.chain, entries


SCENARIOS: dict[str, Callable[..., ScenarioResult]] = {
    "radiology": radiology,
    "infusion-pump": infusion_pump,
    "medtech": medtech,
    "building": building,
    "industrial": industrial,
    "clinical-trial": clinical_trial,
    "dicom": dicom,
}
