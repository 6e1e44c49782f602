"""Domain formatting adapters.

Each adapter wraps one AuditChain and turns domain events (alarms,
batch steps, DICOM transfers, ...) into hash-linked log entries.
"""
from dtshim.adapters.base import DeviceAdapter
from dtshim.adapters.building import BuildingAutomationAdapter, BuildingSystemType
from dtshim.adapters.clinical_trial import (
    ClinicalTrialAdapter,
    TrialEventType,
    default_anonymizer,
)
from dtshim.adapters.dicom import DicomAdapter, DicomEventType
from dtshim.adapters.industrial import (
    IndustrialAdapter,
    ProductionEventType,
    ProtocolType,
)
from dtshim.adapters.medtech import AlarmPriority, MedicationEventType, MedTechAdapter

__all__ = [
    "AlarmPriority",
    "BuildingAutomationAdapter",
    "BuildingSystemType",
    "ClinicalTrialAdapter",
    "DeviceAdapter",
    "DicomAdapter",
    "DicomEventType",
    "IndustrialAdapter",
    "MedTechAdapter",
    "MedicationEventType",
    "ProductionEventType",
    "ProtocolType",
    "TrialEventType",
    "default_anonymizer",
]
