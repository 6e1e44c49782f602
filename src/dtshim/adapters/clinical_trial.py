"""Clinical trial adapter -- GxP audit trail with patient anonymization.

Patient identifiers never reach the chain in clear text: every method
that takes a patient_id runs it through the anonymizer first. The
default anonymizer is one-way and deterministic (same patient, same
token), so entries for one subject can still be correlated:

    "ANON-" + first 16 hex chars of SHA-256(patient_id)
"""
from __future__ import annotations

from enum import IntEnum
from typing import Callable

from dtshim.adapters.base import DeviceAdapter, segment, yes_no
from dtshim.crypto.chain import Clock
from dtshim.crypto.sha256 import sha256
from dtshim.domain.codes import Actor, Severity

Anonymizer = Callable[[str], str]


class TrialEventType(IntEnum):
    PATIENT_ENROLLED = 1
    VISIT_STARTED = 2
    VISIT_COMPLETED = 3
    DATA_COLLECTED = 4
    PROTOCOL_DEVIATION = 5
    ADVERSE_EVENT = 6
    DATA_EXPORTED = 7
    DATA_ANONYMIZED = 8


def default_anonymizer(patient_id: str) -> str:
    digest = sha256(patient_id.encode("utf-8", "surrogatepass"))
    return "ANON-" + digest.hex()[:16]


class ClinicalTrialAdapter(DeviceAdapter):
    """Audit logger for clinical trial data-collection devices."""

    def __init__(
        self,
        device_id: str,
        protocol_id: str = "",
        anonymizer: Anonymizer | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(device_id, clock=clock)
        self.protocol_id = protocol_id
        self._anonymize: Anonymizer = anonymizer or default_anonymizer

    def anonymize(self, patient_id: str) -> str:
        return self._anonymize(patient_id)

    def log_patient_enrolled(
        self, patient_id: str, site_id: str, enrollment_date: str = ""
    ) -> str:
        return self._log(
            [
                "Patient Enrolled",
                f"PatientID:{self.anonymize(patient_id)}",
                f"SiteID:{site_id}",
                segment("Protocol", self.protocol_id),
                segment("Date", enrollment_date),
            ],
            Actor.OPERATOR,
            Severity.INFO,
        )

    def log_visit_event(
        self,
        event_type: TrialEventType,
        patient_id: str,
        visit_number: int,
        visit_type: str = "",
    ) -> str:
        event_type = TrialEventType(event_type)
        if event_type is TrialEventType.VISIT_STARTED:
            label = "Visit Started"
        elif event_type is TrialEventType.VISIT_COMPLETED:
            label = "Visit Completed"
        else:
            raise ValueError(f"Not a visit event: {event_type.name}")
        return self._log(
            [
                label,
                f"PatientID:{self.anonymize(patient_id)}",
                f"VisitNumber:{visit_number}",
                segment("VisitType", visit_type),
            ],
            Actor.OPERATOR,
            Severity.INFO,
        )

    def log_data_collected(
        self,
        patient_id: str,
        data_type: str,
        form_id: str = "",
        data_point_count: int = 0,
    ) -> str:
        return self._log(
            [
                "Data Collected",
                f"PatientID:{self.anonymize(patient_id)}",
                f"DataType:{data_type}",
                segment("CRF", form_id),
                f"Points:{data_point_count}" if data_point_count > 0 else "",
            ],
            Actor.OPERATOR,
            Severity.INFO,
        )

    def log_protocol_deviation(
        self,
        patient_id: str,
        deviation_type: str,
        description: str,
        severity: Severity = Severity.WARNING,
    ) -> str:
        return self._log(
            [
                "Protocol Deviation",
                f"PatientID:{self.anonymize(patient_id)}",
                f"Type:{deviation_type}",
                f"Description:{description}",
                segment("Protocol", self.protocol_id),
            ],
            Actor.OPERATOR,
            Severity(severity),
        )

    def log_adverse_event(
        self,
        patient_id: str,
        ae_type: str,
        ae_severity: str,
        related: bool = False,
    ) -> str:
        """Adverse events are always logged at ERROR.

        ae_severity is the clinical grading ("Mild", "Severe", ...), not
        the log severity.
        """
        return self._log(
            [
                "Adverse Event",
                f"PatientID:{self.anonymize(patient_id)}",
                f"Type:{ae_type}",
                f"Severity:{ae_severity}",
                f"Related:{yes_no(related)}",
            ],
            Actor.OPERATOR,
            Severity.ERROR,
        )

    def log_data_export(
        self,
        export_type: str,
        destination: str,
        record_count: int,
        anonymized: bool = True,
    ) -> str:
        return self._log(
            [
                "Data Exported",
                f"Type:{export_type}",
                f"Destination:{destination}",
                f"Records:{record_count}",
                f"Anonymized:{yes_no(anonymized)}",
            ],
            Actor.ADMIN,
            Severity.INFO,
        )
