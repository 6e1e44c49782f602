"""DICOM adapter -- PACS, modalities, and AI inference on imaging studies.

Each message names the DICOM identifiers an auditor needs to trace an
event back to the study: StudyInstanceUID (0020,000D), SOPInstanceUID
(0008,0018), SOPClassUID (0008,0016). AI inference requests are logged
at WARNING so they stand out in regulatory review.
"""
from __future__ import annotations

from enum import IntEnum

from dtshim.adapters.base import DeviceAdapter, segment
from dtshim.crypto.chain import Clock
from dtshim.domain.codes import Actor, Severity


class DicomEventType(IntEnum):
    STUDY_CREATED = 1
    STUDY_MODIFIED = 2
    INSTANCE_STORED = 3
    INSTANCE_DELETED = 4
    AI_INFERENCE_REQUESTED = 5
    AI_INFERENCE_COMPLETED = 6
    TRANSFER_INITIATED = 7
    TRANSFER_COMPLETED = 8
    ACCESS_GRANTED = 9
    ACCESS_DENIED = 10


class DicomAdapter(DeviceAdapter):
    """Audit logger for DICOM nodes, identified by their AE title."""

    def __init__(
        self,
        device_id: str,
        ae_title: str = "",
        clock: Clock | None = None,
    ) -> None:
        super().__init__(device_id, clock=clock)
        self.ae_title = ae_title

    def log_study_created(
        self,
        study_instance_uid: str,
        patient_id: str,
        modality: str,
        actor: Actor = Actor.OPERATOR,
    ) -> str:
        """patient_id is logged as given; pass an anonymized value."""
        return self._log(
            [
                "DICOM Study Created",
                f"StudyInstanceUID:{study_instance_uid}",
                f"PatientID:{patient_id}",
                f"Modality:{modality}",
                segment("AETitle", self.ae_title),
            ],
            Actor(actor),
            Severity.INFO,
        )

    def log_instance_stored(
        self,
        study_instance_uid: str,
        sop_instance_uid: str,
        sop_class_uid: str,
    ) -> str:
        return self._log(
            [
                "DICOM Instance Stored",
                f"StudyInstanceUID:{study_instance_uid}",
                f"SOPInstanceUID:{sop_instance_uid}",
                f"SOPClassUID:{sop_class_uid}",
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_ai_inference_request(
        self,
        study_instance_uid: str,
        model_name: str,
        model_version: str,
        input_instances: int = 1,
    ) -> str:
        return self._log(
            [
                "AI Inference Request",
                f"StudyInstanceUID:{study_instance_uid}",
                f"Model:{model_name}",
                f"Version:{model_version}",
                f"InputInstances:{input_instances}",
            ],
            Actor.SYSTEM,
            Severity.WARNING,
        )

    def log_ai_inference_completed(
        self,
        study_instance_uid: str,
        model_name: str,
        inference_id: str,
        result_summary: str,
    ) -> str:
        return self._log(
            [
                "AI Inference Completed",
                f"StudyInstanceUID:{study_instance_uid}",
                f"Model:{model_name}",
                f"InferenceID:{inference_id}",
                f"Result:{result_summary}",
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_transfer_initiated(
        self,
        study_instance_uid: str,
        destination: str,
        transfer_syntax: str = "",
    ) -> str:
        return self._log(
            [
                "DICOM Transfer Initiated",
                f"StudyInstanceUID:{study_instance_uid}",
                f"Destination:{destination}",
                segment("TransferSyntax", transfer_syntax),
            ],
            Actor.SYSTEM,
            Severity.INFO,
        )

    def log_access_event(
        self,
        study_instance_uid: str,
        actor: Actor,
        granted: bool,
        reason: str = "",
    ) -> str:
        """HIPAA access audit. Denials are WARNING and carry the reason."""
        return self._log(
            [
                f"DICOM Access {'Granted' if granted else 'Denied'}",
                f"StudyInstanceUID:{study_instance_uid}",
                segment("Reason", reason) if not granted else "",
            ],
            Actor(actor),
            Severity.INFO if granted else Severity.WARNING,
        )
