"""
Joined, read-only prescription record consumed by the renderer and the
detail endpoint.
"""
from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class PatientSummary:
    id: int
    patient_id: str
    full_name: str
    age: int
    sex: str
    mobile: Optional[str] = None


@dataclass(frozen=True)
class DoctorSummary:
    id: int
    full_name: str
    qualification: str = ''
    registration_number: str = ''
    clinic_name: str = ''
    clinic_address: str = ''
    clinic_phone: str = ''
    letterhead_image_path: Optional[str] = None
    digital_signature_path: Optional[str] = None
    stamp_image_path: Optional[str] = None

    @classmethod
    def from_doctor(cls, doctor):
        return cls(
            id=doctor.pk,
            full_name=doctor.full_name,
            qualification=doctor.qualification,
            registration_number=doctor.registration_number,
            clinic_name=doctor.clinic_name,
            clinic_address=doctor.clinic_address,
            clinic_phone=doctor.clinic_phone,
            letterhead_image_path=doctor.letterhead_image_path,
            digital_signature_path=doctor.digital_signature_path,
            stamp_image_path=doctor.stamp_image_path,
        )


@dataclass(frozen=True)
class MedicineLine:
    position: int
    medicine_id: Optional[int]
    name: str
    strength: str
    dosage: str
    frequency: str
    duration: str
    instructions: Optional[str] = None


@dataclass(frozen=True)
class InvestigationLine:
    position: int
    investigation_id: int
    name: str
    category: str = ''
    notes: Optional[str] = None


@dataclass(frozen=True)
class PrescriptionView:
    id: int
    prescription_id: str
    created_at: datetime
    chief_complaint: str
    patient: PatientSummary
    doctor: DoctorSummary
    history_of_present_illness: Optional[str] = None
    past_medical_history: Optional[str] = None
    past_surgical_history: Optional[str] = None
    diagnosis: Optional[str] = None
    advice: Optional[str] = None
    follow_up_date: Optional[date] = None
    consent_obtained: bool = False
    medicines: Tuple[MedicineLine, ...] = ()
    investigations: Tuple[InvestigationLine, ...] = ()

    def as_dict(self):
        data = asdict(self)
        # Image locations stay server-side
        for key in ('letterhead_image_path', 'digital_signature_path', 'stamp_image_path'):
            data['doctor'].pop(key)
        return data
