"""
Certificate issuing and retrieval.
"""
from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Any, Dict, Optional

from django.db import transaction
from django.utils import timezone

from apps.certificates.models import Certificate
from apps.clinical.models import Patient
from apps.clinical.services import get_owned_patient
from apps.core.identifiers import create_with_unique_key, CERTIFICATE_PREFIX
from apps.core.observability import log_domain_event
from apps.prescriptions.records import PatientSummary, DoctorSummary
from apps.prescriptions.services import (
    NotFoundError,
    PatientNotFound,
    get_doctor_for_user,
)

OPTIONAL_FIELDS = ('valid_until', 'content', 'diagnosis', 'recommendations', 'restrictions')


class CertificateNotFound(NotFoundError):
    pass


@dataclass(frozen=True)
class CertificateView:
    id: int
    certificate_id: str
    certificate_type: str
    issue_date: date
    created_at: datetime
    patient: PatientSummary
    doctor: DoctorSummary
    valid_until: Optional[date] = None
    content: Optional[str] = None
    diagnosis: Optional[str] = None
    recommendations: Optional[str] = None
    restrictions: Optional[str] = None

    def as_dict(self):
        data = asdict(self)
        for key in ('letterhead_image_path', 'digital_signature_path', 'stamp_image_path'):
            data['doctor'].pop(key)
        return data


def create_certificate(doctor_user, data: Dict[str, Any]) -> Certificate:
    """
    Issue a certificate dated today.

    Raises:
        DoctorProfileNotFound: doctor_user has no Doctor profile
        PatientNotFound: patient unknown or created by another user
        IdentifierExhausted: no unique certificate key available
    """
    with transaction.atomic():
        doctor = get_doctor_for_user(doctor_user)
        try:
            patient = get_owned_patient(doctor_user, data['patient_id'])
        except Patient.DoesNotExist:
            raise PatientNotFound('Patient not found')

        certificate = create_with_unique_key(
            Certificate,
            'certificate_id',
            CERTIFICATE_PREFIX,
            patient=patient,
            doctor=doctor,
            certificate_type=data['certificate_type'],
            issue_date=timezone.localdate(),
            **{field: data[field] for field in OPTIONAL_FIELDS if data.get(field) not in (None, '')}
        )

    log_domain_event(
        'certificate.created',
        entity_type='Certificate',
        entity_id=str(certificate.pk),
        entity_ids={
            'certificate_id': certificate.certificate_id,
            'patient_pk': str(patient.pk),
            'doctor_pk': str(doctor.pk),
        },
        certificate_type=certificate.certificate_type,
    )
    return certificate


def get_certificate_view(doctor_user, pk) -> CertificateView:
    """
    Raises:
        CertificateNotFound: missing or issued by another doctor
    """
    try:
        certificate = (
            Certificate.objects
            .select_related('patient', 'doctor')
            .get(pk=pk, doctor__user=doctor_user)
        )
    except Certificate.DoesNotExist:
        raise CertificateNotFound('Certificate not found')

    patient = certificate.patient
    return CertificateView(
        id=certificate.pk,
        certificate_id=certificate.certificate_id,
        certificate_type=certificate.certificate_type,
        issue_date=certificate.issue_date,
        created_at=certificate.created_at,
        valid_until=certificate.valid_until,
        content=certificate.content,
        diagnosis=certificate.diagnosis,
        recommendations=certificate.recommendations,
        restrictions=certificate.restrictions,
        patient=PatientSummary(
            id=patient.pk,
            patient_id=patient.patient_id,
            full_name=patient.full_name,
            age=patient.age,
            sex=patient.sex,
            mobile=patient.mobile,
        ),
        doctor=DoctorSummary.from_doctor(certificate.doctor),
    )
