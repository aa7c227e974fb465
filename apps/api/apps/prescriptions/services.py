"""
Prescription authoring and retrieval.

create_prescription is the single write path for prescriptions. In one
database transaction it:
1. Resolves the patient (existing, owned by the doctor) or creates one
2. Resolves the doctor profile of the requesting user
3. Inserts the prescription with a generated "RX" key
4. Inserts medicine lines, then investigation lines, in submitted order
5. Appends one patient history entry

Any failure rolls back every row written so far.
"""
import time
from typing import Any, Dict, Tuple

from django.db import transaction
from django.db.models import Prefetch
from django.utils import timezone

from apps.authz.models import Doctor
from apps.clinical.models import Patient, PatientHistory
from apps.clinical.services import create_patient, get_owned_patient
from apps.core.identifiers import create_with_unique_key, PRESCRIPTION_PREFIX
from apps.core.observability import metrics, get_sanitized_logger
from apps.core.observability.events import log_prescription_created, log_prescription_rolled_back
from apps.core.observability.tracing import trace_span
from apps.prescriptions.models import (
    Prescription,
    PrescriptionMedicine,
    PrescriptionInvestigation,
)
from apps.prescriptions.records import (
    PrescriptionView,
    PatientSummary,
    DoctorSummary,
    MedicineLine,
    InvestigationLine,
)

logger = get_sanitized_logger(__name__)

NARRATIVE_FIELDS = (
    'chief_complaint',
    'history_of_present_illness',
    'past_medical_history',
    'past_surgical_history',
    'diagnosis',
    'advice',
    'follow_up_date',
    'consent_obtained',
)


class PrescriptionError(Exception):
    """Base exception for prescription operations."""
    pass


class NotFoundError(PrescriptionError):
    """A referenced record does not exist for the requesting doctor."""
    pass


class DoctorProfileNotFound(NotFoundError):
    pass


class PatientNotFound(NotFoundError):
    pass


class PrescriptionNotFound(NotFoundError):
    pass


def get_doctor_for_user(user) -> Doctor:
    try:
        return Doctor.objects.get(user=user)
    except Doctor.DoesNotExist:
        raise DoctorProfileNotFound('Doctor profile not found')


def _resolve_patient(doctor_user, payload) -> Tuple[Patient, bool]:
    patient_pk = payload.get('patient_id')
    if patient_pk is None:
        return create_patient(doctor_user, payload['patient_info']), True

    try:
        return get_owned_patient(doctor_user, patient_pk), False
    except Patient.DoesNotExist:
        raise PatientNotFound('Patient not found')


def _treatment_record(medicines) -> list:
    """Medicine lines as stored on the history entry."""
    return [
        {
            'medicine_id': line['medicine'].pk if line.get('medicine') else None,
            'dosage': line['dosage'],
            'frequency': line['frequency'],
            'duration': line['duration'],
            'instructions': line.get('instructions') or None,
        }
        for line in medicines
    ]


def create_prescription(doctor_user, payload: Dict[str, Any]) -> Prescription:
    """
    Author a prescription atomically.

    Args:
        doctor_user: authenticated User of the prescribing doctor
        payload: validated_data of PrescriptionCreateSerializer

    Returns:
        The committed Prescription

    Raises:
        PatientNotFound: patient_id unknown or created by another user
        DoctorProfileNotFound: doctor_user has no Doctor profile
        IdentifierExhausted: no unique patient/prescription key available
        DatabaseError: any insert failed
    """
    start = time.time()
    medicines = payload.get('medicines') or []
    investigations = payload.get('investigations') or []
    patient_source = 'existing' if payload.get('patient_id') is not None else 'inline'

    try:
        with trace_span('prescriptions.create', attributes={
            'patient.source': patient_source,
            'lines.medicines': len(medicines),
            'lines.investigations': len(investigations),
        }):
            with transaction.atomic():
                patient, patient_created = _resolve_patient(doctor_user, payload)
                doctor = get_doctor_for_user(doctor_user)

                narrative = {
                    field: payload[field]
                    for field in NARRATIVE_FIELDS
                    if payload.get(field) not in (None, '')
                }
                prescription = create_with_unique_key(
                    Prescription,
                    'prescription_id',
                    PRESCRIPTION_PREFIX,
                    patient=patient,
                    doctor=doctor,
                    **narrative
                )

                for position, line in enumerate(medicines, start=1):
                    PrescriptionMedicine.objects.create(
                        prescription=prescription,
                        medicine=line.get('medicine'),
                        position=position,
                        dosage=line['dosage'],
                        frequency=line['frequency'],
                        duration=line['duration'],
                        instructions=line.get('instructions') or None,
                    )

                for position, line in enumerate(investigations, start=1):
                    PrescriptionInvestigation.objects.create(
                        prescription=prescription,
                        investigation=line['investigation'],
                        position=position,
                        notes=line.get('notes') or None,
                    )

                PatientHistory.objects.create(
                    patient=patient,
                    doctor=doctor,
                    prescription=prescription,
                    visit_date=timezone.localdate(),
                    symptoms=prescription.chief_complaint,
                    diagnosis=prescription.diagnosis,
                    treatment=_treatment_record(medicines),
                )

    except NotFoundError as e:
        reason = 'doctor_not_found' if isinstance(e, DoctorProfileNotFound) else 'patient_not_found'
        metrics.prescriptions_failed_total.labels(reason=reason).inc()
        log_prescription_rolled_back(reason, doctor_user_id=doctor_user.pk)
        raise
    except Exception as e:
        metrics.prescriptions_failed_total.labels(reason='error').inc()
        metrics.exceptions_total.labels(
            exception_type=e.__class__.__name__,
            location='create_prescription'
        ).inc()
        log_prescription_rolled_back(
            'error',
            doctor_user_id=doctor_user.pk,
            error_type=e.__class__.__name__,
        )
        raise

    metrics.prescriptions_created_total.labels(patient_source=patient_source).inc()
    metrics.prescription_lines_total.labels(kind='medicine').inc(len(medicines))
    metrics.prescription_lines_total.labels(kind='investigation').inc(len(investigations))
    metrics.prescription_create_duration_seconds.observe(time.time() - start)
    log_prescription_created(
        prescription,
        patient_created=patient_created,
        medicine_lines=len(medicines),
        investigation_lines=len(investigations),
    )
    return prescription


# ============================================================================
# Retrieval
# ============================================================================

def doctor_prescriptions(doctor_user):
    """Prescriptions authored by doctor_user, newest first."""
    return (
        Prescription.objects
        .filter(doctor__user=doctor_user)
        .select_related('patient')
        .order_by('-created_at', '-id')
    )


def build_prescription_view(prescription: Prescription) -> PrescriptionView:
    patient = prescription.patient
    return PrescriptionView(
        id=prescription.pk,
        prescription_id=prescription.prescription_id,
        created_at=prescription.created_at,
        chief_complaint=prescription.chief_complaint,
        history_of_present_illness=prescription.history_of_present_illness,
        past_medical_history=prescription.past_medical_history,
        past_surgical_history=prescription.past_surgical_history,
        diagnosis=prescription.diagnosis,
        advice=prescription.advice,
        follow_up_date=prescription.follow_up_date,
        consent_obtained=prescription.consent_obtained,
        patient=PatientSummary(
            id=patient.pk,
            patient_id=patient.patient_id,
            full_name=patient.full_name,
            age=patient.age,
            sex=patient.sex,
            mobile=patient.mobile,
        ),
        doctor=DoctorSummary.from_doctor(prescription.doctor),
        medicines=tuple(
            MedicineLine(
                position=line.position,
                medicine_id=line.medicine_id,
                name=line.medicine.name if line.medicine else '',
                strength=(line.medicine.strength or '') if line.medicine else '',
                dosage=line.dosage,
                frequency=line.frequency,
                duration=line.duration,
                instructions=line.instructions,
            )
            for line in prescription.medicine_lines.all()
        ),
        investigations=tuple(
            InvestigationLine(
                position=line.position,
                investigation_id=line.investigation_id,
                name=line.investigation.name,
                category=line.investigation.category or '',
                notes=line.notes,
            )
            for line in prescription.investigation_lines.all()
        ),
    )


def get_owned_prescription(doctor_user, pk) -> Prescription:
    """
    Raises:
        PrescriptionNotFound: missing or authored by another doctor
    """
    queryset = (
        Prescription.objects
        .select_related('patient', 'doctor')
        .prefetch_related(
            Prefetch(
                'medicine_lines',
                queryset=PrescriptionMedicine.objects.select_related('medicine').order_by('position')
            ),
            Prefetch(
                'investigation_lines',
                queryset=PrescriptionInvestigation.objects.select_related('investigation').order_by('position')
            ),
        )
    )
    try:
        return queryset.get(pk=pk, doctor__user=doctor_user)
    except Prescription.DoesNotExist:
        raise PrescriptionNotFound('Prescription not found')


def get_prescription_view(doctor_user, pk) -> PrescriptionView:
    """Joined view of prescription `pk`, scoped to the requesting doctor."""
    return build_prescription_view(get_owned_prescription(doctor_user, pk))
