"""
Patient services.

Patient rows are created here both by the patients endpoint and from
inside the prescription authoring transaction.
"""
from typing import Dict, Any

from apps.clinical.models import Patient
from apps.core.identifiers import create_with_unique_key, PATIENT_PREFIX
from apps.core.observability import get_sanitized_logger

logger = get_sanitized_logger(__name__)

PATIENT_FIELDS = (
    'full_name', 'age', 'sex', 'mobile', 'email',
    'address', 'blood_group', 'allergies',
)


def create_patient(created_by, data: Dict[str, Any]) -> Patient:
    """
    Insert a Patient with a generated "PAT" key.

    Args:
        created_by: User authoring the record (becomes the owner)
        data: validated patient fields; unknown keys are ignored

    Returns:
        The created Patient

    Raises:
        IdentifierExhausted: no unique patient key could be allocated
    """
    fields = {key: data[key] for key in PATIENT_FIELDS if data.get(key) not in (None, '')}
    patient = create_with_unique_key(
        Patient,
        'patient_id',
        PATIENT_PREFIX,
        created_by=created_by,
        **fields
    )

    logger.info(
        'Patient created',
        extra={
            'event': 'patient_created',
            'patient_pk': patient.pk,
            'patient_id': patient.patient_id,
        }
    )
    return patient


def get_owned_patient(user, pk) -> Patient:
    """
    Return the patient `pk` if it was created by `user`.

    Raises:
        Patient.DoesNotExist: missing or owned by someone else
    """
    return Patient.objects.get(pk=pk, created_by=user)
