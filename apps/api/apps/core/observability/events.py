"""
Domain events logging helpers.

Provides structured event logging for business operations.
"""
from typing import Dict, Optional
from .logging import get_sanitized_logger, sanitize_dict

logger = get_sanitized_logger(__name__)


def log_domain_event(
    event_name: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    entity_ids: Optional[Dict[str, str]] = None,
    result: str = 'success',
    **extra_fields
):
    """
    Log a domain event with structured data.

    Args:
        event_name: Name of the event (e.g., 'prescription.created')
        entity_type: Type of entity (e.g., 'Prescription', 'Certificate')
        entity_id: ID of primary entity
        entity_ids: Dictionary of related entity IDs
        result: Result of operation (success, failure, etc.)
        **extra_fields: Additional fields to log (will be sanitized)

    Example:
        log_domain_event(
            'prescription.created',
            entity_type='Prescription',
            entity_id=str(prescription.pk),
            entity_ids={'patient_pk': str(patient.pk)},
            medicine_lines=3,
        )
    """
    event_data = {
        'event': event_name,
        'result': result,
    }

    if entity_type:
        event_data['entity_type'] = entity_type

    if entity_id:
        event_data['entity_id'] = entity_id

    if entity_ids:
        event_data.update(entity_ids)

    event_data.update(sanitize_dict(extra_fields))

    if result in ['failure', 'error']:
        logger.error(f'Domain event: {event_name}', extra=event_data)
    elif result in ['warning', 'blocked', 'rolled_back']:
        logger.warning(f'Domain event: {event_name}', extra=event_data)
    else:
        logger.info(f'Domain event: {event_name}', extra=event_data)


def log_prescription_created(prescription, patient_created: bool, medicine_lines: int, investigation_lines: int):
    """Log a committed prescription authoring transaction."""
    log_domain_event(
        'prescription.created',
        entity_type='Prescription',
        entity_id=str(prescription.pk),
        entity_ids={
            'prescription_id': prescription.prescription_id,
            'patient_pk': str(prescription.patient_id),
            'doctor_pk': str(prescription.doctor_id),
        },
        patient_created=patient_created,
        medicine_lines=medicine_lines,
        investigation_lines=investigation_lines,
    )


def log_prescription_rolled_back(reason: str, doctor_user_id=None, **extra_fields):
    """Log an authoring transaction that was rolled back."""
    log_domain_event(
        'prescription.rolled_back',
        entity_type='Prescription',
        entity_ids={'doctor_user_id': str(doctor_user_id)} if doctor_user_id else None,
        result='rolled_back',
        reason=reason,
        **extra_fields
    )


def log_document_shared(kind: str, entity_id: str, channel: str, result: str = 'success', **extra_fields):
    """Log a rendered document leaving the system (email, link)."""
    log_domain_event(
        f'{kind}.shared',
        entity_type=kind.capitalize(),
        entity_id=entity_id,
        result=result,
        channel=channel,
        **extra_fields
    )
