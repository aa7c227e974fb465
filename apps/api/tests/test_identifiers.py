"""
Tests for human-readable identifier allocation.
"""
from unittest.mock import patch

import pytest
from django.db import IntegrityError

from apps.clinical.models import Patient
from apps.core.identifiers import (
    IdentifierExhausted,
    MAX_ATTEMPTS,
    PATIENT_PREFIX,
    create_with_unique_key,
    generate_key,
)


def test_generate_key_format():
    key = generate_key('RX')

    assert key.startswith('RX')
    assert len(key) == 10
    assert key[2:].isdigit()


@pytest.mark.django_db
class TestCreateWithUniqueKey:

    def patient_fields(self, user):
        return {'full_name': 'Mary Major', 'age': 33, 'sex': 'female', 'created_by': user}

    def test_retries_after_collision(self, patient, doctor_user):
        keys = iter(['PAT00000001', 'PAT00000002'])

        with patch('apps.core.identifiers.generate_key', side_effect=lambda prefix: next(keys)):
            created = create_with_unique_key(
                Patient, 'patient_id', PATIENT_PREFIX, **self.patient_fields(doctor_user)
            )

        assert created.patient_id == 'PAT00000002'
        assert Patient.objects.count() == 2

    def test_exhaustion(self, patient, doctor_user):
        with patch('apps.core.identifiers.generate_key', return_value='PAT00000001') as mock_key:
            with pytest.raises(IdentifierExhausted):
                create_with_unique_key(
                    Patient, 'patient_id', PATIENT_PREFIX, **self.patient_fields(doctor_user)
                )

        assert mock_key.call_count == MAX_ATTEMPTS
        assert Patient.objects.count() == 1

    def test_other_integrity_errors_are_not_retried(self, doctor_user):
        with patch.object(Patient.objects, 'create', side_effect=IntegrityError('NOT NULL')) as mock_create:
            with pytest.raises(IntegrityError):
                create_with_unique_key(
                    Patient, 'patient_id', PATIENT_PREFIX, **self.patient_fields(doctor_user)
                )

        assert mock_create.call_count == 1
