"""
Global test fixtures for pytest.

Provides reusable fixtures for API testing:
- Authenticated API clients for doctors
- Model instances (Doctor, Patient, Medicine, Investigation, Prescription)
"""
import pytest
from rest_framework.test import APIClient

from apps.authz.models import User, Doctor, UserTypeChoices
from apps.catalog.models import Medicine, Investigation
from apps.clinical.models import Patient


# ============================================================================
# Settings
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_storage(settings, tmp_path):
    """Keep share links and media of each test in its own directory."""
    settings.SHARE_LINK_ROOT = tmp_path / 'shares'
    settings.MEDIA_ROOT = tmp_path / 'media'
    settings.PUBLIC_BASE_URL = 'http://testserver'
    settings.EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'


# ============================================================================
# API Clients
# ============================================================================

@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


@pytest.fixture
def doctor_user(db):
    return User.objects.create_user(
        email='doctor@test.com',
        password='testpass123',
        user_type=UserTypeChoices.DOCTOR,
    )


@pytest.fixture
def doctor(doctor_user):
    return Doctor.objects.create(
        user=doctor_user,
        full_name='Asha Menon',
        qualification='MBBS, MD',
        specialization='General Medicine',
        registration_number='KMC-12345',
        clinic_name='Menon Family Clinic',
        clinic_address='12 Lake Road, Kochi',
        clinic_phone='0484-2345678',
    )


@pytest.fixture
def doctor_client(doctor):
    """Authenticated API client for a doctor with a profile."""
    client = APIClient()
    client.force_authenticate(user=doctor.user)
    return client


@pytest.fixture
def other_doctor(db):
    user = User.objects.create_user(
        email='other.doctor@test.com',
        password='testpass123',
        user_type=UserTypeChoices.DOCTOR,
    )
    return Doctor.objects.create(
        user=user,
        full_name='Ravi Kumar',
        registration_number='KMC-99999',
    )


@pytest.fixture
def other_doctor_client(other_doctor):
    client = APIClient()
    client.force_authenticate(user=other_doctor.user)
    return client


@pytest.fixture
def profileless_user(db):
    """Doctor account that never completed its profile."""
    return User.objects.create_user(
        email='new.doctor@test.com',
        password='testpass123',
        user_type=UserTypeChoices.DOCTOR,
    )


@pytest.fixture
def patient_account_client(db):
    """Authenticated client for a patient-type account."""
    user = User.objects.create_user(
        email='patient@test.com',
        password='testpass123',
        user_type=UserTypeChoices.PATIENT,
    )
    client = APIClient()
    client.force_authenticate(user=user)
    return client


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def patient(doctor):
    return Patient.objects.create(
        patient_id='PAT00000001',
        full_name='John Doe',
        age=45,
        sex='male',
        mobile='9876543210',
        created_by=doctor.user,
    )


@pytest.fixture
def medicine(db):
    return Medicine.objects.create(
        name='Paracetamol',
        generic_name='Acetaminophen',
        strength='500mg',
        form='Tablet',
    )


@pytest.fixture
def second_medicine(db):
    return Medicine.objects.create(
        name='Amoxicillin',
        generic_name='Amoxicillin',
        strength='250mg',
        form='Capsule',
    )


@pytest.fixture
def investigation(db):
    return Investigation.objects.create(name='Complete Blood Count', category='Hematology')


@pytest.fixture
def prescription_payload(medicine, investigation):
    """Valid authoring payload with inline patient data."""
    return {
        'patient_info': {
            'full_name': 'Jane Roe',
            'age': 30,
            'sex': 'female',
            'mobile': '9999999999',
        },
        'chief_complaint': 'fever',
        'history_of_present_illness': 'Fever for three days',
        'diagnosis': 'Viral fever',
        'advice': 'Drink plenty of fluids',
        'medicines': [
            {
                'medicine_id': medicine.pk,
                'dosage': '500mg',
                'frequency': 'twice daily',
                'duration': '5 days',
                'instructions': 'After food',
            },
        ],
        'investigations': [
            {'investigation_id': investigation.pk, 'notes': 'Fasting not required'},
        ],
        'consent_obtained': True,
    }


@pytest.fixture
def prescription(doctor, prescription_payload):
    """A committed prescription authored through the service."""
    from apps.prescriptions.serializers import PrescriptionCreateSerializer
    from apps.prescriptions.services import create_prescription

    serializer = PrescriptionCreateSerializer(data=prescription_payload)
    serializer.is_valid(raise_exception=True)
    return create_prescription(doctor.user, serializer.validated_data)
