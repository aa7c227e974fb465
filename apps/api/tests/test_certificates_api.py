"""
Tests for medical certificates.

Endpoints:
- POST /api/v1/certificates/
- GET /api/v1/certificates/{id}/
- GET /api/v1/certificates/{id}/pdf/
"""
from datetime import date

import pytest
from django.utils import timezone
from rest_framework import status

from apps.certificates.models import Certificate
from apps.certificates.rendering import certificate_blocks
from apps.certificates.services import get_certificate_view
from apps.documents.pdf import block_texts

URL = '/api/v1/certificates/'


@pytest.fixture
def certificate_payload(patient):
    return {
        'patient_id': patient.pk,
        'certificate_type': 'sick_leave',
        'valid_until': '2024-03-20',
        'diagnosis': 'Acute bronchitis',
        'content': 'Advised rest for one week.',
        'recommendations': 'Rest and fluids',
    }


@pytest.fixture
def certificate(doctor_client, certificate_payload):
    response = doctor_client.post(URL, certificate_payload, format='json')
    return Certificate.objects.get(pk=response.data['id'])


@pytest.mark.django_db
class TestCreateCertificate:

    def test_create(self, doctor_client, doctor, patient, certificate_payload):
        response = doctor_client.post(URL, certificate_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        certificate = Certificate.objects.get()
        assert response.data['certificate_id'] == certificate.certificate_id
        assert certificate.certificate_id.startswith('CERT')
        assert len(certificate.certificate_id) == 12
        assert certificate.issue_date == timezone.localdate()
        assert certificate.doctor == doctor
        assert certificate.patient == patient
        assert certificate.restrictions is None

    def test_invalid_type_rejected(self, doctor_client, certificate_payload):
        certificate_payload['certificate_type'] = 'birthday'

        response = doctor_client.post(URL, certificate_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_other_doctors_patient_is_404(self, other_doctor_client, certificate_payload):
        response = other_doctor_client.post(URL, certificate_payload, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Patient not found'}
        assert Certificate.objects.count() == 0

    def test_missing_doctor_profile_is_404(self, api_client, profileless_user, certificate_payload):
        api_client.force_authenticate(user=profileless_user)

        response = api_client.post(URL, certificate_payload, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Doctor profile not found'}


@pytest.mark.django_db
class TestCertificateRetrieval:

    def test_detail(self, doctor_client, certificate):
        response = doctor_client.get(f'{URL}{certificate.pk}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['certificate_id'] == certificate.certificate_id
        assert response.data['patient']['full_name'] == 'John Doe'
        assert response.data['doctor']['full_name'] == 'Asha Menon'
        assert 'stamp_image_path' not in response.data['doctor']

    def test_detail_of_other_doctor_is_404(self, other_doctor_client, certificate):
        response = other_doctor_client.get(f'{URL}{certificate.pk}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Certificate not found'}

    def test_pdf(self, doctor_client, certificate):
        response = doctor_client.get(f'{URL}{certificate.pk}/pdf/')

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'
        assert response['Content-Disposition'] == (
            f'attachment; filename=certificate-{certificate.certificate_id}.pdf'
        )
        assert response.content.startswith(b'%PDF')


@pytest.mark.django_db
class TestCertificateLayout:

    def test_sections(self, doctor, certificate):
        certificate.issue_date = date(2024, 3, 13)
        certificate.save()

        texts = block_texts(certificate_blocks(get_certificate_view(doctor.user, certificate.pk)))

        assert texts[0] == 'MEDICAL CERTIFICATE'
        assert 'Name: John Doe' in texts
        assert 'Diagnosis: Acute bronchitis' in texts
        assert 'Advised rest for one week.' in texts
        assert 'Recommendations: Rest and fluids' in texts
        assert not any(text.startswith('Restrictions:') for text in texts)
        assert 'Valid Until: 20/03/2024' in texts
        assert 'Issue Date: 13/03/2024' in texts
        assert 'Dr. Asha Menon' in texts
        assert texts[-2:] == ['Menon Family Clinic', '12 Lake Road, Kochi']
