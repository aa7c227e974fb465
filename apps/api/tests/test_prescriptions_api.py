"""
Tests for the prescription endpoints.

Endpoints:
- POST /api/v1/prescriptions/
- GET /api/v1/prescriptions/
- GET /api/v1/prescriptions/{id}/
- GET /api/v1/prescriptions/{id}/pdf/
"""
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from rest_framework import status

from apps.clinical.models import Patient
from apps.documents.pdf import RenderError
from apps.prescriptions.models import Prescription, PrescriptionMedicine

URL = '/api/v1/prescriptions/'


@pytest.mark.django_db
class TestCreatePrescription:

    def test_create_with_inline_patient(self, doctor_client, prescription_payload):
        response = doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        prescription = Prescription.objects.get()
        assert response.data['id'] == prescription.pk
        assert response.data['prescription_id'] == prescription.prescription_id
        assert response.data['message'] == 'Prescription created successfully'

    def test_create_with_existing_patient(self, doctor_client, patient, prescription_payload):
        del prescription_payload['patient_info']
        prescription_payload['patient_id'] = patient.pk

        response = doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Patient.objects.count() == 1

    def test_both_patient_id_and_patient_info_rejected(self, doctor_client, patient, prescription_payload):
        prescription_payload['patient_id'] = patient.pk

        response = doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Prescription.objects.count() == 0

    def test_neither_patient_id_nor_patient_info_rejected(self, doctor_client, prescription_payload):
        del prescription_payload['patient_info']

        response = doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_blank_chief_complaint_rejected(self, doctor_client, prescription_payload):
        prescription_payload['chief_complaint'] = '   '

        response = doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'chief_complaint' in response.data

    def test_invalid_age_rejected(self, doctor_client, prescription_payload):
        prescription_payload['patient_info']['age'] = 151

        response = doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_medicine_rejected_before_transaction(self, doctor_client, prescription_payload):
        prescription_payload['medicines'][0]['medicine_id'] = 999999

        response = doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Patient.objects.count() == 0

    def test_medicine_line_without_catalog_entry(self, doctor_client, prescription_payload):
        prescription_payload['medicines'][0]['medicine_id'] = None

        response = doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert PrescriptionMedicine.objects.get().medicine is None

    def test_other_doctors_patient_is_404(self, other_doctor_client, patient, prescription_payload):
        del prescription_payload['patient_info']
        prescription_payload['patient_id'] = patient.pk

        response = other_doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Patient not found'}

    def test_missing_doctor_profile_is_404(self, api_client, profileless_user, prescription_payload):
        api_client.force_authenticate(user=profileless_user)

        response = api_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Doctor profile not found'}
        assert Patient.objects.count() == 0

    def test_database_failure_is_generic_500(self, doctor_client, prescription_payload):
        with patch.object(
            PrescriptionMedicine.objects, 'create',
            side_effect=DatabaseError('ERROR 1452: foreign key constraint fails')
        ):
            response = doctor_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Internal server error'}
        assert '1452' not in str(response.data)
        assert Patient.objects.count() == 0
        assert Prescription.objects.count() == 0

    def test_requires_authentication(self, api_client, prescription_payload):
        response = api_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_patient_accounts_forbidden(self, patient_account_client, prescription_payload):
        response = patient_account_client.post(URL, prescription_payload, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestListAndDetail:

    def test_list_is_scoped_to_doctor(self, doctor_client, other_doctor_client, prescription):
        response = doctor_client.get(URL)
        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['prescription_id'] == prescription.prescription_id
        assert response.data[0]['patient_name'] == 'Jane Roe'

        response = other_doctor_client.get(URL)
        assert response.data == []

    def test_detail_returns_joined_view(self, doctor_client, prescription):
        response = doctor_client.get(f'{URL}{prescription.pk}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['prescription_id'] == prescription.prescription_id
        assert response.data['patient']['full_name'] == 'Jane Roe'
        assert response.data['doctor']['registration_number'] == 'KMC-12345'
        assert 'digital_signature_path' not in response.data['doctor']
        assert response.data['medicines'][0]['name'] == 'Paracetamol'
        assert response.data['investigations'][0]['name'] == 'Complete Blood Count'

    def test_detail_of_other_doctor_is_404(self, other_doctor_client, prescription):
        response = other_doctor_client.get(f'{URL}{prescription.pk}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Prescription not found'}


@pytest.mark.django_db
class TestPrescriptionPdf:

    def test_download(self, doctor_client, prescription):
        response = doctor_client.get(f'{URL}{prescription.pk}/pdf/')

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'
        assert response['Content-Disposition'] == (
            f'attachment; filename=prescription-{prescription.prescription_id}.pdf'
        )
        assert response.content.startswith(b'%PDF')

    def test_not_owned_is_404(self, other_doctor_client, prescription):
        response = other_doctor_client.get(f'{URL}{prescription.pk}/pdf/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_render_failure_is_500_without_partial_output(self, doctor_client, prescription):
        with patch(
            'apps.prescriptions.views.render_prescription_pdf',
            side_effect=RenderError('engine failed')
        ):
            response = doctor_client.get(f'{URL}{prescription.pk}/pdf/')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Failed to generate document'}
