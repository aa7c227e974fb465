"""
Tests for the medicine and investigation catalogs.

Endpoints:
- GET /api/v1/medicines/?search=
- POST /api/v1/medicines/
- GET /api/v1/medicines/external/?search=
- GET /api/v1/investigations/
"""
from unittest.mock import patch, Mock

import pytest
import requests
from rest_framework import status

from apps.catalog.models import Medicine, Investigation

MEDICINES_URL = '/api/v1/medicines/'
EXTERNAL_URL = '/api/v1/medicines/external/'

OPENFDA_PAYLOAD = {
    'results': [
        {
            'openfda': {
                'brand_name': ['Tylenol'],
                'generic_name': ['ACETAMINOPHEN'],
                'manufacturer_name': ['Kenvue'],
                'dosage_form': ['TABLET'],
            }
        },
        {'openfda': {}},
    ]
}


@pytest.mark.django_db
class TestMedicineSearch:

    def test_search_by_name_or_generic_name(self, doctor_client, medicine, second_medicine):
        by_generic = doctor_client.get(MEDICINES_URL, {'search': 'acetamin'})
        by_name = doctor_client.get(MEDICINES_URL, {'search': 'amox'})

        assert [m['name'] for m in by_generic.data] == ['Paracetamol']
        assert [m['name'] for m in by_name.data] == ['Amoxicillin']

    def test_inactive_medicines_hidden(self, doctor_client, medicine):
        Medicine.objects.create(name='Withdrawn', is_active=False)

        response = doctor_client.get(MEDICINES_URL)

        assert [m['name'] for m in response.data] == ['Paracetamol']

    def test_results_limited_and_sorted(self, doctor_client):
        Medicine.objects.bulk_create([Medicine(name=f'Drug {i:03d}') for i in range(60)])

        response = doctor_client.get(MEDICINES_URL)

        assert len(response.data) == 50
        assert response.data[0]['name'] == 'Drug 000'

    def test_requires_authentication(self, api_client):
        response = api_client.get(MEDICINES_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestMedicineCreate:

    def test_create(self, doctor_client, doctor):
        response = doctor_client.post(MEDICINES_URL, {
            'name': 'Cetirizine',
            'generic_name': 'Cetirizine',
            'strength': '10mg',
            'form': 'Tablet',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        medicine = Medicine.objects.get(name='Cetirizine')
        assert medicine.created_by == doctor.user
        assert medicine.is_active is True

    def test_blank_name_rejected(self, doctor_client):
        response = doctor_client.post(MEDICINES_URL, {'name': '  '}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestExternalLookup:

    @patch('apps.catalog.services.requests.get')
    def test_maps_openfda_labels(self, mock_get, doctor_client, settings):
        mock_get.return_value = Mock(status_code=200, json=Mock(return_value=OPENFDA_PAYLOAD))

        response = doctor_client.get(EXTERNAL_URL, {'search': 'tylenol'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0] == {
            'name': 'Tylenol',
            'generic_name': 'ACETAMINOPHEN',
            'brand': 'Kenvue',
            'strength': '',
            'form': 'TABLET',
            'manufacturer': 'Kenvue',
        }
        assert response.data[1]['name'] == 'Unknown'

        _, kwargs = mock_get.call_args
        assert kwargs['params'] == {'search': 'openfda.brand_name:"tylenol"', 'limit': 10}
        assert kwargs['timeout'] == settings.OPENFDA_TIMEOUT_SECONDS

    @patch('apps.catalog.services.requests.get')
    def test_network_failure_falls_back_to_local(self, mock_get, doctor_client, medicine):
        mock_get.side_effect = requests.ConnectionError('offline')
        Medicine.objects.create(name='Paracetamol Syrup', is_active=False)

        response = doctor_client.get(EXTERNAL_URL, {'search': 'paracet'})

        assert response.status_code == status.HTTP_200_OK
        assert {m['name'] for m in response.data} == {'Paracetamol', 'Paracetamol Syrup'}

    @patch('apps.catalog.services.requests.get')
    def test_http_error_falls_back_to_local(self, mock_get, doctor_client, medicine):
        mock_get.return_value = Mock(
            raise_for_status=Mock(side_effect=requests.HTTPError('404 Not Found'))
        )

        response = doctor_client.get(EXTERNAL_URL, {'search': 'paracet'})

        assert [m['name'] for m in response.data] == ['Paracetamol']

    @patch('apps.catalog.services.requests.get')
    def test_malformed_body_falls_back_to_local(self, mock_get, doctor_client, medicine):
        mock_get.return_value = Mock(json=Mock(return_value={'error': 'nope'}))

        response = doctor_client.get(EXTERNAL_URL, {'search': 'paracet'})

        assert [m['name'] for m in response.data] == ['Paracetamol']

    def test_missing_search_is_400(self, doctor_client):
        response = doctor_client.get(EXTERNAL_URL)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'search parameter is required'}


@pytest.mark.django_db
class TestInvestigations:

    def test_ordered_by_category_then_name(self, doctor_client, investigation):
        Investigation.objects.create(name='Chest X-Ray', category='Radiology')
        Investigation.objects.create(name='Blood Sugar', category='Biochemistry')
        Investigation.objects.create(name='Old Test', category='Biochemistry', is_active=False)

        response = doctor_client.get('/api/v1/investigations/')

        assert [i['name'] for i in response.data] == [
            'Blood Sugar',
            'Complete Blood Count',
            'Chest X-Ray',
        ]
