"""
Tests for observability layer.

Validates that metrics, logs, and events are emitted correctly
without logging PHI/PII.
"""
import json
import logging
from unittest.mock import Mock, patch

import pytest
from django.db import connection

from apps.core.observability.correlation import (
    RequestCorrelationMiddleware,
    clear_request_context,
    get_request_id,
)
from apps.core.observability.events import log_domain_event
from apps.core.observability.logging import SanitizedJSONFormatter, sanitize_dict
from apps.core.observability.metrics import metrics
from apps.core.observability.tracing import trace_span


class TestRequestCorrelation:

    def test_generates_request_id_if_missing(self):
        middleware = RequestCorrelationMiddleware(lambda r: Mock(status_code=200))
        request = Mock(META={}, path='/api/test', method='GET')
        request.user = Mock(is_authenticated=False)

        middleware.process_request(request)

        assert request.request_id
        assert get_request_id() == request.request_id
        clear_request_context()

    def test_propagates_existing_request_id(self):
        middleware = RequestCorrelationMiddleware(lambda r: Mock(status_code=200))
        request = Mock(META={'HTTP_X_REQUEST_ID': 'test-request-123'}, path='/api/test', method='GET')
        request.user = Mock(is_authenticated=False)

        middleware.process_request(request)

        assert request.request_id == 'test-request-123'
        clear_request_context()

    @pytest.mark.django_db
    def test_response_header(self, api_client):
        response = api_client.get('/healthz', HTTP_X_REQUEST_ID='abc-123')

        assert response['X-Request-ID'] == 'abc-123'


class TestSanitization:

    def test_sanitize_dict_redacts_clinical_fields(self):
        data = {
            'id': '123',
            'full_name': 'Jane Roe',
            'mobile': '9999999999',
            'chief_complaint': 'fever',
            'diagnosis': 'Viral fever',
            'status': 'active',
        }

        sanitized = sanitize_dict(data)

        assert sanitized['id'] == '123'
        assert sanitized['status'] == 'active'
        for field in ('full_name', 'mobile', 'chief_complaint', 'diagnosis'):
            assert sanitized[field] == '[REDACTED]'

    def test_sanitize_dict_handles_nested_objects(self):
        sanitized = sanitize_dict({
            'prescription': {'id': 7, 'patient': {'full_name': 'Jane Roe', 'id': 3}},
            'lines': [{'instructions': 'After food', 'position': 1}],
        })

        assert sanitized['prescription']['patient'] == {'full_name': '[REDACTED]', 'id': 3}
        assert sanitized['lines'] == [{'instructions': '[REDACTED]', 'position': 1}]

    def test_formatter_redacts_extra_fields(self):
        record = logging.LogRecord('test', logging.INFO, __file__, 1, 'Shared', None, None)
        record.to = 'jane@example.com'
        record.event = 'prescription.shared'

        payload = json.loads(SanitizedJSONFormatter().format(record))

        assert payload['to'] == '[REDACTED]'
        assert payload['event'] == 'prescription.shared'
        assert payload['message'] == 'Shared'

    def test_domain_event_sanitizes_extra_fields(self):
        with patch('apps.core.observability.events.logger') as mock_logger:
            log_domain_event(
                'prescription.created',
                entity_type='Prescription',
                entity_id='1',
                diagnosis='Viral fever',
                medicine_lines=2,
            )

        _, kwargs = mock_logger.info.call_args
        assert kwargs['extra']['diagnosis'] == '[REDACTED]'
        assert kwargs['extra']['medicine_lines'] == 2

    def test_rolled_back_events_log_as_warning(self):
        with patch('apps.core.observability.events.logger') as mock_logger:
            log_domain_event('prescription.rolled_back', result='rolled_back')

        assert mock_logger.warning.called
        assert not mock_logger.info.called


@pytest.mark.django_db
class TestMetrics:

    def test_prescription_created_counter(self, doctor, prescription_payload):
        from apps.prescriptions.serializers import PrescriptionCreateSerializer
        from apps.prescriptions.services import create_prescription

        counter = metrics.prescriptions_created_total.labels(patient_source='inline')
        before = counter._value.get()
        serializer = PrescriptionCreateSerializer(data=prescription_payload)
        serializer.is_valid(raise_exception=True)

        create_prescription(doctor.user, serializer.validated_data)

        assert counter._value.get() == before + 1

    def test_span_reraises(self):
        with pytest.raises(ValueError):
            with trace_span('failing.operation', attributes={'kind': 'test'}):
                raise ValueError('boom')


@pytest.mark.django_db
class TestHealthEndpoints:

    def test_suite_runs_on_in_memory_sqlite(self):
        assert connection.vendor == 'sqlite'

    def test_healthz(self, api_client):
        response = api_client.get('/healthz')

        assert response.status_code == 200
        assert response.json()['status'] == 'ok'

    def test_readyz(self, api_client):
        response = api_client.get('/readyz')

        assert response.status_code == 200
        body = response.json()
        assert body['status'] == 'ready'
        assert body['checks'] == {'database': True, 'share_storage': True}

    def test_readyz_reports_unwritable_storage(self, api_client):
        with patch('apps.core.observability.health.os.makedirs', side_effect=PermissionError('denied')):
            response = api_client.get('/readyz')

        assert response.status_code == 503
        assert response.json()['checks']['share_storage'] is False
