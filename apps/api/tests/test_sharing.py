"""
Tests for sharing prescriptions by email and by temporary link.

Endpoints:
- POST /api/v1/prescriptions/{id}/share/email/
- POST /api/v1/prescriptions/{id}/share/link/
- GET /share/{token}/ (public)
"""
import smtplib
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest
from django.core import mail
from django.core.mail import EmailMessage
from django.utils import timezone
from rest_framework import status

from apps.documents.models import ShareLink
from apps.documents.sharing import (
    ShareLinkNotFound,
    create_share_link,
    get_active_share_link,
    purge_expired_share_links,
    whatsapp_url,
)
from apps.documents.tasks import purge_expired_share_links as purge_task


def email_url(prescription):
    return f'/api/v1/prescriptions/{prescription.pk}/share/email/'


def link_url(prescription):
    return f'/api/v1/prescriptions/{prescription.pk}/share/link/'


@pytest.mark.django_db
class TestShareByEmail:

    def test_sends_pdf_attachment(self, doctor_client, prescription):
        response = doctor_client.post(
            email_url(prescription), {'to': 'jane@example.com'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'message': 'Email sent successfully'}
        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.to == ['jane@example.com']
        assert prescription.prescription_id in message.subject
        filename, content, mimetype = message.attachments[0]
        assert filename == f'prescription-{prescription.prescription_id}.pdf'
        assert mimetype == 'application/pdf'
        assert content.startswith(b'%PDF')

    def test_custom_subject_and_message(self, doctor_client, prescription):
        doctor_client.post(
            email_url(prescription),
            {'to': 'jane@example.com', 'subject': 'Your prescription', 'message': 'Get well soon'},
            format='json'
        )

        assert mail.outbox[0].subject == 'Your prescription'
        assert mail.outbox[0].body == 'Get well soon'

    def test_invalid_recipient_rejected(self, doctor_client, prescription):
        response = doctor_client.post(email_url(prescription), {'to': 'not-an-email'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert mail.outbox == []

    def test_transport_failure_is_502(self, doctor_client, prescription):
        with patch.object(EmailMessage, 'send', side_effect=smtplib.SMTPServerDisconnected('gone')):
            response = doctor_client.post(
                email_url(prescription), {'to': 'jane@example.com'}, format='json'
            )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data == {'error': 'Email delivery failed'}

    def test_other_doctor_is_404(self, other_doctor_client, prescription):
        response = other_doctor_client.post(
            email_url(prescription), {'to': 'jane@example.com'}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert mail.outbox == []


@pytest.mark.django_db
class TestShareByLink:

    def test_creates_link(self, doctor_client, prescription, settings):
        response = doctor_client.post(link_url(prescription))

        assert response.status_code == status.HTTP_201_CREATED
        link = ShareLink.objects.get()
        assert response.data['url'] == f'http://testserver/share/{link.token}/'
        assert response.data['expires_at'] == link.expires_at
        assert response.data['whatsapp_url'].startswith('https://wa.me/?text=')
        assert link.token in response.data['whatsapp_url']
        assert (Path(settings.SHARE_LINK_ROOT) / link.file_path).is_file()

    def test_link_expires_after_ttl(self, doctor_client, prescription, settings):
        settings.SHARE_LINK_TTL_HOURS = 2
        before = timezone.now()

        doctor_client.post(link_url(prescription))

        link = ShareLink.objects.get()
        assert before + timedelta(hours=2) <= link.expires_at <= timezone.now() + timedelta(hours=2)

    def test_other_doctor_is_404(self, other_doctor_client, prescription):
        response = other_doctor_client.post(link_url(prescription))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert ShareLink.objects.count() == 0

    def test_whatsapp_text_is_quoted(self):
        assert whatsapp_url('Rx 1: http://x/') == 'https://wa.me/?text=Rx%201%3A%20http%3A//x/'


@pytest.mark.django_db
class TestPublicDownload:

    def test_download_without_authentication(self, api_client, doctor_client, prescription):
        doctor_client.post(link_url(prescription))
        link = ShareLink.objects.get()

        response = api_client.get(f'/share/{link.token}/')

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'
        assert link.filename in response['Content-Disposition']
        assert b''.join(response.streaming_content).startswith(b'%PDF')

    def test_unknown_token_is_404(self, api_client):
        response = api_client.get('/share/does-not-exist/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {'error': 'Link not found'}

    def test_expired_link_is_404(self, api_client, doctor, prescription):
        link = create_share_link(
            prescription=prescription,
            created_by=doctor.user,
            filename='prescription.pdf',
            content=b'%PDF-1.4 test',
        )
        ShareLink.objects.filter(pk=link.pk).update(expires_at=timezone.now() - timedelta(minutes=1))

        response = api_client.get(f'/share/{link.token}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {'error': 'Link expired'}

    def test_missing_file_is_not_found(self, doctor, prescription, settings):
        link = create_share_link(
            prescription=prescription,
            created_by=doctor.user,
            filename='prescription.pdf',
            content=b'%PDF-1.4 test',
        )
        (Path(settings.SHARE_LINK_ROOT) / link.file_path).unlink()

        with pytest.raises(ShareLinkNotFound):
            get_active_share_link(link.token)


@pytest.mark.django_db
class TestPurge:

    def make_link(self, doctor, prescription, expires_at):
        link = create_share_link(
            prescription=prescription,
            created_by=doctor.user,
            filename='prescription.pdf',
            content=b'%PDF-1.4 test',
        )
        ShareLink.objects.filter(pk=link.pk).update(expires_at=expires_at)
        return link

    def test_removes_expired_rows_and_files(self, doctor, prescription, settings):
        root = Path(settings.SHARE_LINK_ROOT)
        expired = self.make_link(doctor, prescription, timezone.now() - timedelta(hours=1))
        active = self.make_link(doctor, prescription, timezone.now() + timedelta(hours=1))

        assert purge_expired_share_links() == 1

        assert list(ShareLink.objects.values_list('pk', flat=True)) == [active.pk]
        assert not (root / expired.file_path).exists()
        assert (root / active.file_path).is_file()

    def test_task_reports_count(self, doctor, prescription):
        self.make_link(doctor, prescription, timezone.now() - timedelta(hours=1))

        assert purge_task() == 'Purged 1 expired share links'
        assert ShareLink.objects.count() == 0
