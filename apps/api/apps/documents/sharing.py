"""
Sharing rendered documents: email attachments and temporary download links.
"""
import secrets
import smtplib
from datetime import timedelta
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from django.conf import settings
from django.core.mail import EmailMessage
from django.db import transaction
from django.utils import timezone

from apps.core.observability import metrics, get_sanitized_logger
from apps.core.observability.events import log_document_shared
from apps.documents.models import ShareLink

logger = get_sanitized_logger(__name__)

PDF_CONTENT_TYPE = 'application/pdf'
WHATSAPP_SHARE_URL = 'https://wa.me/?text='


class SharingError(Exception):
    """Base exception for document sharing."""
    pass


class EmailDeliveryError(SharingError):
    """The mail transport rejected or failed to send the message."""
    pass


class ShareLinkNotFound(SharingError):
    """Unknown, expired or orphaned share token."""
    pass


# ============================================================================
# Email
# ============================================================================

def send_document_email(*, kind: str, entity_id: str, to: str, subject: str, message: str,
                        filename: str, content: bytes) -> None:
    """
    Send `content` as a PDF attachment through Django's mail framework.

    Raises:
        EmailDeliveryError: transport failure (SMTP error, connection refused)
    """
    email = EmailMessage(
        subject=subject,
        body=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[to],
    )
    email.attach(filename, content, PDF_CONTENT_TYPE)

    try:
        email.send(fail_silently=False)
    except (smtplib.SMTPException, OSError) as e:
        metrics.documents_shared_total.labels(channel='email', result='failure').inc()
        log_document_shared(kind, entity_id, 'email', result='failure', error_type=e.__class__.__name__)
        raise EmailDeliveryError('Email delivery failed') from e

    metrics.documents_shared_total.labels(channel='email', result='success').inc()
    log_document_shared(kind, entity_id, 'email', size_bytes=len(content))


# ============================================================================
# Temporary links
# ============================================================================

def _share_root() -> Path:
    root = Path(settings.SHARE_LINK_ROOT)
    root.mkdir(parents=True, exist_ok=True)
    return root


def share_url(link: ShareLink) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/share/{link.token}/"


def whatsapp_url(text: str) -> str:
    return WHATSAPP_SHARE_URL + quote(text)


def create_share_link(*, prescription, created_by, filename: str, content: bytes,
                      ttl_hours: Optional[int] = None) -> ShareLink:
    """
    Store `content` under SHARE_LINK_ROOT and register a public token for it.

    The file is removed again if the row cannot be written.
    """
    ttl_hours = ttl_hours if ttl_hours is not None else settings.SHARE_LINK_TTL_HOURS
    token = secrets.token_hex(24)
    relative_path = f"{token}.pdf"
    target = _share_root() / relative_path
    target.write_bytes(content)

    try:
        with transaction.atomic():
            link = ShareLink.objects.create(
                token=token,
                prescription=prescription,
                created_by=created_by,
                file_path=relative_path,
                filename=filename,
                expires_at=timezone.now() + timedelta(hours=ttl_hours),
            )
    except Exception:
        target.unlink(missing_ok=True)
        raise

    metrics.documents_shared_total.labels(channel='link', result='success').inc()
    log_document_shared(
        'prescription',
        str(prescription.pk),
        'link',
        share_link_id=link.pk,
        expires_at=link.expires_at.isoformat(),
    )
    return link


def get_active_share_link(token: str):
    """
    Return (link, absolute file path) for an unexpired token.

    Raises:
        ShareLinkNotFound: unknown token, expired link or missing file
    """
    try:
        link = ShareLink.objects.get(token=token)
    except ShareLink.DoesNotExist:
        raise ShareLinkNotFound('Link not found')

    if link.is_expired:
        raise ShareLinkNotFound('Link expired')

    path = Path(settings.SHARE_LINK_ROOT) / link.file_path
    if not path.is_file():
        logger.warning(
            'Share link file missing',
            extra={'event': 'share_link_file_missing', 'share_link_id': link.pk}
        )
        raise ShareLinkNotFound('Link not found')

    return link, path


def purge_expired_share_links(now=None) -> int:
    """Delete expired links and their files. Returns the number of links removed."""
    now = now or timezone.now()
    root = Path(settings.SHARE_LINK_ROOT)
    removed = 0

    for link in ShareLink.objects.filter(expires_at__lte=now).iterator():
        (root / link.file_path).unlink(missing_ok=True)
        link.delete()
        removed += 1

    if removed:
        metrics.share_links_purged_total.inc(removed)
    logger.info(
        'Expired share links purged',
        extra={'event': 'share_links_purged', 'count': removed}
    )
    return removed
