"""
Documents models: share_link
"""
from django.conf import settings
from django.db import models
from django.utils import timezone


class ShareLink(models.Model):
    """
    Temporary public download link for a rendered prescription.

    Fields:
    - token: random hex string, unique, part of the public URL
    - prescription: FK -> prescriptions
    - created_by: FK -> auth_user (the sharing doctor's account)
    - file_path: PDF location relative to SHARE_LINK_ROOT
    - filename: download filename
    - expires_at: links are served only before this instant

    Expired rows and their files are removed by the
    purge_expired_share_links Celery task.
    """
    token = models.CharField(max_length=64, unique=True)
    prescription = models.ForeignKey(
        'prescriptions.Prescription',
        on_delete=models.CASCADE,
        related_name='share_links'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='share_links'
    )
    file_path = models.CharField(max_length=500)
    filename = models.CharField(max_length=255)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'share_links'
        verbose_name = 'Share Link'
        verbose_name_plural = 'Share Links'
        indexes = [
            models.Index(fields=['expires_at'], name='idx_share_link_expires'),
        ]

    def __str__(self):
        return f"{self.filename} (expires {self.expires_at:%Y-%m-%d %H:%M})"

    @property
    def is_expired(self):
        return self.expires_at <= timezone.now()
