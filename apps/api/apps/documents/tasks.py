"""
Celery tasks for shared documents.
"""
from celery import shared_task


@shared_task(name='apps.documents.tasks.purge_expired_share_links')
def purge_expired_share_links():
    """
    Remove expired share links and their stored PDFs.

    Scheduled hourly through CELERY_BEAT_SCHEDULE.
    """
    from .sharing import purge_expired_share_links as purge

    removed = purge()
    return f"Purged {removed} expired share links"
