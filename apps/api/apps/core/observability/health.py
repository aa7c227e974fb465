"""
Health check endpoints.

Provides /healthz and /readyz endpoints for monitoring.
"""
import logging
import os
from django.http import JsonResponse
from django.views import View
from django.db import connection
from django.conf import settings

logger = logging.getLogger(__name__)


class HealthzView(View):
    """
    Liveness endpoint. Returns 200 OK while the process is serving.
    Does not check dependencies.
    """

    def get(self, request):
        health_data = {
            'status': 'ok',
            'version': getattr(settings, 'VERSION', 'unknown'),
        }

        commit_hash = getattr(settings, 'COMMIT_HASH', None)
        if commit_hash:
            health_data['commit'] = commit_hash

        return JsonResponse(health_data, status=200)


class ReadyzView(View):
    """
    Readiness endpoint.

    Checks the database connection and that the share-link storage
    directory is writable. Returns 503 if any check fails.
    """

    def get(self, request):
        checks = {
            'database': self._check_database(),
            'share_storage': self._check_share_storage(),
        }

        all_healthy = all(checks.values())

        response_data = {
            'status': 'ready' if all_healthy else 'not_ready',
            'checks': checks,
        }

        return JsonResponse(response_data, status=200 if all_healthy else 503)

    def _check_database(self):
        try:
            with connection.cursor() as cursor:
                cursor.execute('SELECT 1')
                return True
        except Exception as e:
            logger.error(
                'Database health check failed',
                extra={
                    'event': 'health_check_failed',
                    'check': 'database',
                    'error': str(e)
                }
            )
            return False

    def _check_share_storage(self):
        root = settings.SHARE_LINK_ROOT
        try:
            os.makedirs(root, exist_ok=True)
        except OSError as e:
            logger.error(
                'Share storage health check failed',
                extra={
                    'event': 'health_check_failed',
                    'check': 'share_storage',
                    'error': str(e)
                }
            )
            return False
        return os.access(root, os.W_OK)
