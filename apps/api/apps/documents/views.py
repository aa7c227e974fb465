"""
Public download endpoint for shared documents.
"""
from django.http import FileResponse
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.observability import get_sanitized_logger
from .sharing import get_active_share_link, ShareLinkNotFound, PDF_CONTENT_TYPE

logger = get_sanitized_logger(__name__)


class ShareDownloadView(APIView):
    """
    GET /share/{token}/ - Stream a shared PDF while the link is unexpired.

    No authentication: possession of the token grants access.
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request, token):
        try:
            link, path = get_active_share_link(token)
        except ShareLinkNotFound as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        logger.info(
            'Shared document downloaded',
            extra={'event': 'share_link_downloaded', 'share_link_id': link.pk}
        )
        return FileResponse(
            open(path, 'rb'),
            as_attachment=True,
            filename=link.filename,
            content_type=PDF_CONTENT_TYPE,
        )
