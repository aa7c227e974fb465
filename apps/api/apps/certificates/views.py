"""
Certificate endpoints.

Endpoints:
- POST /api/v1/certificates/ - Issue a certificate for an own patient
- GET /api/v1/certificates/{id}/ - Joined JSON view
- GET /api/v1/certificates/{id}/pdf/ - Rendered PDF download
"""
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.authz.mixins import DoctorScopedMixin
from apps.documents.pdf import RenderError
from apps.prescriptions.services import NotFoundError
from apps.prescriptions.views import error_response, pdf_response
from .rendering import render_certificate_pdf, certificate_filename
from .serializers import CertificateCreateSerializer
from .services import create_certificate, get_certificate_view


class CertificateViewSet(DoctorScopedMixin, viewsets.GenericViewSet):
    lookup_value_regex = r'\d+'
    serializer_class = CertificateCreateSerializer

    def create(self, request):
        serializer = CertificateCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            certificate = create_certificate(request.user, serializer.validated_data)
        except NotFoundError as e:
            return error_response(e)

        return Response(
            {
                'id': certificate.pk,
                'certificate_id': certificate.certificate_id,
                'message': 'Certificate created successfully',
            },
            status=status.HTTP_201_CREATED
        )

    def retrieve(self, request, pk=None):
        try:
            view = get_certificate_view(request.user, pk)
        except NotFoundError as e:
            return error_response(e)
        return Response(view.as_dict())

    @action(detail=True, methods=['get'], url_path='pdf')
    def pdf(self, request, pk=None):
        try:
            view = get_certificate_view(request.user, pk)
            content = render_certificate_pdf(view)
        except (NotFoundError, RenderError) as e:
            return error_response(e)
        return pdf_response(content, certificate_filename(view))
