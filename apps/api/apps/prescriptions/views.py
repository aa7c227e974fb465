"""
Prescription endpoints.

Endpoints:
- GET /api/v1/prescriptions/ - Own prescriptions, newest first
- POST /api/v1/prescriptions/ - Author a prescription (atomic)
- GET /api/v1/prescriptions/{id}/ - Joined detail
- GET /api/v1/prescriptions/{id}/pdf/ - Rendered PDF download
- POST /api/v1/prescriptions/{id}/share/email/ - Email the PDF
- POST /api/v1/prescriptions/{id}/share/link/ - Temporary download link
"""
from django.http import HttpResponse
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.authz.mixins import DoctorScopedMixin
from apps.core.observability import get_sanitized_logger
from apps.documents.pdf import RenderError
from apps.documents.sharing import (
    EmailDeliveryError,
    PDF_CONTENT_TYPE,
    create_share_link,
    send_document_email,
    share_url,
    whatsapp_url,
)
from .rendering import render_prescription_pdf, prescription_filename
from .serializers import (
    PrescriptionCreateSerializer,
    PrescriptionListSerializer,
    ShareEmailSerializer,
)
from .services import (
    NotFoundError,
    create_prescription,
    doctor_prescriptions,
    get_owned_prescription,
    get_prescription_view,
    build_prescription_view,
)

logger = get_sanitized_logger(__name__)


def error_response(exc):
    """Map a domain exception to the public error payload."""
    if isinstance(exc, NotFoundError):
        return Response({'error': str(exc)}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, RenderError):
        return Response(
            {'error': 'Failed to generate document'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    if isinstance(exc, EmailDeliveryError):
        return Response({'error': 'Email delivery failed'}, status=status.HTTP_502_BAD_GATEWAY)
    raise exc


def pdf_response(content: bytes, filename: str) -> HttpResponse:
    response = HttpResponse(content, content_type=PDF_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename={filename}'
    return response


class PrescriptionViewSet(DoctorScopedMixin, viewsets.GenericViewSet):
    lookup_value_regex = r'\d+'
    serializer_class = PrescriptionListSerializer

    def get_queryset(self):
        return doctor_prescriptions(self.request.user)

    def list(self, request):
        serializer = PrescriptionListSerializer(self.get_queryset(), many=True)
        return Response(serializer.data)

    def create(self, request):
        serializer = PrescriptionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            prescription = create_prescription(request.user, serializer.validated_data)
        except NotFoundError as e:
            return error_response(e)
        except Exception as e:
            logger.error(
                'Prescription creation failed',
                extra={
                    'event': 'prescription_create_error',
                    'error_type': e.__class__.__name__,
                },
                exc_info=True
            )
            return Response(
                {'error': 'Internal server error'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response(
            {
                'prescription_id': prescription.prescription_id,
                'id': prescription.pk,
                'message': 'Prescription created successfully',
            },
            status=status.HTTP_201_CREATED
        )

    def retrieve(self, request, pk=None):
        try:
            view = get_prescription_view(request.user, pk)
        except NotFoundError as e:
            return error_response(e)
        return Response(view.as_dict())

    @action(detail=True, methods=['get'], url_path='pdf')
    def pdf(self, request, pk=None):
        try:
            view = get_prescription_view(request.user, pk)
            content = render_prescription_pdf(view)
        except (NotFoundError, RenderError) as e:
            return error_response(e)
        return pdf_response(content, prescription_filename(view))

    @action(detail=True, methods=['post'], url_path='share/email', url_name='share-email')
    def share_email(self, request, pk=None):
        serializer = ShareEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            view = get_prescription_view(request.user, pk)
            content = render_prescription_pdf(view)
            send_document_email(
                kind='prescription',
                entity_id=str(view.id),
                to=data['to'],
                subject=data.get('subject') or f"Prescription {view.prescription_id}",
                message=data.get('message') or (
                    f"Please find attached prescription {view.prescription_id} "
                    f"from Dr. {view.doctor.full_name}."
                ),
                filename=prescription_filename(view),
                content=content,
            )
        except (NotFoundError, RenderError, EmailDeliveryError) as e:
            return error_response(e)

        return Response({'message': 'Email sent successfully'}, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='share/link', url_name='share-link')
    def share_link(self, request, pk=None):
        try:
            prescription = get_owned_prescription(request.user, pk)
            view = build_prescription_view(prescription)
            content = render_prescription_pdf(view)
        except (NotFoundError, RenderError) as e:
            return error_response(e)

        link = create_share_link(
            prescription=prescription,
            created_by=request.user,
            filename=prescription_filename(view),
            content=content,
        )
        url = share_url(link)
        return Response(
            {
                'url': url,
                'expires_at': link.expires_at,
                'whatsapp_url': whatsapp_url(f"Prescription {view.prescription_id}: {url}"),
            },
            status=status.HTTP_201_CREATED
        )
