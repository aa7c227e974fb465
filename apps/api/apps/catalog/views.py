"""
Catalog views - medicines and investigations.
"""
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.core.observability import get_sanitized_logger
from .models import Investigation
from .serializers import MedicineSerializer, InvestigationSerializer
from .services import search_local_medicines, lookup_external_medicines

logger = get_sanitized_logger(__name__)


class MedicineViewSet(mixins.ListModelMixin,
                      mixins.CreateModelMixin,
                      viewsets.GenericViewSet):
    """
    Endpoints:
    - GET /api/v1/medicines/?search= - Active medicines, by name, max 50
    - POST /api/v1/medicines/ - Add a medicine
    - GET /api/v1/medicines/external/?search= - OpenFDA lookup with local fallback
    """
    serializer_class = MedicineSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return search_local_medicines(self.request.query_params.get('search', '').strip())

    def perform_create(self, serializer):
        medicine = serializer.save(created_by=self.request.user)
        logger.info(
            'Medicine added',
            extra={'event': 'medicine_created', 'medicine_id': medicine.pk}
        )

    @action(detail=False, methods=['get'], url_path='external')
    def external(self, request):
        search = request.query_params.get('search', '').strip()
        if not search:
            return Response(
                {'error': 'search parameter is required'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(lookup_external_medicines(search))


class InvestigationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """GET /api/v1/investigations/ - Active catalog ordered by category, name"""
    serializer_class = InvestigationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Investigation.objects.filter(is_active=True).order_by('category', 'name')
