"""
Clinical viewsets for Patient and PatientHistory.
"""
from django.db import transaction
from django.db.models import Count, Max, Q
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.authz.mixins import DoctorScopedMixin
from apps.clinical.models import Patient, PatientHistory
from apps.clinical.serializers import (
    PatientCreateSerializer,
    PatientDetailSerializer,
    PatientHistorySerializer,
    PatientListSerializer,
)
from apps.clinical.services import create_patient
from apps.core.observability import get_sanitized_logger

logger = get_sanitized_logger(__name__)


class PatientViewSet(DoctorScopedMixin,
                     mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     viewsets.GenericViewSet):
    """
    ViewSet for Patient endpoints.

    Endpoints:
    - GET /api/v1/patients/?search= - Own patients, newest first
    - POST /api/v1/patients/ - Create with generated patient key
    - GET /api/v1/patients/{id}/ - Detail (own only)
    - GET /api/v1/patients/{id}/history/ - Visit history by this doctor
    """

    def get_queryset(self):
        queryset = Patient.objects.filter(created_by=self.request.user)

        if self.action == 'list':
            queryset = queryset.annotate(
                prescription_count=Count('prescriptions', distinct=True),
                last_visit=Max('prescriptions__created_at'),
            )

            search = self.request.query_params.get('search')
            if search:
                queryset = queryset.filter(
                    Q(full_name__icontains=search) |
                    Q(mobile__icontains=search) |
                    Q(patient_id__icontains=search)
                )

        return queryset.order_by('-created_at', '-id')

    def get_serializer_class(self):
        if self.action == 'list':
            return PatientListSerializer
        if self.action == 'create':
            return PatientCreateSerializer
        return PatientDetailSerializer

    def create(self, request, *args, **kwargs):
        """Create patient (POST /api/v1/patients/)"""
        serializer = PatientCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            patient = create_patient(request.user, serializer.validated_data)

        return Response(
            PatientDetailSerializer(patient).data,
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['get'], url_path='history')
    def history(self, request, pk=None):
        """Visit history entries authored by the requesting doctor."""
        patient = self.get_object()
        entries = (
            PatientHistory.objects
            .filter(patient=patient, doctor=self.get_doctor())
            .select_related('doctor', 'prescription')
            .order_by('-visit_date', '-created_at')
        )
        return Response(PatientHistorySerializer(entries, many=True).data)
