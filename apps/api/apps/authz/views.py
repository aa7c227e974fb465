"""
Authz views for the doctor profile.
"""
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authz.mixins import DoctorScopedMixin
from apps.authz.serializers import DoctorProfileSerializer
from apps.core.observability import get_sanitized_logger

logger = get_sanitized_logger(__name__)


class DoctorProfileView(DoctorScopedMixin, APIView):
    """
    Profile of the authenticated doctor.

    Endpoints:
    - GET /api/v1/doctor/profile/ - Current profile (404 if none)
    - PATCH /api/v1/doctor/profile/ - Update text fields
    """

    def get(self, request):
        serializer = DoctorProfileSerializer(self.get_doctor())
        return Response(serializer.data, status=status.HTTP_200_OK)

    def patch(self, request):
        doctor = self.get_doctor()
        serializer = DoctorProfileSerializer(doctor, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        logger.info(
            'Doctor profile updated',
            extra={
                'event': 'doctor_profile_updated',
                'doctor_pk': doctor.pk,
                'fields': sorted(serializer.validated_data.keys()),
            }
        )
        return Response(serializer.data, status=status.HTTP_200_OK)
