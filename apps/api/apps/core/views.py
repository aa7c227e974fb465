"""
Core views - current user.
"""
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authz.models import Doctor
from .serializers import UserProfileSerializer


class CurrentUserView(APIView):
    """
    Current authenticated user profile endpoint.

    GET /api/auth/me/ - Returns profile of the authenticated user.

    Clients call this after JWT login to learn the account type and whether
    a doctor profile exists yet.

    Response format:
    {
        "id": "uuid",
        "email": "doctor@example.com",
        "user_type": "doctor",
        "is_active": true,
        "has_doctor_profile": true
    }
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        user = request.user
        profile_data = {
            'id': user.id,
            'email': user.email,
            'user_type': user.user_type,
            'is_active': user.is_active,
            'has_doctor_profile': Doctor.objects.filter(user=user).exists(),
        }
        serializer = UserProfileSerializer(profile_data)
        return Response(serializer.data, status=status.HTTP_200_OK)
