"""
Core serializers.
"""
from rest_framework import serializers


class UserProfileSerializer(serializers.Serializer):
    """Profile of the authenticated user (GET /api/auth/me/)."""
    id = serializers.UUIDField(read_only=True)
    email = serializers.EmailField(read_only=True)
    user_type = serializers.CharField(read_only=True)
    is_active = serializers.BooleanField(read_only=True)
    has_doctor_profile = serializers.BooleanField(read_only=True)
