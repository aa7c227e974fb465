"""
Authz serializers for the doctor profile.
"""
from rest_framework import serializers
from apps.authz.models import Doctor


class DoctorProfileSerializer(serializers.ModelSerializer):
    """
    Doctor profile read/update.

    Image paths are set by the upload collaborator and are read-only here.
    """
    user_id = serializers.UUIDField(source='user.id', read_only=True)

    class Meta:
        model = Doctor
        fields = [
            'id',
            'user_id',
            'full_name',
            'qualification',
            'specialization',
            'registration_number',
            'clinic_name',
            'clinic_address',
            'clinic_phone',
            'email',
            'mobile',
            'experience_years',
            'consultation_fee',
            'digital_signature_path',
            'stamp_image_path',
            'letterhead_image_path',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'user_id',
            'digital_signature_path',
            'stamp_image_path',
            'letterhead_image_path',
            'created_at',
            'updated_at',
        ]

    def validate_full_name(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError("Full name is required")
        return value.strip()

    def validate_registration_number(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError("Registration number is required")
        return value.strip()
