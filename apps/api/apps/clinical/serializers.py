"""
Clinical serializers for Patient and PatientHistory.
"""
from rest_framework import serializers

from apps.clinical.models import BloodGroupChoices, Patient, PatientHistory, SexChoices


class PatientInfoSerializer(serializers.Serializer):
    """
    Inline new-patient data.

    Used both by POST /patients/ and nested inside a prescription payload.
    """
    full_name = serializers.CharField(max_length=255)
    age = serializers.IntegerField(min_value=0, max_value=150)
    sex = serializers.ChoiceField(choices=SexChoices.choices)
    mobile = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)

    def validate_full_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('This field may not be blank.')
        return value


class PatientCreateSerializer(PatientInfoSerializer):
    """Full create payload for POST /api/v1/patients/"""
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    blood_group = serializers.ChoiceField(
        choices=BloodGroupChoices.choices, required=False, allow_blank=True, allow_null=True
    )
    allergies = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class PatientListSerializer(serializers.ModelSerializer):
    """Patient list row with visit aggregates"""
    prescription_count = serializers.IntegerField(read_only=True)
    last_visit = serializers.DateTimeField(read_only=True, allow_null=True)

    class Meta:
        model = Patient
        fields = [
            'id',
            'patient_id',
            'full_name',
            'age',
            'sex',
            'mobile',
            'email',
            'created_at',
            'prescription_count',
            'last_visit',
        ]
        read_only_fields = fields


class PatientDetailSerializer(serializers.ModelSerializer):
    """Serializer for Patient detail (all fields)"""

    class Meta:
        model = Patient
        fields = [
            'id',
            'patient_id',
            'full_name',
            'age',
            'sex',
            'mobile',
            'email',
            'address',
            'blood_group',
            'allergies',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PatientHistorySerializer(serializers.ModelSerializer):
    doctor_name = serializers.CharField(source='doctor.full_name', read_only=True)
    prescription_id = serializers.CharField(
        source='prescription.prescription_id',
        read_only=True,
        default=None
    )

    class Meta:
        model = PatientHistory
        fields = [
            'id',
            'visit_date',
            'symptoms',
            'diagnosis',
            'treatment',
            'doctor_name',
            'prescription_id',
            'created_at',
        ]
        read_only_fields = fields
