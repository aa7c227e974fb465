"""
Prescription serializers.

PrescriptionCreateSerializer validates the whole authoring payload before
the transaction opens; the service only ever sees validated data.
"""
from rest_framework import serializers

from apps.catalog.models import Medicine, Investigation
from apps.clinical.serializers import PatientInfoSerializer
from apps.prescriptions.models import Prescription


class MedicineLineSerializer(serializers.Serializer):
    medicine_id = serializers.PrimaryKeyRelatedField(
        source='medicine',
        queryset=Medicine.objects.all(),
        allow_null=True,
        required=False,
        default=None
    )
    dosage = serializers.CharField(max_length=100)
    frequency = serializers.CharField(max_length=100)
    duration = serializers.CharField(max_length=100)
    instructions = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class InvestigationLineSerializer(serializers.Serializer):
    investigation_id = serializers.PrimaryKeyRelatedField(
        source='investigation',
        queryset=Investigation.objects.all()
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class PrescriptionCreateSerializer(serializers.Serializer):
    """
    Authoring payload.

    Exactly one of patient_id (an existing patient) or patient_info (a new
    patient) must be given.
    """
    patient_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    patient_info = PatientInfoSerializer(required=False, allow_null=True)

    chief_complaint = serializers.CharField()
    history_of_present_illness = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    past_medical_history = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    past_surgical_history = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    diagnosis = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    advice = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    follow_up_date = serializers.DateField(required=False, allow_null=True)
    consent_obtained = serializers.BooleanField(required=False, default=False)

    medicines = MedicineLineSerializer(many=True, required=False, default=list)
    investigations = InvestigationLineSerializer(many=True, required=False, default=list)

    def validate_chief_complaint(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('This field may not be blank.')
        return value

    def validate(self, attrs):
        has_id = attrs.get('patient_id') is not None
        has_info = attrs.get('patient_info') is not None
        if has_id and has_info:
            raise serializers.ValidationError(
                'Provide either patient_id or patient_info, not both.'
            )
        if not has_id and not has_info:
            raise serializers.ValidationError(
                'Either patient_id or patient_info is required.'
            )
        return attrs


class PrescriptionListSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source='patient.full_name', read_only=True)
    patient_code = serializers.CharField(source='patient.patient_id', read_only=True)

    class Meta:
        model = Prescription
        fields = [
            'id',
            'prescription_id',
            'patient',
            'patient_name',
            'patient_code',
            'chief_complaint',
            'diagnosis',
            'follow_up_date',
            'created_at',
        ]
        read_only_fields = fields


class ShareEmailSerializer(serializers.Serializer):
    to = serializers.EmailField()
    subject = serializers.CharField(max_length=255, required=False, allow_blank=True)
    message = serializers.CharField(required=False, allow_blank=True)
