"""Certificate serializers."""
from rest_framework import serializers

from .models import CertificateTypeChoices


class CertificateCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField(min_value=1)
    certificate_type = serializers.ChoiceField(choices=CertificateTypeChoices.choices)
    valid_until = serializers.DateField(required=False, allow_null=True)
    content = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    diagnosis = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    recommendations = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    restrictions = serializers.CharField(required=False, allow_blank=True, allow_null=True)
