"""Catalog serializers."""
from rest_framework import serializers
from .models import Medicine, Investigation


class MedicineSerializer(serializers.ModelSerializer):

    class Meta:
        model = Medicine
        fields = [
            'id',
            'name',
            'generic_name',
            'brand',
            'strength',
            'form',
            'manufacturer',
            'schedule',
            'is_active',
            'created_at',
        ]
        read_only_fields = ['id', 'is_active', 'created_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('This field may not be blank.')
        return value


class ExternalMedicineSerializer(serializers.Serializer):
    """Medicine suggestion mapped from the OpenFDA drug-label API."""
    name = serializers.CharField()
    generic_name = serializers.CharField(allow_blank=True)
    brand = serializers.CharField(allow_blank=True)
    strength = serializers.CharField(allow_blank=True)
    form = serializers.CharField(allow_blank=True)
    manufacturer = serializers.CharField(allow_blank=True)


class InvestigationSerializer(serializers.ModelSerializer):

    class Meta:
        model = Investigation
        fields = ['id', 'name', 'category', 'is_active']
        read_only_fields = fields
