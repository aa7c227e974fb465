from django.contrib import admin
from .models import Prescription, PrescriptionMedicine, PrescriptionInvestigation


class PrescriptionMedicineInline(admin.TabularInline):
    model = PrescriptionMedicine
    extra = 0
    fields = ['position', 'medicine', 'dosage', 'frequency', 'duration', 'instructions']
    autocomplete_fields = ['medicine']


class PrescriptionInvestigationInline(admin.TabularInline):
    model = PrescriptionInvestigation
    extra = 0
    fields = ['position', 'investigation', 'notes']
    autocomplete_fields = ['investigation']


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ['prescription_id', 'patient', 'doctor', 'follow_up_date', 'created_at']
    list_filter = ['consent_obtained', 'created_at']
    search_fields = ['prescription_id', 'patient__full_name', 'patient__patient_id']
    readonly_fields = ['prescription_id', 'created_at']
    autocomplete_fields = ['patient']
    inlines = [PrescriptionMedicineInline, PrescriptionInvestigationInline]

    fieldsets = (
        ('Identity', {
            'fields': ('prescription_id', 'patient', 'doctor', 'created_at')
        }),
        ('Narrative', {
            'fields': (
                'chief_complaint', 'history_of_present_illness',
                'past_medical_history', 'past_surgical_history', 'diagnosis'
            )
        }),
        ('Plan', {
            'fields': ('advice', 'follow_up_date', 'consent_obtained')
        }),
    )
