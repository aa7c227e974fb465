from django.contrib import admin
from .models import Patient, PatientHistory


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ['patient_id', 'full_name', 'age', 'sex', 'mobile', 'created_by', 'created_at']
    list_filter = ['sex', 'blood_group']
    search_fields = ['patient_id', 'full_name', 'mobile', 'email']
    readonly_fields = ['patient_id', 'created_at', 'updated_at']
    autocomplete_fields = ['created_by']

    fieldsets = (
        ('Basic Info', {
            'fields': ('patient_id', 'full_name', 'age', 'sex')
        }),
        ('Contact', {
            'fields': ('mobile', 'email', 'address')
        }),
        ('Medical', {
            'fields': ('blood_group', 'allergies')
        }),
        ('Audit', {
            'fields': ('created_by', 'created_at', 'updated_at')
        }),
    )


@admin.register(PatientHistory)
class PatientHistoryAdmin(admin.ModelAdmin):
    list_display = ['patient', 'doctor', 'visit_date', 'prescription']
    search_fields = ['patient__full_name', 'patient__patient_id']
    readonly_fields = ['created_at']
    autocomplete_fields = ['patient']
