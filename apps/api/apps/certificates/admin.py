from django.contrib import admin
from .models import Certificate


@admin.register(Certificate)
class CertificateAdmin(admin.ModelAdmin):
    list_display = ['certificate_id', 'certificate_type', 'patient', 'doctor', 'issue_date', 'valid_until']
    list_filter = ['certificate_type', 'issue_date']
    search_fields = ['certificate_id', 'patient__full_name', 'patient__patient_id']
    readonly_fields = ['certificate_id', 'created_at']
    autocomplete_fields = ['patient']
