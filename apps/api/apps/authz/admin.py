from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, Doctor


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['email', 'user_type', 'is_active', 'is_staff', 'is_superuser', 'created_at']
    list_filter = ['user_type', 'is_active', 'is_staff', 'is_superuser']
    search_fields = ['email']  # Required for autocomplete_fields
    readonly_fields = ['id', 'created_at', 'updated_at', 'last_login']

    fieldsets = (
        (None, {'fields': ('id', 'email', 'password', 'user_type')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'created_at', 'updated_at')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'user_type', 'is_active', 'is_staff'),
        }),
    )

    ordering = ['email']


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ['full_name', 'registration_number', 'specialization', 'clinic_name', 'user', 'created_at']
    list_filter = ['specialization']
    search_fields = ['full_name', 'registration_number', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    autocomplete_fields = ['user']

    fieldsets = (
        ('Identity', {
            'fields': ('user', 'full_name', 'qualification', 'specialization', 'registration_number')
        }),
        ('Clinic', {
            'fields': ('clinic_name', 'clinic_address', 'clinic_phone')
        }),
        ('Contact', {
            'fields': ('email', 'mobile', 'experience_years', 'consultation_fee')
        }),
        ('Branding', {
            'fields': ('letterhead_image_path', 'digital_signature_path', 'stamp_image_path')
        }),
        ('Audit', {
            'fields': ('created_at', 'updated_at')
        }),
    )
