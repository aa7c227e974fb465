from django.contrib import admin
from .models import Medicine, Investigation


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    list_display = ['name', 'generic_name', 'strength', 'form', 'manufacturer', 'is_active']
    list_filter = ['is_active', 'form', 'schedule']
    search_fields = ['name', 'generic_name', 'brand']
    readonly_fields = ['created_at']


@admin.register(Investigation)
class InvestigationAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'is_active']
    list_filter = ['is_active', 'category']
    search_fields = ['name', 'category']
    readonly_fields = ['created_at']
