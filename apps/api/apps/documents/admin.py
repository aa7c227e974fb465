from django.contrib import admin
from .models import ShareLink


@admin.register(ShareLink)
class ShareLinkAdmin(admin.ModelAdmin):
    list_display = ['filename', 'prescription', 'created_by', 'expires_at', 'created_at']
    list_filter = ['expires_at']
    search_fields = ['filename', 'prescription__prescription_id']
    readonly_fields = ['token', 'file_path', 'created_at']
