"""
Catalog models - medicines and investigations referenced by prescriptions.
"""
from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Medicine(models.Model):
    """
    Medicine catalog entry.

    Prescription lines point here; a line may also carry no medicine at all.
    """
    name = models.CharField(_('Name'), max_length=255)
    generic_name = models.CharField(_('Generic Name'), max_length=255, blank=True, null=True)
    brand = models.CharField(_('Brand'), max_length=255, blank=True, null=True)
    strength = models.CharField(_('Strength'), max_length=100, blank=True, null=True)
    form = models.CharField(_('Form'), max_length=100, blank=True, null=True)
    manufacturer = models.CharField(_('Manufacturer'), max_length=255, blank=True, null=True)
    schedule = models.CharField(_('Schedule'), max_length=50, blank=True, null=True)

    is_active = models.BooleanField(_('Active'), default=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='created_medicines'
    )
    created_at = models.DateTimeField(_('Created At'), auto_now_add=True)

    class Meta:
        db_table = 'medicines'
        ordering = ['name']
        indexes = [
            models.Index(fields=['name'], name='medicines_name_idx'),
            models.Index(fields=['generic_name'], name='medicines_generic_idx'),
        ]
        verbose_name = _('Medicine')
        verbose_name_plural = _('Medicines')

    def __str__(self):
        if self.strength:
            return f"{self.name} ({self.strength})"
        return self.name


class Investigation(models.Model):
    """Lab test / imaging catalog entry."""
    name = models.CharField(_('Name'), max_length=255)
    category = models.CharField(_('Category'), max_length=100, blank=True, null=True)
    is_active = models.BooleanField(_('Active'), default=True)
    created_at = models.DateTimeField(_('Created At'), auto_now_add=True)

    class Meta:
        db_table = 'investigations'
        ordering = ['category', 'name']
        verbose_name = _('Investigation')
        verbose_name_plural = _('Investigations')

    def __str__(self):
        return self.name
