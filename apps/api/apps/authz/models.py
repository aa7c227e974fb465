"""
Authz models: auth_user, doctor
"""
import uuid
from django.conf import settings
from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin


# ============================================================================
# Enums
# ============================================================================

class UserTypeChoices(models.TextChoices):
    """Account types. Only doctors author prescriptions."""
    DOCTOR = 'doctor', 'Doctor'
    PATIENT = 'patient', 'Patient'


# ============================================================================
# User Management
# ============================================================================

class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom user model for authentication.

    Credentials and tokens are handled by Django auth and simplejwt;
    this app only reads `user_type` to decide who may author documents.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255)
    user_type = models.CharField(
        max_length=20,
        choices=UserTypeChoices.choices,
        default=UserTypeChoices.DOCTOR
    )
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)  # Required for admin access
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'auth_user'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        indexes = [
            models.Index(fields=['email'], name='idx_user_email'),
            models.Index(fields=['user_type'], name='idx_user_type'),
        ]

    def __str__(self):
        return self.email

    @property
    def is_doctor(self):
        return self.user_type == UserTypeChoices.DOCTOR


class Doctor(models.Model):
    """
    Doctor profile, 1:1 with a doctor User.

    Image path fields hold absolute filesystem paths (or MEDIA_ROOT-relative
    paths) resolved by the upload collaborator; the renderer only reads them.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='doctor_profile'
    )
    full_name = models.CharField(max_length=255)
    qualification = models.CharField(max_length=255, blank=True, default='')
    specialization = models.CharField(max_length=255, blank=True, default='')
    registration_number = models.CharField(max_length=100)

    # Clinic
    clinic_name = models.CharField(max_length=255, blank=True, default='')
    clinic_address = models.TextField(blank=True, default='')
    clinic_phone = models.CharField(max_length=50, blank=True, default='')

    # Contact
    email = models.EmailField(blank=True, default='')
    mobile = models.CharField(max_length=50, blank=True, default='')

    experience_years = models.PositiveIntegerField(blank=True, null=True)
    consultation_fee = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)

    # Branding images
    digital_signature_path = models.CharField(max_length=500, blank=True, null=True)
    stamp_image_path = models.CharField(max_length=500, blank=True, null=True)
    letterhead_image_path = models.CharField(max_length=500, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'doctors'
        verbose_name = 'Doctor'
        verbose_name_plural = 'Doctors'
        indexes = [
            models.Index(fields=['registration_number'], name='idx_doctor_registration'),
        ]

    def __str__(self):
        return f"Dr. {self.full_name}"
