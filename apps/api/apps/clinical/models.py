"""
Clinical models: patient, patient_history
"""
from django.db import models
from django.conf import settings


# ============================================================================
# Enums
# ============================================================================

class SexChoices(models.TextChoices):
    """Patient sex"""
    FEMALE = 'female', 'Female'
    MALE = 'male', 'Male'
    OTHER = 'other', 'Other'


class BloodGroupChoices(models.TextChoices):
    A_POS = 'A+', 'A+'
    A_NEG = 'A-', 'A-'
    B_POS = 'B+', 'B+'
    B_NEG = 'B-', 'B-'
    AB_POS = 'AB+', 'AB+'
    AB_NEG = 'AB-', 'AB-'
    O_POS = 'O+', 'O+'
    O_NEG = 'O-', 'O-'


# ============================================================================
# Models
# ============================================================================

class Patient(models.Model):
    """
    Patient records owned by the doctor (user) who created them.

    Fields:
    - patient_id: human-readable key, "PAT" + 8 digits, unique
    - full_name, age, sex
    - mobile, email, address, blood_group, allergies nullable
    - created_by: FK -> auth_user (the authoring doctor's account)
    - created_at, updated_at

    Created explicitly through the patients endpoint or implicitly when a
    prescription is authored with inline patient_info.
    """
    patient_id = models.CharField(max_length=20, unique=True)
    full_name = models.CharField(max_length=255)
    age = models.PositiveSmallIntegerField()
    sex = models.CharField(max_length=10, choices=SexChoices.choices)

    # Contact
    mobile = models.CharField(max_length=50, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    address = models.TextField(blank=True, null=True)

    # Medical
    blood_group = models.CharField(
        max_length=3,
        choices=BloodGroupChoices.choices,
        blank=True,
        null=True
    )
    allergies = models.TextField(blank=True, null=True)

    # Audit
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='created_patients'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'patients'
        verbose_name = 'Patient'
        verbose_name_plural = 'Patients'
        indexes = [
            models.Index(fields=['created_by', 'created_at'], name='idx_patient_owner_created'),
            models.Index(fields=['full_name'], name='idx_patient_name'),
            models.Index(fields=['mobile'], name='idx_patient_mobile'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.patient_id})"


class PatientHistory(models.Model):
    """
    Append-only visit history.

    One row is written by every successful prescription authoring
    transaction:
    - visit_date = creation date
    - symptoms = chief_complaint
    - diagnosis = diagnosis
    - treatment = the submitted medicine lines as JSON
    """
    patient = models.ForeignKey(
        'Patient',
        on_delete=models.CASCADE,
        related_name='history'
    )
    doctor = models.ForeignKey(
        'authz.Doctor',
        on_delete=models.PROTECT,
        related_name='patient_history'
    )
    prescription = models.OneToOneField(
        'prescriptions.Prescription',
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='history_entry'
    )
    visit_date = models.DateField()
    symptoms = models.TextField(blank=True, default='')
    diagnosis = models.TextField(blank=True, null=True)
    treatment = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'patient_history'
        verbose_name = 'Patient History Entry'
        verbose_name_plural = 'Patient History'
        ordering = ['-visit_date', '-created_at']
        indexes = [
            models.Index(fields=['patient', 'visit_date'], name='idx_history_patient_date'),
        ]

    def __str__(self):
        return f"{self.patient} - {self.visit_date}"
