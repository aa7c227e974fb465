"""
Prescription models: prescription, prescription_medicine, prescription_investigation
"""
from django.db import models


class Prescription(models.Model):
    """
    A prescription authored by a doctor for a patient.

    Fields:
    - prescription_id: human-readable key, "RX" + 8 digits, unique
    - patient: FK -> patients
    - doctor: FK -> doctors
    - chief_complaint: required narrative
    - history_of_present_illness, past_medical_history,
      past_surgical_history, diagnosis, advice: optional narrative
    - follow_up_date: optional
    - consent_obtained: prints the consent paragraph when true

    Rows are only ever written by the authoring transaction, together
    with their line items and one patient history entry.
    """
    prescription_id = models.CharField(max_length=20, unique=True)
    patient = models.ForeignKey(
        'clinical.Patient',
        on_delete=models.PROTECT,
        related_name='prescriptions'
    )
    doctor = models.ForeignKey(
        'authz.Doctor',
        on_delete=models.PROTECT,
        related_name='prescriptions'
    )

    # Narrative
    chief_complaint = models.TextField()
    history_of_present_illness = models.TextField(blank=True, null=True)
    past_medical_history = models.TextField(blank=True, null=True)
    past_surgical_history = models.TextField(blank=True, null=True)
    diagnosis = models.TextField(blank=True, null=True)
    advice = models.TextField(blank=True, null=True)

    follow_up_date = models.DateField(blank=True, null=True)
    consent_obtained = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'prescriptions'
        verbose_name = 'Prescription'
        verbose_name_plural = 'Prescriptions'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['doctor', 'created_at'], name='idx_rx_doctor_created'),
            models.Index(fields=['patient', 'created_at'], name='idx_rx_patient_created'),
        ]

    def __str__(self):
        return self.prescription_id


class PrescriptionMedicine(models.Model):
    """Medicine line; `position` preserves the submitted order."""
    prescription = models.ForeignKey(
        'Prescription',
        on_delete=models.CASCADE,
        related_name='medicine_lines'
    )
    medicine = models.ForeignKey(
        'catalog.Medicine',
        on_delete=models.PROTECT,
        blank=True,
        null=True,
        related_name='prescription_lines'
    )
    position = models.PositiveIntegerField()
    dosage = models.CharField(max_length=100)
    frequency = models.CharField(max_length=100)
    duration = models.CharField(max_length=100)
    instructions = models.TextField(blank=True, null=True)

    class Meta:
        db_table = 'prescription_medicines'
        ordering = ['prescription', 'position']
        constraints = [
            models.UniqueConstraint(
                fields=['prescription', 'position'],
                name='uniq_rx_medicine_position'
            ),
        ]

    def __str__(self):
        return f"{self.prescription_id} #{self.position}"


class PrescriptionInvestigation(models.Model):
    """Investigation line; `position` preserves the submitted order."""
    prescription = models.ForeignKey(
        'Prescription',
        on_delete=models.CASCADE,
        related_name='investigation_lines'
    )
    investigation = models.ForeignKey(
        'catalog.Investigation',
        on_delete=models.PROTECT,
        related_name='prescription_lines'
    )
    position = models.PositiveIntegerField()
    notes = models.TextField(blank=True, null=True)

    class Meta:
        db_table = 'prescription_investigations'
        ordering = ['prescription', 'position']
        constraints = [
            models.UniqueConstraint(
                fields=['prescription', 'position'],
                name='uniq_rx_investigation_position'
            ),
        ]

    def __str__(self):
        return f"{self.prescription_id} #{self.position}"
