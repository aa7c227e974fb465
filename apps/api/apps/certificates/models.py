"""
Certificate models: certificate
"""
from django.db import models


class CertificateTypeChoices(models.TextChoices):
    FITNESS = 'fitness', 'Fitness'
    SICK_LEAVE = 'sick_leave', 'Sick Leave'
    MEDICAL = 'medical', 'Medical'
    OTHER = 'other', 'Other'


class Certificate(models.Model):
    """
    Medical certificate issued by a doctor to one of their patients.

    Fields:
    - certificate_id: human-readable key, "CERT" + 8 digits, unique
    - issue_date: the day the certificate was created
    - valid_until, content, diagnosis, recommendations, restrictions optional
    """
    certificate_id = models.CharField(max_length=20, unique=True)
    patient = models.ForeignKey(
        'clinical.Patient',
        on_delete=models.PROTECT,
        related_name='certificates'
    )
    doctor = models.ForeignKey(
        'authz.Doctor',
        on_delete=models.PROTECT,
        related_name='certificates'
    )
    certificate_type = models.CharField(
        max_length=20,
        choices=CertificateTypeChoices.choices,
        default=CertificateTypeChoices.MEDICAL
    )
    issue_date = models.DateField()
    valid_until = models.DateField(blank=True, null=True)
    content = models.TextField(blank=True, null=True)
    diagnosis = models.TextField(blank=True, null=True)
    recommendations = models.TextField(blank=True, null=True)
    restrictions = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'certificates'
        verbose_name = 'Certificate'
        verbose_name_plural = 'Certificates'
        ordering = ['-issue_date', '-id']
        indexes = [
            models.Index(fields=['doctor', 'issue_date'], name='idx_cert_doctor_issued'),
        ]

    def __str__(self):
        return self.certificate_id
