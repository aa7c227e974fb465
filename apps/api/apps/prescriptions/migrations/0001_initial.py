# Generated migration for prescriptions app - prescriptions and line items

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authz', '0001_initial'),
        ('catalog', '0001_initial'),
        ('clinical', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Prescription',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('prescription_id', models.CharField(max_length=20, unique=True)),
                ('chief_complaint', models.TextField()),
                ('history_of_present_illness', models.TextField(blank=True, null=True)),
                ('past_medical_history', models.TextField(blank=True, null=True)),
                ('past_surgical_history', models.TextField(blank=True, null=True)),
                ('diagnosis', models.TextField(blank=True, null=True)),
                ('advice', models.TextField(blank=True, null=True)),
                ('follow_up_date', models.DateField(blank=True, null=True)),
                ('consent_obtained', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='prescriptions', to='authz.doctor')),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='prescriptions', to='clinical.patient')),
            ],
            options={
                'verbose_name': 'Prescription',
                'verbose_name_plural': 'Prescriptions',
                'db_table': 'prescriptions',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['doctor', 'created_at'], name='idx_rx_doctor_created'),
                    models.Index(fields=['patient', 'created_at'], name='idx_rx_patient_created'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PrescriptionMedicine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField()),
                ('dosage', models.CharField(max_length=100)),
                ('frequency', models.CharField(max_length=100)),
                ('duration', models.CharField(max_length=100)),
                ('instructions', models.TextField(blank=True, null=True)),
                ('medicine', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='prescription_lines', to='catalog.medicine')),
                ('prescription', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='medicine_lines', to='prescriptions.prescription')),
            ],
            options={
                'db_table': 'prescription_medicines',
                'ordering': ['prescription', 'position'],
                'constraints': [models.UniqueConstraint(fields=('prescription', 'position'), name='uniq_rx_medicine_position')],
            },
        ),
        migrations.CreateModel(
            name='PrescriptionInvestigation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField()),
                ('notes', models.TextField(blank=True, null=True)),
                ('investigation', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='prescription_lines', to='catalog.investigation')),
                ('prescription', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='investigation_lines', to='prescriptions.prescription')),
            ],
            options={
                'db_table': 'prescription_investigations',
                'ordering': ['prescription', 'position'],
                'constraints': [models.UniqueConstraint(fields=('prescription', 'position'), name='uniq_rx_investigation_position')],
            },
        ),
    ]
