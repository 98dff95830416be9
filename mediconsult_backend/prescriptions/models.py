from django.conf import settings
from django.db import models
from django.utils import timezone


class Prescription(models.Model):
    """Issued prescription.

    The clinical sections are stored as JSON documents exactly as submitted.
    ``patient_snapshot`` freezes the patient's demographics at issue time, so
    the prescription stays readable after the patient record changes or is
    deleted (``patient`` is then nulled).

    ``patient_name`` and ``diagnosis_text`` are derived on save for search.
    """

    SEVERITY_MILD = 'mild'
    SEVERITY_MODERATE = 'moderate'
    SEVERITY_SEVERE = 'severe'
    SEVERITY_CHOICES = [
        (SEVERITY_MILD, 'Mild'),
        (SEVERITY_MODERATE, 'Moderate'),
        (SEVERITY_SEVERE, 'Severe'),
    ]

    prescription_number = models.CharField(max_length=20, unique=True, editable=False)
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='prescriptions',
    )
    patient = models.ForeignKey(
        'patients.Patient',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='prescriptions',
    )
    patient_snapshot = models.JSONField()
    diagnosis = models.JSONField(default=list)
    lifestyle = models.JSONField(default=dict)
    vitals = models.JSONField(default=dict)
    tests = models.JSONField(default=dict)
    medications = models.JSONField(default=list)
    notes = models.TextField(blank=True, default='')
    date_issued = models.DateTimeField(default=timezone.now)

    patient_name = models.CharField(max_length=200, blank=True, default='')
    diagnosis_text = models.TextField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'prescriptions_prescription'
        ordering = ['-date_issued', '-id']
        verbose_name = 'Prescription'
        verbose_name_plural = 'Prescriptions'
        indexes = [
            models.Index(fields=['doctor', 'date_issued'], name='prescriptio_doctor_8d2c4a_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.prescription_number} ({self.patient_name})"

    def refresh_search_fields(self):
        self.patient_name = (self.patient_snapshot or {}).get('name', '') or ''
        names = []
        for entry in self.diagnosis or []:
            for key in ('primaryDiagnosis', 'secondaryDiagnosis'):
                value = (entry or {}).get(key)
                if value:
                    names.append(value)
        self.diagnosis_text = '\n'.join(names)

    def save(self, *args, **kwargs):
        self.refresh_search_fields()
        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            kwargs['update_fields'] = set(update_fields) | {'patient_name', 'diagnosis_text'}
        super().save(*args, **kwargs)


class SavedSymptom(models.Model):
    """Symptom a doctor explicitly saved for quick entry, with usage count."""

    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='saved_symptoms',
    )
    symptom = models.CharField(max_length=200)
    count = models.PositiveIntegerField(default=0)
    last_used = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'prescriptions_savedsymptom'
        ordering = ['-count', '-last_used']
        constraints = [
            models.UniqueConstraint(fields=['doctor', 'symptom'], name='prescriptions_unique_doctor_symptom'),
        ]

    def __str__(self) -> str:
        return f"{self.symptom} x{self.count}"
