from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Patient(models.Model):
    """Patient record owned by a single doctor.

    A doctor cannot hold two patients with the same phone number; the
    constraint lives in the database so concurrent creates cannot slip past
    the serializer pre-check.
    """

    GENDER_MALE = 'male'
    GENDER_FEMALE = 'female'
    GENDER_OTHER = 'other'
    GENDER_CHOICES = [
        (GENDER_MALE, 'Male'),
        (GENDER_FEMALE, 'Female'),
        (GENDER_OTHER, 'Other'),
    ]

    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='patients',
    )
    name = models.CharField(max_length=200)
    age = models.PositiveSmallIntegerField(validators=[MinValueValidator(0), MaxValueValidator(150)])
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    phone = models.CharField(max_length=50)
    email = models.EmailField(blank=True, default='')
    address = models.TextField(blank=True, default='')
    emergency_contact = models.CharField(max_length=200, blank=True, default='')

    allergies = models.TextField(blank=True, default='')
    comorbidities = models.TextField(blank=True, default='')
    smoking_history = models.TextField(blank=True, default='')
    occupational_exposure = models.TextField(blank=True, default='')
    insurance_id = models.CharField(max_length=100, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'patients_patient'
        ordering = ['-updated_at', '-id']
        verbose_name = 'Patient'
        verbose_name_plural = 'Patients'
        constraints = [
            models.UniqueConstraint(fields=['doctor', 'phone'], name='patients_unique_doctor_phone'),
        ]
        indexes = [
            models.Index(fields=['doctor', 'updated_at'], name='patients_pa_doctor_3e9b1f_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.phone})"
