from django.conf import settings
from django.db import models


class Appointment(models.Model):
	"""A booked consultation slot.

	Patient and doctor are free-text names as entered at booking time; the
	owning ``doctor`` account scopes visibility. Any status may move to any
	other status.
	"""
	STATUS_SCHEDULED = 'scheduled'
	STATUS_COMPLETED = 'completed'
	STATUS_CANCELLED = 'cancelled'

	STATUS_CHOICES = (
		(STATUS_SCHEDULED, STATUS_SCHEDULED),
		(STATUS_COMPLETED, STATUS_COMPLETED),
		(STATUS_CANCELLED, STATUS_CANCELLED),
	)

	doctor = models.ForeignKey(
		settings.AUTH_USER_MODEL,
		on_delete=models.CASCADE,
		related_name='appointments',
	)
	patient_name = models.CharField(max_length=200)
	doctor_name = models.CharField(max_length=200)
	date = models.DateField()
	time = models.TimeField()
	status = models.CharField(
		max_length=20,
		choices=STATUS_CHOICES,
		default=STATUS_SCHEDULED,
	)
	notes = models.TextField(blank=True, default='')
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		db_table = 'appointments_appointment'
		ordering = ['-date', 'time', '-id']

	def __str__(self) -> str:
		return f"Appointment #{self.id} ({self.patient_name} {self.date} {self.time:%H:%M})"
