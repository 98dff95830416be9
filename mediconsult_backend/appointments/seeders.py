import random
from datetime import time, timedelta

from django.db import transaction
from django.utils import timezone

from mediconsult_backend.appointments.models import Appointment
from mediconsult_backend.core.seeders import get_demo_doctor


def seed_appointments(flush: bool = False) -> dict:
    doctor = get_demo_doctor()
    with transaction.atomic():
        if flush:
            Appointment.objects.filter(doctor=doctor).delete()
        if Appointment.objects.filter(doctor=doctor).exists():
            return {"appointments": 0}

        today = timezone.localdate()
        created = 0
        for offset, patient in enumerate(doctor.patients.all()):
            day = today + timedelta(days=offset - 2)
            Appointment.objects.create(
                doctor=doctor,
                patient_name=patient.name,
                doctor_name=doctor.name,
                date=day,
                time=time(9 + offset % 8, random.choice([0, 30])),
                status=Appointment.STATUS_COMPLETED if day < today else Appointment.STATUS_SCHEDULED,
            )
            created += 1

    return {"appointments": created}
