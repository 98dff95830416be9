import random

from django.db import transaction

from mediconsult_backend.core.seeders import get_demo_doctor
from mediconsult_backend.patients.models import Patient

PATIENTS = [
    ("Ravi Kumar", "male", "Coal mining"),
    ("Meera Nair", "female", ""),
    ("Arjun Das", "male", "Textile mill"),
    ("Leela Menon", "female", ""),
    ("Sanjay Patel", "male", "Construction"),
    ("Fatima Sheikh", "female", "Bakery"),
]


def seed_patients(flush: bool = False) -> dict:
    doctor = get_demo_doctor()
    with transaction.atomic():
        if flush:
            Patient.objects.filter(doctor=doctor).delete()

        created = 0
        for index, (name, gender, exposure) in enumerate(PATIENTS, start=1):
            _, was_created = Patient.objects.get_or_create(
                doctor=doctor,
                phone=f"98000000{index:02d}",
                defaults={
                    "name": name,
                    "age": random.randint(25, 80),
                    "gender": gender,
                    "occupational_exposure": exposure,
                    "smoking_history": random.choice(["Never", "Former smoker", "Current smoker", ""]),
                },
            )
            created += int(was_created)

    return {"patients": created}
