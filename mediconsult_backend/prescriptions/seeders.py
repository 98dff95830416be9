import random
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from mediconsult_backend.core.seeders import get_demo_doctor
from mediconsult_backend.prescriptions import services
from mediconsult_backend.prescriptions.models import Prescription

DIAGNOSES = [
    ("COPD", "Hypertension", ["cough", "dyspnea", "wheeze"]),
    ("Asthma", "", ["wheeze", "chest tightness"]),
    ("Community-acquired pneumonia", "", ["fever", "cough"]),
    ("Pulmonary tuberculosis", "Anaemia", ["night sweats", "weight loss", "cough"]),
]

MEDICATIONS = [
    ("Tiotropium", "18mcg", "OD", "30 days", "inhaled"),
    ("Salbutamol", "100mcg", "PRN", "30 days", "inhaled"),
    ("Amoxicillin", "500mg", "TDS", "7 days", "oral"),
    ("Amlodipine", "5mg", "OD", "30 days", "oral"),
]

TESTS = ["Spirometry", "Chest X-ray", "CBC", "Sputum AFB", "HRCT chest"]


def seed_prescriptions(flush: bool = False) -> dict:
    doctor = get_demo_doctor()
    with transaction.atomic():
        if flush:
            Prescription.objects.filter(doctor=doctor).delete()
        if Prescription.objects.filter(doctor=doctor).exists():
            return {"prescriptions": 0}

        now = timezone.now()
        created = 0
        for patient in doctor.patients.all():
            primary, secondary, symptoms = random.choice(DIAGNOSES)
            meds = random.sample(MEDICATIONS, k=2)
            Prescription.objects.create(
                prescription_number=services.next_prescription_number(),
                doctor=doctor,
                patient=patient,
                patient_snapshot={
                    "id": patient.id,
                    "name": patient.name,
                    "age": patient.age,
                    "gender": patient.gender,
                    "phone": patient.phone,
                    "email": patient.email,
                },
                diagnosis=[{
                    "primaryDiagnosis": primary,
                    "secondaryDiagnosis": secondary,
                    "symptoms": symptoms,
                    "duration": f"{random.randint(1, 12)} weeks",
                    "severity": random.choice(["mild", "moderate", "severe"]),
                    "notes": "",
                }],
                lifestyle={
                    "dietaryAdvice": ["High protein diet"],
                    "exerciseRecommendations": ["Pulmonary rehabilitation"],
                    "lifestyleModifications": ["Smoking cessation"],
                    "followUpInstructions": "Review in 2 weeks",
                },
                vitals={"bloodPressure": "130/85", "oxygenSaturation": f"{random.randint(90, 99)}%"},
                tests={"orderedTests": random.sample(TESTS, k=2), "labResults": [], "imagingResults": []},
                medications=[
                    {"name": n, "dosage": d, "frequency": f, "duration": dur, "route": r}
                    for n, d, f, dur, r in meds
                ],
                date_issued=now - timedelta(days=random.randint(0, 60)),
            )
            created += 1

    return {"prescriptions": created}
