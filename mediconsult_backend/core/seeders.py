import random

from django.db import transaction

from .models import AuditLog, Role, User

RANDOM_SEED = 42

DEMO_DOCTOR_EMAIL = "demo.doctor@mediconsult.local"
DEMO_PASSWORD = "demo1234"


def seed_core(flush: bool = False) -> dict:
    """
    Seeds:
    - roles (doctor, admin)
    - a verified demo doctor

    With flush=True, audit logs and every ``@mediconsult.local`` account are
    removed first (superusers are kept).
    """
    random.seed(RANDOM_SEED)

    stats: dict[str, int] = {}

    with transaction.atomic():
        if flush:
            AuditLog.objects.all().delete()
            User.objects.filter(is_superuser=False, email__endswith="@mediconsult.local").delete()

        roles = [Role.get_by_name(name) for name in (Role.DOCTOR, Role.ADMIN)]
        stats["core_roles"] = len(roles)

        get_demo_doctor()
        stats["core_users"] = User.objects.filter(email__endswith="@mediconsult.local").count()

    return stats


def get_demo_doctor() -> User:
    doctor = User.objects.filter(email=DEMO_DOCTOR_EMAIL).first()
    if doctor is None:
        doctor = User.objects.create_user(
            email=DEMO_DOCTOR_EMAIL,
            password=DEMO_PASSWORD,
            name="Dr. Demo Sharma",
            phone="+91 90000 00000",
            role=Role.get_by_name(Role.DOCTOR),
            license_number="MCI-000123",
            specialization="Pulmonology",
            is_email_verified=True,
        )
    return doctor
