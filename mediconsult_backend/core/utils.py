import logging

from django.db import transaction
from django.db.models import F

from .models import AuditLog, Counter

logger = logging.getLogger(__name__)


def log_patient_action(user, action, patient_id=None, meta=None):
    """Record a patient-data access in the audit log; failures are only logged."""

    role_name = ''
    try:
        role = getattr(user, 'role', None)
        if role is not None:
            role_name = getattr(role, 'name', '') or ''
    except Exception:
        role_name = ''

    try:
        AuditLog.objects.create(
            user=user if getattr(user, 'is_authenticated', False) else None,
            role_name=role_name,
            action=action,
            patient_id=patient_id,
            meta=meta,
        )
    except Exception:
        logger.exception('AuditLog write failed (action=%s, patient_id=%s)', action, patient_id)


def next_sequence(name: str) -> int:
    """Atomically increment the named counter and return its new value.

    The UPDATE holds the row lock until the surrounding transaction commits,
    so concurrent callers always observe distinct values.
    """
    with transaction.atomic():
        if not Counter.objects.filter(name=name).update(seq=F('seq') + 1):
            Counter.objects.get_or_create(name=name)
            Counter.objects.filter(name=name).update(seq=F('seq') + 1)
        return Counter.objects.values_list('seq', flat=True).get(name=name)
