"""Prescription numbering and saved-suggestion read models.

Suggestions are recomputed from the doctor's prescriptions on every call, so
the same request always yields the same result for unchanged data. Each
suggestion carries ``count`` (occurrences across the prescriptions; for
symptoms, the number of diagnosis entries listing it) and ``lastUsed``
(latest ``date_issued`` among them). Ordering is count desc, then lastUsed
desc, then the value text.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from mediconsult_backend.core.utils import next_sequence
from mediconsult_backend.prescriptions.models import Prescription, SavedSymptom

logger = logging.getLogger(__name__)

PRESCRIPTION_COUNTER = 'prescription'


def format_prescription_number(serial: int) -> str:
    return f"RX-{serial:04d}"


def next_prescription_number() -> str:
    return format_prescription_number(next_sequence(PRESCRIPTION_COUNTER))


def _tally(rows, key: str, distinct: bool = False) -> list[dict]:
    """Turn (date_issued, values) rows into a ranked suggestion list.

    Every occurrence counts; with ``distinct`` a row contributes at most once
    per value.
    """
    buckets: dict[str, dict] = {}
    for issued, values in rows:
        for value in (set(values) if distinct else values):
            bucket = buckets.get(value)
            if bucket is None:
                buckets[value] = {'count': 1, 'lastUsed': issued}
                continue
            bucket['count'] += 1
            if issued > bucket['lastUsed']:
                bucket['lastUsed'] = issued

    ranked = sorted(
        buckets.items(),
        key=lambda item: (-item[1]['count'], -item[1]['lastUsed'].timestamp(), item[0]),
    )
    return [{key: value, 'count': data['count'], 'lastUsed': data['lastUsed']} for value, data in ranked]


def _clean(values) -> list[str]:
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]


def _prescription_rows(doctor, field: str):
    return Prescription.objects.filter(doctor=doctor).values_list('date_issued', field).iterator()


def saved_diagnoses(doctor) -> list[dict]:
    """Every primary and secondary diagnosis occurrence."""
    rows = []
    for issued, entries in _prescription_rows(doctor, 'diagnosis'):
        for entry in entries or []:
            entry = entry or {}
            rows.append((issued, _clean([entry.get('primaryDiagnosis'), entry.get('secondaryDiagnosis')])))
    return _tally(rows, 'diagnosis')


def saved_symptoms(doctor) -> list[dict]:
    """Symptoms, counted as the number of diagnosis entries listing them."""
    rows = []
    for issued, entries in _prescription_rows(doctor, 'diagnosis'):
        for entry in entries or []:
            rows.append((issued, _clean((entry or {}).get('symptoms') or [])))
    return _tally(rows, 'symptom', distinct=True)


def saved_tests(doctor) -> list[dict]:
    """Every ordered test occurrence."""
    rows = [
        (issued, _clean((tests or {}).get('orderedTests') or []))
        for issued, tests in _prescription_rows(doctor, 'tests')
    ]
    return _tally(rows, 'test')


def saved_medicines(doctor) -> list[dict]:
    """Every medication name occurrence."""
    rows = [
        (issued, _clean([(med or {}).get('name') for med in medications or []]))
        for issued, medications in _prescription_rows(doctor, 'medications')
    ]
    return _tally(rows, 'medicine')


def record_saved_symptom(doctor, symptom: str) -> SavedSymptom:
    """Upsert the doctor's saved symptom and bump its usage count."""
    with transaction.atomic():
        saved, created = SavedSymptom.objects.get_or_create(doctor=doctor, symptom=symptom)
        SavedSymptom.objects.filter(pk=saved.pk).update(count=F('count') + 1, last_used=timezone.now())
    saved.refresh_from_db()
    if created:
        logger.info('Saved symptom created doctor=%s symptom=%r', doctor.id, symptom)
    return saved
