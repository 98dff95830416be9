"""Prescriptions App URLs.

Prefix: /api/
Routes:
    GET/POST        /api/prescriptions/                  - List/Issue prescriptions
    GET/PUT/DELETE  /api/prescriptions/<pk>/             - Retrieve/Replace/Delete
    GET             /api/prescriptions/saved-diagnoses/  - Ranked diagnoses
    GET/POST        /api/prescriptions/saved-symptoms/   - Ranked symptoms / save a symptom
    GET             /api/prescriptions/saved-tests/      - Ranked ordered tests
    GET             /api/prescriptions/saved-medicines/  - Ranked medicine names
"""

from django.urls import path

from mediconsult_backend.prescriptions.views import (
    PrescriptionDetailView,
    PrescriptionListCreateView,
    SavedDiagnosesView,
    SavedMedicinesView,
    SavedSymptomsView,
    SavedTestsView,
)

app_name = 'prescriptions'

urlpatterns = [
    path('prescriptions/', PrescriptionListCreateView.as_view(), name='list'),
    path('prescriptions/saved-diagnoses/', SavedDiagnosesView.as_view(), name='saved-diagnoses'),
    path('prescriptions/saved-symptoms/', SavedSymptomsView.as_view(), name='saved-symptoms'),
    path('prescriptions/saved-tests/', SavedTestsView.as_view(), name='saved-tests'),
    path('prescriptions/saved-medicines/', SavedMedicinesView.as_view(), name='saved-medicines'),
    path('prescriptions/<int:pk>/', PrescriptionDetailView.as_view(), name='detail'),
]
