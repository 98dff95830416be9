"""Appointments App URLs.

Prefix: /api/
Routes:
    GET/POST             /api/appointments/       - List/Create appointments
    GET/PUT/PATCH/DEL    /api/appointments/<pk>/  - Retrieve/Update/Delete
"""

from django.urls import path

from mediconsult_backend.appointments.views import (
    AppointmentDetailView,
    AppointmentListCreateView,
)

app_name = 'appointments'

urlpatterns = [
    path('appointments/', AppointmentListCreateView.as_view(), name='list'),
    path('appointments/<int:pk>/', AppointmentDetailView.as_view(), name='detail'),
]
