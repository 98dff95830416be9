"""MediConsult URL Configuration.

API routes:
    /api/auth/          - Registration, verification, JWT login (core)
    /api/health/        - Health check (core)
    /api/patients/      - Patient records (patients)
    /api/prescriptions/ - Prescriptions + saved suggestions (prescriptions)
    /api/appointments/  - Appointments (appointments)
"""

from django.http import HttpResponse
from django.urls import include, path

from mediconsult_backend.core.admin import mediconsult_admin_site


def root(request):
    """Plain-text liveness response."""
    return HttpResponse("MediConsult backend is running.")


urlpatterns = [
    path("", root, name="root"),
    path("admin/", mediconsult_admin_site.urls),

    path("api/", include("mediconsult_backend.core.urls")),
    path("api/", include("mediconsult_backend.patients.urls")),
    path("api/", include("mediconsult_backend.prescriptions.urls")),
    path("api/", include("mediconsult_backend.appointments.urls")),
]
