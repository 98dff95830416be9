"""
Patients App - Admin
"""

from django.contrib import admin

from mediconsult_backend.core.admin import mediconsult_admin_site
from mediconsult_backend.patients.models import Patient


@admin.register(Patient, site=mediconsult_admin_site)
class PatientAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "age",
        "gender",
        "phone",
        "doctor",
        "updated_at",
    )
    list_filter = ("gender", "created_at", "updated_at")
    search_fields = ("name", "phone", "email", "doctor__email")
    ordering = ("-updated_at",)
    list_per_page = 50

    readonly_fields = ("id", "created_at", "updated_at")

    fieldsets = (
        ("Patient", {
            "fields": ("doctor", "name", "age", "gender", "phone", "email", "address", "emergency_contact")
        }),
        ("History", {
            "fields": ("allergies", "comorbidities", "smoking_history", "occupational_exposure", "insurance_id")
        }),
        ("System", {
            "fields": ("id", "created_at", "updated_at"),
            "classes": ("collapse",)
        }),
    )
