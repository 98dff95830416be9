"""
Prescriptions App - Admin
"""

from django.contrib import admin

from mediconsult_backend.core.admin import mediconsult_admin_site
from mediconsult_backend.prescriptions.models import Prescription, SavedSymptom


@admin.register(Prescription, site=mediconsult_admin_site)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ("prescription_number", "patient_name", "doctor", "date_issued")
    list_filter = ("date_issued",)
    search_fields = ("prescription_number", "patient_name", "diagnosis_text", "doctor__email")
    ordering = ("-date_issued",)
    date_hierarchy = "date_issued"
    list_per_page = 50

    readonly_fields = ("prescription_number", "patient_name", "diagnosis_text", "created_at", "updated_at")

    fieldsets = (
        ("Prescription", {
            "fields": ("prescription_number", "doctor", "patient", "date_issued", "notes")
        }),
        ("Clinical sections", {
            "fields": ("patient_snapshot", "diagnosis", "lifestyle", "vitals", "tests", "medications")
        }),
        ("Search", {
            "fields": ("patient_name", "diagnosis_text", "created_at", "updated_at"),
            "classes": ("collapse",)
        }),
    )


@admin.register(SavedSymptom, site=mediconsult_admin_site)
class SavedSymptomAdmin(admin.ModelAdmin):
    list_display = ("symptom", "doctor", "count", "last_used")
    search_fields = ("symptom", "doctor__email")
    ordering = ("-count", "-last_used")
