"""
Appointments App - Admin
"""

from django.contrib import admin

from mediconsult_backend.appointments.models import Appointment
from mediconsult_backend.core.admin import mediconsult_admin_site


@admin.register(Appointment, site=mediconsult_admin_site)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ("id", "date", "time", "patient_name", "doctor_name", "status", "doctor")
    list_filter = ("status", "date")
    search_fields = ("patient_name", "doctor_name", "doctor__email")
    ordering = ("-date", "time")
    date_hierarchy = "date"
    list_per_page = 50
    readonly_fields = ("created_at", "updated_at")
