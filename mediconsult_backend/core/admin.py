"""
MediConsult - Custom Admin Site & Admin Classes
"""

from django.contrib import admin
from django.contrib.admin import AdminSite
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.html import format_html
from django.utils.safestring import mark_safe

from .models import AuditLog, Counter, Role, User


# ============================================================================
# Custom AdminSite
# ============================================================================
class MediConsultAdminSite(AdminSite):
    """Admin site with MediConsult branding."""
    site_header = "MediConsult Administration"
    site_title = "MediConsult Admin"
    index_title = "Overview"
    site_url = None


mediconsult_admin_site = MediConsultAdminSite(name='mediconsultadmin')


# ============================================================================
# Role Admin
# ============================================================================
@admin.register(Role, site=mediconsult_admin_site)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "label", "user_count")
    search_fields = ("name", "label")
    ordering = ("name",)

    def user_count(self, obj):
        return obj.users.count()
    user_count.short_description = "Users"


# ============================================================================
# User Admin
# ============================================================================
@admin.register(User, site=mediconsult_admin_site)
class UserAdmin(DjangoUserAdmin):
    """Email-identified users with doctor profile fields."""

    list_display = (
        "email",
        "name",
        "role",
        "specialization",
        "verified_badge",
        "is_active",
    )
    list_filter = ("role", "is_email_verified", "is_staff", "is_active")
    search_fields = ("email", "name", "license_number", "phone")
    ordering = ("email",)
    list_per_page = 50

    fieldsets = (
        ("Authentication", {
            "fields": ("email", "password")
        }),
        ("Profile", {
            "fields": ("name", "phone", "role", "license_number", "specialization")
        }),
        ("Verification", {
            "fields": ("is_email_verified", "email_verification_expires"),
        }),
        ("Permissions", {
            "fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions"),
            "classes": ("collapse",)
        }),
        ("Timestamps", {
            "fields": ("last_login", "date_joined", "created_at", "updated_at"),
            "classes": ("collapse",)
        }),
    )

    add_fieldsets = (
        ("New user", {
            "classes": ("wide",),
            "fields": ("email", "name", "phone", "role", "password1", "password2"),
        }),
    )

    readonly_fields = ("last_login", "date_joined", "created_at", "updated_at", "email_verification_expires")

    def verified_badge(self, obj):
        if obj.is_email_verified:
            return mark_safe('<span style="color: #34A853;">verified</span>')
        return mark_safe('<span style="color: #9AA0A6; font-style: italic;">pending</span>')
    verified_badge.short_description = "Email"


# ============================================================================
# Counter Admin
# ============================================================================
@admin.register(Counter, site=mediconsult_admin_site)
class CounterAdmin(admin.ModelAdmin):
    list_display = ("name", "seq")
    readonly_fields = ("name",)

    def has_add_permission(self, request):
        return False


# ============================================================================
# AuditLog Admin
# ============================================================================
@admin.register(AuditLog, site=mediconsult_admin_site)
class AuditLogAdmin(admin.ModelAdmin):
    """Audit log entries (read-only)."""

    list_display = (
        "id",
        "timestamp",
        "user_display",
        "role_name",
        "action",
        "patient_id",
    )
    list_filter = ("action", "role_name", "timestamp")
    search_fields = ("user__email", "action", "patient_id")
    ordering = ("-timestamp", "-id")
    list_per_page = 100
    date_hierarchy = "timestamp"

    readonly_fields = (
        "id",
        "user",
        "role_name",
        "action",
        "patient_id",
        "timestamp",
        "meta",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return request.user.is_superuser

    def user_display(self, obj):
        if obj.user:
            return format_html(
                '<a href="/admin/core/user/{}/change/">{}</a>',
                obj.user.id, obj.user.email
            )
        return mark_safe('<span style="color: #9AA0A6; font-style: italic;">System</span>')
    user_display.short_description = "User"
