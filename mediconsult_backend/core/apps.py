"""
Core App Configuration
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Accounts, roles, counters and the audit log."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'mediconsult_backend.core'
    label = 'core'
    verbose_name = 'Core (Users & Roles)'
