from django.apps import AppConfig


class PrescriptionsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'mediconsult_backend.prescriptions'
    label = 'prescriptions'
    verbose_name = 'Prescriptions'
