"""
Development settings for the MediConsult backend.

Usage:
    DJANGO_SETTINGS_MODULE=mediconsult_backend.settings_dev python manage.py runserver
"""

from .settings import *  # noqa: F401,F403
from .settings import LOGGING, REST_FRAMEWORK

DEBUG = True

ALLOWED_HOSTS = ['*']

# Browsable API for local exploration
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
        'rest_framework.renderers.BrowsableAPIRenderer',
    ),
}

# Verification links are printed instead of mailed
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

CELERY_BROKER_URL = None
CELERY_TASK_ALWAYS_EAGER = True

LOGGING['loggers']['mediconsult_backend']['level'] = 'DEBUG'
