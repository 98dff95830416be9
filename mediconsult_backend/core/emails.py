"""Transactional emails (verification + welcome), rendered from templates."""

import logging
from urllib.parse import urlencode

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


def verification_url(token: str) -> str:
    return f"{settings.CLIENT_URL.rstrip('/')}/verify-email?{urlencode({'token': token})}"


def _send(template: str, subject: str, recipient: str, context: dict) -> None:
    text_body = render_to_string(f'core/emails/{template}.txt', context)
    html_body = render_to_string(f'core/emails/{template}.html', context)
    send_mail(
        subject,
        text_body,
        settings.DEFAULT_FROM_EMAIL,
        [recipient],
        html_message=html_body,
    )
    logger.info('%s email sent to %s', template, recipient)


def send_verification_email(email: str, token: str, name: str) -> None:
    ttl_hours = int(settings.EMAIL_VERIFICATION_TTL.total_seconds() // 3600)
    _send(
        'verification',
        'MediConsult - Verify Your Email Address',
        email,
        {
            'name': name,
            'email': email,
            'verification_url': verification_url(token),
            'ttl_hours': ttl_hours,
        },
    )


def send_welcome_email(email: str, name: str) -> None:
    _send(
        'welcome',
        'Welcome to MediConsult',
        email,
        {
            'name': name,
            'login_url': f"{settings.CLIENT_URL.rstrip('/')}/login",
        },
    )
