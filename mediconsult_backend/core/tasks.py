from celery import shared_task

from .emails import send_verification_email, send_welcome_email


@shared_task(name='core.send_verification_email')
def send_verification_email_task(email, token, name):
    send_verification_email(email, token, name)


@shared_task(name='core.send_welcome_email')
def send_welcome_email_task(email, name):
    send_welcome_email(email, name)
