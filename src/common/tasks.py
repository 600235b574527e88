"""Common tasks."""

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives

logger = structlog.get_logger(__name__)


@shared_task
def send_email(*, to: str | list[str], subject: str, body: str, html_body: str | None = None) -> None:
    """Send an email.

    Args:
        to (str): The email address, or a list of addresses.
        subject (str): The email subject.
        body (str): The email body.
        html_body (str | None): The HTML email body.

    Returns:
        None
    """
    recipients = [to] if isinstance(to, str) else to
    email_msg = EmailMultiAlternatives(
        subject=subject,
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        bcc=recipients,
    )
    if html_body:  # pragma: no branch
        email_msg.attach_alternative(html_body, "text/html")
    email_msg.send(fail_silently=False)
    logger.info("email_sent", recipients=len(recipients))
