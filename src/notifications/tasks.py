"""Celery tasks for lifecycle email delivery."""

import typing as t

import structlog
from celery import shared_task

from common.tasks import send_email
from notifications.service.templates.registry import get_template

logger = structlog.get_logger(__name__)


@shared_task(autoretry_for=(OSError,), retry_backoff=True, max_retries=3)
def deliver_lifecycle_email(*, lifecycle_event: str, recipient: str, context: dict[str, t.Any]) -> None:
    """Render and send the email for one lifecycle event.

    Runs after the ticket transition committed; failures stay in the worker.
    """
    template = get_template(lifecycle_event)
    try:
        send_email(
            to=recipient,
            subject=template.get_email_subject(context),
            body=template.get_email_text_body(context),
        )
    except Exception:
        logger.exception("lifecycle_email_failed", lifecycle_event=lifecycle_event, ticket_id=context.get("ticket_id"))
        raise
    logger.info("lifecycle_email_sent", lifecycle_event=lifecycle_event, ticket_id=context.get("ticket_id"))
