"""Signal handlers for notification system."""

import typing as t
from functools import partial

import structlog
from django.db import transaction
from django.dispatch import receiver

from notifications.signals import ticket_lifecycle

logger = structlog.get_logger(__name__)


def _enqueue_delivery(lifecycle_event: str, recipient: str, context: dict[str, t.Any]) -> None:
    from notifications.tasks import deliver_lifecycle_email

    try:
        deliver_lifecycle_email.delay(lifecycle_event=lifecycle_event, recipient=recipient, context=context)
    except Exception:
        # The transition is already committed; a broker outage must not surface to the caller.
        logger.exception("lifecycle_email_enqueue_failed", lifecycle_event=lifecycle_event)


@receiver(ticket_lifecycle)
def handle_ticket_lifecycle(sender: t.Any, **kwargs: t.Any) -> None:
    """Schedule the lifecycle email once the current transaction commits.

    If the transaction rolls back, nothing is sent.
    """
    lifecycle_event = kwargs.get("lifecycle_event")
    recipient = kwargs.get("recipient")
    if not lifecycle_event or not recipient:
        logger.error("invalid_lifecycle_event", lifecycle_event=lifecycle_event, has_recipient=bool(recipient))
        return

    transaction.on_commit(
        partial(_enqueue_delivery, str(lifecycle_event), recipient, kwargs.get("context", {})),
        robust=True,
    )
