"""Core notification dispatcher service.

The ticketing services call into this module and never touch mail or Celery directly.
"""

import typing as t
from datetime import datetime

import structlog

from notifications.enums import LifecycleEvent
from notifications.signals import ticket_lifecycle

if t.TYPE_CHECKING:
    from events.models import Ticket

logger = structlog.get_logger(__name__)


def emit(lifecycle_event: LifecycleEvent, *, recipient: str, context: dict[str, t.Any]) -> None:
    """Announce a lifecycle event. Delivery happens after the surrounding transaction commits."""
    logger.debug("lifecycle_event_emitted", lifecycle_event=lifecycle_event)
    ticket_lifecycle.send(sender=LifecycleEvent, lifecycle_event=lifecycle_event, recipient=recipient, context=context)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def build_ticket_context(ticket: "Ticket") -> dict[str, t.Any]:
    """Flatten a ticket into JSON-serializable values for the email task."""
    event = ticket.event
    return {
        "ticket_id": str(ticket.id),
        "ticket_code": ticket.ticket_code,
        "attendee_name": ticket.attendee_name,
        "attendee_email": ticket.attendee_email,
        "event_title": event.title,
        "event_venue": event.venue,
        "event_start": _iso(event.start),
        "tier_name": ticket.tier.name if ticket.tier_id else None,
        "payment_status": ticket.payment_status,
        "validated_at": _iso(ticket.validated_at),
        "download_window_closes_at": _iso(ticket.download_window_closes_at()),
    }


def emit_ticket_event(lifecycle_event: LifecycleEvent, ticket: "Ticket") -> None:
    emit(lifecycle_event, recipient=ticket.attendee_email, context=build_ticket_context(ticket))
