"""Release unpaid tickets once their grace window has passed.

A ticket is stale when it is still unpaid and strictly older than TICKET_GRACE_WINDOW_HOURS. The
periodic sweep and the inline check done at the door apply the same rule.
"""

from datetime import datetime

import structlog
from django.utils import timezone

from events.models import Ticket
from events.models.ticket import TicketQuerySet
from events.service import ticket_service

logger = structlog.get_logger(__name__)


def sweep(now: datetime | None = None, queryset: TicketQuerySet | None = None) -> int:
    """Expire every stale ticket in one statement. Returns how many tickets changed.

    ``queryset`` narrows the sweep, e.g. to the tickets selected in the admin.
    """
    now = now or timezone.now()
    tickets = queryset if queryset is not None else Ticket.objects.all()
    expired = tickets.stale(now).update(payment_status=Ticket.PaymentStatus.EXPIRED, expired_at=now, updated_at=now)
    logger.info("expired_tickets_swept", count=expired)
    return expired


def is_stale(ticket: Ticket, now: datetime | None = None) -> bool:
    return ticket.is_stale(now)


def expire_if_stale(ticket: Ticket, now: datetime | None = None) -> bool:
    """Expire the ticket if it is stale. Returns whether it is expired afterwards."""
    if ticket.payment_status == Ticket.PaymentStatus.EXPIRED:
        return True
    if not ticket.is_stale(now):
        return False
    ticket_service.expire(ticket)
    return True
