"""Admission control against event and tier capacities.

Counters are only ever moved by a single conditional UPDATE, so two concurrent admissions for the
last seat cannot both succeed: the database re-evaluates the WHERE clause against the committed row.
"""

from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import F
from django.utils.translation import gettext_lazy as _

from events.exceptions import CapacityExceededError, InactiveTierError, NotFoundError, StoreConflictError
from events.models import Event, TicketTier

logger = structlog.get_logger(__name__)

_ADMISSION_ATTEMPTS = 2


def check_event_availability(event_id: UUID) -> bool:
    """Whether the event can admit one more ticket. Always reads the current row."""
    row = Event.objects.filter(pk=event_id).values("capacity", "tickets_issued").first()
    if row is None:
        raise NotFoundError(_("Event not found."))
    return row["capacity"] is None or row["tickets_issued"] < row["capacity"]


def check_tier_availability(tier_id: UUID) -> bool:
    """Whether the tier is on sale and can admit one more ticket."""
    row = TicketTier.objects.filter(pk=tier_id).values("capacity", "tickets_sold", "is_active").first()
    if row is None:
        raise NotFoundError(_("Ticket tier not found."))
    if not row["is_active"]:
        return False
    return row["capacity"] is None or row["tickets_sold"] < row["capacity"]


def admit_event(event_id: UUID) -> None:
    """Count one more ticket against the event, or raise CapacityExceededError."""
    for attempt in range(_ADMISSION_ATTEMPTS):
        updated = (
            Event.objects.with_room().filter(pk=event_id).update(tickets_issued=F("tickets_issued") + 1)
        )
        if updated:
            logger.debug("event_admission_granted", event_id=str(event_id))
            return
        if not check_event_availability(event_id):
            logger.info("event_sold_out", event_id=str(event_id))
            raise CapacityExceededError(_("This event is sold out."))
        logger.warning("event_admission_conflict", event_id=str(event_id), attempt=attempt)
    raise StoreConflictError()


def admit_tier(tier_id: UUID) -> None:
    """Count one more ticket against the tier, or raise CapacityExceededError / InactiveTierError."""
    for attempt in range(_ADMISSION_ATTEMPTS):
        updated = (
            TicketTier.objects.active()
            .with_room()
            .filter(pk=tier_id)
            .update(tickets_sold=F("tickets_sold") + 1)
        )
        if updated:
            logger.debug("tier_admission_granted", tier_id=str(tier_id))
            return
        tier = TicketTier.objects.filter(pk=tier_id).only("is_active").first()
        if tier is None:
            raise NotFoundError(_("Ticket tier not found."))
        if not tier.is_active:
            raise InactiveTierError()
        if not check_tier_availability(tier_id):
            logger.info("tier_sold_out", tier_id=str(tier_id))
            raise CapacityExceededError(_("This ticket tier is sold out."))
        logger.warning("tier_admission_conflict", tier_id=str(tier_id), attempt=attempt)
    raise StoreConflictError()


@transaction.atomic
def admit(event_id: UUID, tier_id: UUID | None = None) -> None:
    """Admit one ticket against the tier (if any) and the event.

    Both increments commit together or not at all.
    """
    if tier_id is not None:
        admit_tier(tier_id)
    admit_event(event_id)
