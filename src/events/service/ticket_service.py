"""Ticket state machine.

States: pending, pay_at_venue, paid, verified, expired. Every transition is one conditional UPDATE
filtered on the source state, so the database decides which of two concurrent callers wins.
"""

import typing as t
from dataclasses import dataclass

import structlog
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from events.exceptions import (
    AlreadyUsedError,
    InvalidTransitionError,
    NotFoundError,
    StoreConflictError,
    UnauthorizedError,
)
from events.models import (
    CASH_AT_VENUE_REF,
    MANUAL_ISSUE_REF,
    PAY_AT_VENUE_REF,
    Event,
    PaymentMethod,
    Ticket,
    TicketTier,
)
from events.service import capacity_ledger
from events.utils import generate_ticket_code
from notifications.enums import LifecycleEvent
from notifications.service.dispatcher import emit_ticket_event

if t.TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser

logger = structlog.get_logger(__name__)

TICKET_CODE_ATTEMPTS = 5
_TRANSITION_ATTEMPTS = 2

PaymentStatus = Ticket.PaymentStatus


@dataclass(frozen=True)
class Attendee:
    name: str
    email: str
    phone: str = ""


def create_free(event: Event, attendee: Attendee, tier: TicketTier | None = None) -> Ticket:
    """Issue a ticket for a free event. It is paid from the start."""
    if not event.is_free:
        raise InvalidTransitionError(_("This event requires payment."))
    return _issue(event, attendee, tier, PaymentStatus.PAID)


def create_paid_pending(
    event: Event,
    attendee: Attendee,
    tier: TicketTier | None = None,
    payment_method: PaymentMethod = PaymentMethod.ONLINE,
) -> Ticket:
    """Reserve a ticket for a paid event. It stays unpaid until payment is confirmed or it expires."""
    if event.is_free:
        raise InvalidTransitionError(_("This event is free; claim a free ticket instead."))
    match payment_method:
        case PaymentMethod.ONLINE:
            return _issue(event, attendee, tier, PaymentStatus.PENDING)
        case PaymentMethod.VENUE:
            return _issue(event, attendee, tier, PaymentStatus.PAY_AT_VENUE, payment_ref_id=PAY_AT_VENUE_REF)
        case _:
            raise InvalidTransitionError(_("Unknown payment method."))


def issue_manual(
    event: Event, attendee: Attendee, issued_by: "AbstractBaseUser", tier: TicketTier | None = None
) -> Ticket:
    """Issue a paid ticket on the organizer's behalf, e.g. for guests or cash sold in advance."""
    if not event.is_organized_by(issued_by):
        raise UnauthorizedError(_("Only the organizer can issue tickets for this event."))
    ticket = _issue(event, attendee, tier, PaymentStatus.PAID, payment_ref_id=MANUAL_ISSUE_REF)
    logger.info("ticket_issued_manually", ticket_id=str(ticket.id), issued_by=str(issued_by.pk))
    return ticket


def confirm_online_payment(ticket: Ticket, payment_ref: str) -> Ticket:
    """Record a reconciled online payment: pending -> verified.

    Repeating the confirmation with the same reference returns the ticket unchanged.
    """
    now = timezone.now()
    updated = (
        Ticket.objects.within_grace(now)
        .filter(pk=ticket.pk, payment_status=PaymentStatus.PENDING)
        .update(payment_status=PaymentStatus.VERIFIED, payment_ref_id=payment_ref, verified_at=now, updated_at=now)
    )
    ticket.refresh_from_db()
    if not updated:
        if ticket.payment_status == PaymentStatus.VERIFIED and ticket.payment_ref_id == payment_ref:
            return ticket
        raise InvalidTransitionError(
            _("Cannot confirm payment for a ticket that is %(status)s.") % {"status": ticket.get_payment_status_display()}
        )
    logger.info("ticket_payment_verified", ticket_id=str(ticket.id))
    emit_ticket_event(LifecycleEvent.PAYMENT_CONFIRMED, ticket)
    return ticket


def confirm_cash_at_venue(ticket: Ticket) -> Ticket:
    """Record cash collected at the door: pay_at_venue -> paid."""
    now = timezone.now()
    updated = (
        Ticket.objects.within_grace(now)
        .filter(pk=ticket.pk, payment_status=PaymentStatus.PAY_AT_VENUE)
        .update(payment_status=PaymentStatus.PAID, payment_ref_id=CASH_AT_VENUE_REF, updated_at=now)
    )
    ticket.refresh_from_db()
    if not updated:
        raise InvalidTransitionError(
            _("Cannot take cash for a ticket that is %(status)s.") % {"status": ticket.get_payment_status_display()}
        )
    logger.info("ticket_cash_collected", ticket_id=str(ticket.id))
    emit_ticket_event(LifecycleEvent.PAYMENT_CONFIRMED, ticket)
    return ticket


def expire(ticket: Ticket) -> Ticket:
    """Release an unpaid ticket: pending|pay_at_venue -> expired. Expiring twice is a no-op."""
    now = timezone.now()
    updated = (
        Ticket.objects.unpaid()
        .filter(pk=ticket.pk)
        .update(payment_status=PaymentStatus.EXPIRED, expired_at=now, updated_at=now)
    )
    ticket.refresh_from_db()
    if updated:
        logger.info("ticket_expired", ticket_id=str(ticket.id))
        return ticket
    if ticket.payment_status == PaymentStatus.EXPIRED:
        return ticket
    raise InvalidTransitionError(_("Paid tickets cannot expire."))


def validate(ticket: Ticket, validated_by: "AbstractBaseUser | None" = None) -> Ticket:
    """Admit the ticket holder. Succeeds exactly once per ticket.

    Raises:
        AlreadyUsedError: the ticket was validated before, possibly by a concurrent scan.
        InvalidTransitionError: the ticket is not paid.
        StoreConflictError: the row kept changing underneath us.
    """
    for attempt in range(_TRANSITION_ATTEMPTS):
        now = timezone.now()
        updated = Ticket.objects.filter(
            pk=ticket.pk, is_validated=False, payment_status__in=Ticket.ADMISSIBLE_STATUSES
        ).update(is_validated=True, validated_at=now, validated_by=validated_by, updated_at=now)
        ticket.refresh_from_db()
        if updated:
            logger.info(
                "ticket_validated",
                ticket_id=str(ticket.id),
                validated_by=str(validated_by.pk) if validated_by else None,
            )
            emit_ticket_event(LifecycleEvent.TICKET_VALIDATED, ticket)
            return ticket
        if ticket.is_validated:
            raise AlreadyUsedError(validated_at=ticket.validated_at)
        if not ticket.is_admissible:
            raise InvalidTransitionError(_("Payment required."))
        logger.warning("ticket_validation_conflict", ticket_id=str(ticket.id), attempt=attempt)
    raise StoreConflictError()


def invalidate(ticket: Ticket, actor: "AbstractBaseUser") -> Ticket:
    """Undo a validation, e.g. after a mistaken scan. Organizer or staff only."""
    if not (actor.is_staff or ticket.event.is_organized_by(actor)):
        raise UnauthorizedError(_("Only the organizer can invalidate tickets for this event."))
    updated = Ticket.objects.filter(pk=ticket.pk, is_validated=True).update(
        is_validated=False, validated_at=None, validated_by=None, updated_at=timezone.now()
    )
    ticket.refresh_from_db()
    if updated:
        logger.warning("ticket_invalidated", ticket_id=str(ticket.id), actor=str(actor.pk))
    return ticket


def download_window_open(ticket: Ticket) -> bool:
    return ticket.download_window_open()


def _issue(
    event: Event,
    attendee: Attendee,
    tier: TicketTier | None,
    payment_status: str,
    *,
    payment_ref_id: str | None = None,
) -> Ticket:
    if tier is not None and tier.event_id != event.pk:
        raise NotFoundError(_("Ticket tier not found."))

    with transaction.atomic():
        capacity_ledger.admit(event.pk, tier.pk if tier else None)
        ticket = _insert_with_unique_code(
            event=event,
            tier=tier,
            attendee_name=attendee.name,
            attendee_email=attendee.email.strip().lower(),
            attendee_phone=attendee.phone,
            payment_status=payment_status,
            payment_ref_id=payment_ref_id,
        )
        emit_ticket_event(LifecycleEvent.TICKET_CLAIMED, ticket)

    logger.info(
        "ticket_created",
        ticket_id=str(ticket.id),
        event_id=str(event.pk),
        tier_id=str(tier.pk) if tier else None,
        payment_status=payment_status,
    )
    return ticket


def _insert_with_unique_code(**fields: t.Any) -> Ticket:
    for attempt in range(TICKET_CODE_ATTEMPTS):
        try:
            with transaction.atomic():
                return Ticket.objects.create(ticket_code=generate_ticket_code(), **fields)
        except DjangoValidationError as e:
            if "ticket_code" not in getattr(e, "error_dict", {}):
                raise
        except IntegrityError as e:
            # a concurrent insert can take the code between full_clean() and the INSERT
            if "ticket_code" not in str(e):
                raise
        logger.warning("ticket_code_collision", attempt=attempt)
    raise StoreConflictError(_("Could not allocate a ticket code. Please retry."))
