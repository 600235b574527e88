"""Door scanning.

A scan never raises for an ordinary rejection: every outcome the scanner has to show is returned
as a ScanResult. Checks run in a fixed order: format, lookup, authorization, expiry, previous use,
payment, then the atomic validation itself.
"""

import typing as t
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import structlog
from django.db import models, transaction
from django.utils.translation import gettext_lazy as _

from events.exceptions import AlreadyUsedError, InvalidTransitionError
from events.models import Ticket
from events.service import expiry_sweeper, ticket_service
from events.utils import normalize_ticket_code

if t.TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser

logger = structlog.get_logger(__name__)


class ScanOutcome(models.TextChoices):
    VALID = "valid", _("Valid ticket.")
    ALREADY_USED = "already_used", _("Ticket already used.")
    EXPIRED = "expired", _("Ticket expired: the booking was not paid within 24 hours.")
    PAYMENT_REQUIRED = "payment_required", _("Payment required.")
    UNAUTHORIZED = "unauthorized", _("You can only validate tickets for your own events.")
    NOT_FOUND = "not_found", _("This ticket does not exist.")
    INVALID_FORMAT = "invalid_format", _("Invalid ticket code format.")


@dataclass(frozen=True)
class ScanResult:
    outcome: ScanOutcome
    ticket: Ticket | None = None
    validated_at: datetime | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == ScanOutcome.VALID

    @property
    def message(self) -> str:
        return str(self.outcome.label)


def scan(code: str, scanner: "AbstractBaseUser") -> ScanResult:
    """Validate the ticket behind a scanned code on behalf of the event organizer."""
    ticket_code = normalize_ticket_code(code)
    if ticket_code is None:
        return _log(ScanResult(ScanOutcome.INVALID_FORMAT), scanner)

    ticket = Ticket.objects.full().filter(ticket_code=ticket_code).first()
    result = _admit(ticket, scanner, collect_cash=False)
    return _log(result, scanner)


def confirm_cash_and_validate(ticket_id: UUID, scanner: "AbstractBaseUser") -> ScanResult:
    """Take cash for a pay-at-venue ticket and admit the holder in one transaction."""
    ticket = Ticket.objects.full().filter(pk=ticket_id).first()
    result = _admit(ticket, scanner, collect_cash=True)
    return _log(result, scanner, collect_cash=True)


def _admit(ticket: Ticket | None, scanner: "AbstractBaseUser", *, collect_cash: bool) -> ScanResult:
    if ticket is None:
        return ScanResult(ScanOutcome.NOT_FOUND)
    if not ticket.event.is_organized_by(scanner):
        return ScanResult(ScanOutcome.UNAUTHORIZED)

    pre_check = _gate(ticket, collect_cash=collect_cash)
    if pre_check is not None:
        return pre_check

    try:
        with transaction.atomic():
            if ticket.payment_status == Ticket.PaymentStatus.PAY_AT_VENUE:
                ticket = ticket_service.confirm_cash_at_venue(ticket)
            ticket = ticket_service.validate(ticket, validated_by=scanner)
    except AlreadyUsedError as e:
        return ScanResult(ScanOutcome.ALREADY_USED, ticket=ticket, validated_at=e.validated_at)
    except InvalidTransitionError:
        # the ticket changed state between our read and the update
        ticket.refresh_from_db()
        return _gate(ticket, collect_cash=collect_cash) or ScanResult(ScanOutcome.PAYMENT_REQUIRED, ticket=ticket)
    return ScanResult(ScanOutcome.VALID, ticket=ticket, validated_at=ticket.validated_at)


def _gate(ticket: Ticket, *, collect_cash: bool) -> ScanResult | None:
    """Return the rejection for a ticket that cannot be admitted as it stands, or None."""
    try:
        expired = expiry_sweeper.expire_if_stale(ticket)
    except InvalidTransitionError:
        # paid concurrently; judge the fresh row
        ticket.refresh_from_db()
        expired = False
    if expired:
        return ScanResult(ScanOutcome.EXPIRED, ticket=ticket)
    if ticket.is_validated:
        return ScanResult(ScanOutcome.ALREADY_USED, ticket=ticket, validated_at=ticket.validated_at)
    if ticket.payment_status == Ticket.PaymentStatus.PENDING:
        return ScanResult(ScanOutcome.PAYMENT_REQUIRED, ticket=ticket)
    if ticket.payment_status == Ticket.PaymentStatus.PAY_AT_VENUE and not collect_cash:
        return ScanResult(ScanOutcome.PAYMENT_REQUIRED, ticket=ticket)
    return None


def _log(result: ScanResult, scanner: "AbstractBaseUser", *, collect_cash: bool = False) -> ScanResult:
    logger.info(
        "ticket_scanned",
        outcome=result.outcome,
        ticket_id=str(result.ticket.id) if result.ticket else None,
        scanner_id=str(scanner.pk),
        collect_cash=collect_cash,
    )
    return result
