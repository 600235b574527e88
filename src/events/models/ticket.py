import typing as t
from datetime import datetime, timedelta

from django.conf import settings
from django.core.validators import MinValueValidator, RegexValidator
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from common.models import TimeStampedModel

TICKET_CODE_REGEX = r"^[A-Z0-9]{8}-[A-Z0-9]{8}$"

# payment_ref_id sentinels for tickets that never go through the online processor
PAY_AT_VENUE_REF = "PAY_AT_VENUE"
CASH_AT_VENUE_REF = "CASH_AT_VENUE"
MANUAL_ISSUE_REF = "MANUAL"


class TicketTierQuerySet(models.QuerySet["TicketTier"]):
    def active(self) -> t.Self:
        return self.filter(is_active=True)

    def with_room(self) -> t.Self:
        return self.filter(Q(capacity__isnull=True) | Q(tickets_sold__lt=F("capacity")))


class TicketTier(TimeStampedModel):
    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="ticket_tiers")
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    capacity = models.PositiveIntegerField(null=True, blank=True, help_text="Leave empty for unlimited.")
    tickets_sold = models.PositiveIntegerField(default=0, editable=False)
    is_active = models.BooleanField(default=True)
    is_early_bird = models.BooleanField(default=False)
    display_order = models.PositiveSmallIntegerField(default=0)

    objects = TicketTierQuerySet.as_manager()

    class Meta:
        ordering = ["display_order", "name"]
        constraints = [
            models.UniqueConstraint(fields=["event", "name"], name="unique_tier_name_per_event"),
            models.CheckConstraint(
                condition=Q(capacity__isnull=True) | Q(tickets_sold__lte=F("capacity")),
                name="tier_tickets_sold_within_capacity",
            ),
            models.CheckConstraint(condition=Q(price__gte=0), name="tier_price_non_negative"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} ({self.event_id})"

    @property
    def remaining_capacity(self) -> int | None:
        if self.capacity is None:
            return None
        return max(self.capacity - self.tickets_sold, 0)


class PaymentMethod(models.TextChoices):
    """How an attendee intends to pay for a non-free ticket."""

    ONLINE = "online", "Online"
    VENUE = "venue", "Pay at venue"


class TicketQuerySet(models.QuerySet["Ticket"]):
    def full(self) -> t.Self:
        return self.select_related("event", "tier", "validated_by")

    def unpaid(self) -> t.Self:
        return self.filter(payment_status__in=Ticket.UNPAID_STATUSES)

    def stale(self, now: datetime | None = None) -> t.Self:
        """Unpaid tickets whose grace window has fully elapsed."""
        return self.unpaid().filter(created_at__lt=Ticket.grace_cutoff(now))

    def within_grace(self, now: datetime | None = None) -> t.Self:
        return self.filter(created_at__gte=Ticket.grace_cutoff(now))


class Ticket(TimeStampedModel):
    """An admission to an event, identified at the door by its ticket code."""

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", "Pending"
        PAID = "paid", "Paid"
        PAY_AT_VENUE = "pay_at_venue", "Pay at venue"
        VERIFIED = "verified", "Verified"
        EXPIRED = "expired", "Expired"

    ADMISSIBLE_STATUSES = (PaymentStatus.PAID, PaymentStatus.VERIFIED)
    UNPAID_STATUSES = (PaymentStatus.PENDING, PaymentStatus.PAY_AT_VENUE)

    ticket_code = models.CharField(
        max_length=17,
        unique=True,
        validators=[RegexValidator(TICKET_CODE_REGEX, message="Ticket codes look like XXXXXXXX-XXXXXXXX.")],
    )
    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="tickets")
    tier = models.ForeignKey(TicketTier, on_delete=models.PROTECT, null=True, blank=True, related_name="tickets")
    attendee_name = models.CharField(max_length=255)
    attendee_email = models.EmailField(db_index=True)
    attendee_phone = models.CharField(max_length=32, blank=True)
    payment_status = models.CharField(
        max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True
    )
    payment_ref_id = models.CharField(max_length=255, null=True, blank=True)
    is_validated = models.BooleanField(default=False)
    validated_at = models.DateTimeField(null=True, blank=True)
    validated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="validated_tickets",
    )
    verified_at = models.DateTimeField(null=True, blank=True)
    expired_at = models.DateTimeField(null=True, blank=True)

    objects = TicketQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(is_validated=False) | Q(validated_at__isnull=False),
                name="ticket_validated_has_timestamp",
            ),
            models.CheckConstraint(
                condition=Q(is_validated=False) | Q(payment_status__in=["paid", "verified"]),
                name="ticket_validated_only_when_paid",
            ),
            models.CheckConstraint(
                condition=~Q(payment_status="expired") | Q(is_validated=False),
                name="ticket_expired_never_validated",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.ticket_code} ({self.payment_status})"

    @staticmethod
    def grace_cutoff(now: datetime | None = None) -> datetime:
        """Unpaid tickets created before this instant are stale."""
        now = now or timezone.now()
        return now - timedelta(hours=settings.TICKET_GRACE_WINDOW_HOURS)

    def is_stale(self, now: datetime | None = None) -> bool:
        return self.payment_status in self.UNPAID_STATUSES and self.created_at < self.grace_cutoff(now)

    @property
    def is_admissible(self) -> bool:
        return self.payment_status in self.ADMISSIBLE_STATUSES

    def download_window_closes_at(self) -> datetime | None:
        if self.verified_at is None:
            return None
        return self.verified_at + timedelta(hours=settings.TICKET_DOWNLOAD_WINDOW_HOURS)

    def download_window_open(self, now: datetime | None = None) -> bool:
        """Whether a reconciled ticket can still be downloaded from the pending-ticket page."""
        closes_at = self.download_window_closes_at()
        if closes_at is None:
            return False
        return (now or timezone.now()) < closes_at
