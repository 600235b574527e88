"""Enums for the notification system."""

from django.db.models import TextChoices


class LifecycleEvent(TextChoices):
    """Ticket lifecycle moments that produce an email to the attendee."""

    CHALLENGE_REQUESTED = "challenge_requested"
    TICKET_CLAIMED = "ticket_claimed"
    PAYMENT_CONFIRMED = "payment_confirmed"
    TICKET_VALIDATED = "ticket_validated"
