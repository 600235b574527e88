import typing as t

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q

from common.models import TimeStampedModel

if t.TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser, AnonymousUser


class EventQuerySet(models.QuerySet["Event"]):
    def with_room(self) -> t.Self:
        """Events that can still admit at least one ticket."""
        return self.filter(Q(capacity__isnull=True) | Q(tickets_issued__lt=F("capacity")))

    def organized_by(self, user: "AbstractBaseUser") -> t.Self:
        return self.filter(organizer=user)


class Event(TimeStampedModel):
    """Something people buy tickets for.

    ``tickets_issued`` is only ever incremented through the capacity ledger; it is not released
    when a ticket expires.
    """

    organizer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="organized_events"
    )
    title = models.CharField(max_length=255)
    venue = models.CharField(max_length=255, blank=True)
    start = models.DateTimeField(db_index=True)
    is_free = models.BooleanField(default=False)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    currency = models.CharField(max_length=3, default=settings.DEFAULT_CURRENCY)
    capacity = models.PositiveIntegerField(null=True, blank=True, help_text="Leave empty for unlimited.")
    tickets_issued = models.PositiveIntegerField(default=0, editable=False)

    objects = EventQuerySet.as_manager()

    class Meta:
        ordering = ["-start"]
        constraints = [
            models.CheckConstraint(
                condition=Q(capacity__isnull=True) | Q(tickets_issued__lte=F("capacity")),
                name="event_tickets_issued_within_capacity",
            ),
            models.CheckConstraint(condition=Q(price__gte=0), name="event_price_non_negative"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.title

    @property
    def remaining_capacity(self) -> int | None:
        if self.capacity is None:
            return None
        return max(self.capacity - self.tickets_issued, 0)

    def is_organized_by(self, user: "AbstractBaseUser | AnonymousUser | None") -> bool:
        return bool(user and user.is_authenticated and self.organizer_id == user.pk)
