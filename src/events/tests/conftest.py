import typing as t
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from django.utils import timezone

from conftest import UserFactory
from events.models import Event, Ticket, TicketTier
from events.service.ticket_service import Attendee
from events.utils import generate_ticket_code


@pytest.fixture
def organizer(user_factory: UserFactory) -> User:
    return user_factory(username="organizer")


@pytest.fixture
def other_organizer(user_factory: UserFactory) -> User:
    return user_factory(username="other_organizer")


@pytest.fixture
def staff_user(user_factory: UserFactory) -> User:
    return user_factory(username="staff", is_staff=True)


@pytest.fixture
def free_event(organizer: User, next_week: datetime) -> Event:
    return Event.objects.create(
        organizer=organizer, title="Community Meetup", venue="Hall A", start=next_week, is_free=True
    )


@pytest.fixture
def paid_event(organizer: User, next_week: datetime) -> Event:
    return Event.objects.create(
        organizer=organizer, title="Jazz Night", venue="Blue Room", start=next_week, price=Decimal("500.00")
    )


@pytest.fixture
def tier(paid_event: Event) -> TicketTier:
    return TicketTier.objects.create(event=paid_event, name="General", price=Decimal("500.00"))


@pytest.fixture
def attendee() -> Attendee:
    return Attendee(name="Asha Rao", email="Asha@Example.com", phone="+911234567890")


class TicketFactory(t.Protocol):
    def __call__(
        self,
        *,
        event: Event | None = None,
        payment_status: str = ...,
        age: timedelta | None = None,
        **kwargs: t.Any,
    ) -> Ticket: ...


@pytest.fixture
def ticket_factory(paid_event: Event) -> TicketFactory:
    """Create tickets directly, bypassing the capacity ledger.

    ``age`` backdates created_at so grace-window rules can be exercised.
    """

    def _create(
        *,
        event: Event | None = None,
        payment_status: str = Ticket.PaymentStatus.PENDING,
        age: timedelta | None = None,
        **kwargs: t.Any,
    ) -> Ticket:
        kwargs.setdefault("attendee_name", "Ravi Kumar")
        kwargs.setdefault("attendee_email", "ravi@example.com")
        kwargs.setdefault("ticket_code", generate_ticket_code())
        ticket = Ticket.objects.create(
            event=event or paid_event,
            payment_status=payment_status,
            **kwargs,
        )
        if age is not None:
            Ticket.objects.filter(pk=ticket.pk).update(created_at=timezone.now() - age)
            ticket.refresh_from_db()
        return ticket

    return _create
