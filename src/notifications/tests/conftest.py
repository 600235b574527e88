"""Shared fixtures for notification tests."""

from datetime import datetime

import pytest
from django.contrib.auth.models import User

from conftest import UserFactory
from events.models import Event, Ticket
from events.utils import generate_ticket_code


@pytest.fixture
def event(user_factory: UserFactory, next_week: datetime) -> Event:
    return Event.objects.create(organizer=user_factory(), title="Jazz Night", venue="Blue Room", start=next_week)


@pytest.fixture
def organizer(event: Event) -> User:
    return event.organizer  # type: ignore[return-value]


@pytest.fixture
def ticket(event: Event) -> Ticket:
    """A pending online booking."""
    return Ticket.objects.create(
        ticket_code=generate_ticket_code(),
        event=event,
        attendee_name="Asha Rao",
        attendee_email="asha@example.com",
    )
