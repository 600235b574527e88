"""Tests for the door scanner endpoints."""

import typing as t
import uuid
from datetime import timedelta

import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from events.models import PAY_AT_VENUE_REF, Ticket
from events.tests.conftest import TicketFactory

pytestmark = pytest.mark.django_db

PaymentStatus = Ticket.PaymentStatus


def _scan(client: Client, code: str) -> t.Any:
    return client.post(
        reverse("api:scan_ticket"), data=orjson.dumps({"code": code}), content_type="application/json"
    )


class TestScan:
    def test_requires_authentication(self, client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory(payment_status=PaymentStatus.PAID)

        response = _scan(client, ticket.ticket_code)

        assert response.status_code == 401

    def test_valid_ticket(self, organizer_client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory(payment_status=PaymentStatus.PAID)

        response = _scan(organizer_client, ticket.ticket_code)

        assert response.status_code == 200, response.content
        data = response.json()
        assert data["outcome"] == "valid"
        assert data["message"] == "Valid ticket."
        assert data["validated_at"] is not None
        assert data["ticket"]["ticket_code"] == ticket.ticket_code
        assert data["ticket"]["attendee_name"] == "Ravi Kumar"
        assert data["ticket"]["event_title"] == "Jazz Night"

    def test_second_scan_shows_when_it_was_used(
        self, organizer_client: Client, ticket_factory: TicketFactory
    ) -> None:
        ticket = ticket_factory(payment_status=PaymentStatus.PAID)
        first = _scan(organizer_client, ticket.ticket_code).json()

        second = _scan(organizer_client, ticket.ticket_code).json()

        assert second["outcome"] == "already_used"
        assert second["message"] == "Ticket already used."
        assert second["validated_at"] == first["validated_at"]

    def test_other_organizer_learns_nothing(
        self, other_organizer_client: Client, ticket_factory: TicketFactory
    ) -> None:
        ticket = ticket_factory(payment_status=PaymentStatus.PAID)

        response = _scan(other_organizer_client, ticket.ticket_code)

        assert response.status_code == 200
        assert response.json()["outcome"] == "unauthorized"
        assert response.json()["ticket"] is None

    def test_expired(self, organizer_client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory(age=timedelta(hours=25))

        data = _scan(organizer_client, ticket.ticket_code).json()

        assert data["outcome"] == "expired"
        assert data["message"] == "Ticket expired: the booking was not paid within 24 hours."

    def test_payment_required(self, organizer_client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory(payment_status=PaymentStatus.PAY_AT_VENUE, payment_ref_id=PAY_AT_VENUE_REF)

        data = _scan(organizer_client, ticket.ticket_code).json()

        assert data["outcome"] == "payment_required"
        assert data["ticket"]["payment_status"] == PaymentStatus.PAY_AT_VENUE

    def test_not_found(self, organizer_client: Client) -> None:
        assert _scan(organizer_client, "ZZZZZZZZ-ZZZZZZZZ").json()["outcome"] == "not_found"

    def test_invalid_format(self, organizer_client: Client) -> None:
        data = _scan(organizer_client, "<script>").json()

        assert data["outcome"] == "invalid_format"
        assert data["message"] == "Invalid ticket code format."


class TestConfirmCash:
    def _url(self, ticket_id: uuid.UUID) -> str:
        return reverse("api:confirm_cash_and_validate", kwargs={"ticket_id": ticket_id})

    def test_collects_cash_and_admits(self, organizer_client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory(payment_status=PaymentStatus.PAY_AT_VENUE, payment_ref_id=PAY_AT_VENUE_REF)

        response = organizer_client.post(self._url(ticket.pk))

        assert response.status_code == 200, response.content
        assert response.json()["outcome"] == "valid"
        assert response.json()["ticket"]["payment_status"] == PaymentStatus.PAID
        ticket.refresh_from_db()
        assert ticket.is_validated

    def test_other_organizer_cannot_collect(
        self, other_organizer_client: Client, ticket_factory: TicketFactory
    ) -> None:
        ticket = ticket_factory(payment_status=PaymentStatus.PAY_AT_VENUE)

        response = other_organizer_client.post(self._url(ticket.pk))

        assert response.json()["outcome"] == "unauthorized"
        ticket.refresh_from_db()
        assert ticket.payment_status == PaymentStatus.PAY_AT_VENUE

    def test_unknown_ticket(self, organizer_client: Client) -> None:
        assert organizer_client.post(self._url(uuid.uuid4())).json()["outcome"] == "not_found"
