"""Tests for online payment confirmation."""

import typing as t
import uuid
from datetime import timedelta

import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from events.models import Ticket
from events.tests.conftest import TicketFactory

pytestmark = pytest.mark.django_db

PaymentStatus = Ticket.PaymentStatus


def _confirm(client: Client, ticket_id: t.Any, payment_ref: str = "pay_123") -> t.Any:
    payload = {"ticket_id": str(ticket_id), "payment_ref": payment_ref}
    return client.post(reverse("api:confirm_payment"), data=orjson.dumps(payload), content_type="application/json")


class TestConfirmPayment:
    def test_organizer_confirms(self, organizer_client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory()

        response = _confirm(organizer_client, ticket.pk)

        assert response.status_code == 200, response.content
        data = response.json()
        assert data["payment_status"] == PaymentStatus.VERIFIED
        assert data["payment_ref_id"] == "pay_123"
        assert data["download_window_open"] is True

    def test_staff_confirms(self, staff_client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory()

        assert _confirm(staff_client, ticket.pk).status_code == 200

    def test_repeat_confirmation_is_accepted(self, organizer_client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory()
        first = _confirm(organizer_client, ticket.pk).json()

        second = _confirm(organizer_client, ticket.pk)

        assert second.status_code == 200
        assert second.json()["verified_at"] == first["verified_at"]

    def test_other_organizer_is_forbidden(
        self, other_organizer_client: Client, ticket_factory: TicketFactory
    ) -> None:
        ticket = ticket_factory()

        response = _confirm(other_organizer_client, ticket.pk)

        assert response.status_code == 403
        assert response.json()["code"] == "unauthorized"
        ticket.refresh_from_db()
        assert ticket.payment_status == PaymentStatus.PENDING

    def test_anonymous_is_rejected(self, client: Client, ticket_factory: TicketFactory) -> None:
        assert _confirm(client, ticket_factory().pk).status_code == 401

    def test_stale_ticket_cannot_be_confirmed(self, organizer_client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory(age=timedelta(hours=24, minutes=5))

        response = _confirm(organizer_client, ticket.pk)

        assert response.status_code == 409
        assert response.json()["code"] == "invalid_transition"

    def test_unknown_ticket(self, organizer_client: Client) -> None:
        assert _confirm(organizer_client, uuid.uuid4()).status_code == 404

    def test_blank_reference_is_rejected(self, organizer_client: Client, ticket_factory: TicketFactory) -> None:
        assert _confirm(organizer_client, ticket_factory().pk, payment_ref="   ").status_code == 422
