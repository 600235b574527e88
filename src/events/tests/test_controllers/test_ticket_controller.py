"""Tests for claiming and fetching tickets."""

import typing as t
import uuid
from datetime import timedelta

import orjson
import pytest
from django.test.client import Client
from django.urls import reverse
from freezegun import freeze_time

from events.models import PAY_AT_VENUE_REF, Event, Ticket, TicketTier
from events.service import claim_verifier, ticket_service
from events.tests.conftest import TicketFactory

pytestmark = pytest.mark.django_db

PaymentStatus = Ticket.PaymentStatus


def _claim(client: Client, url_name: str, event: Event, payload: dict[str, t.Any]) -> t.Any:
    url = reverse(f"api:{url_name}", kwargs={"event_id": event.pk})
    return client.post(url, data=orjson.dumps(payload), content_type="application/json")


def _payload(email: str, **extra: t.Any) -> dict[str, t.Any]:
    return {"name": "Asha Rao", "email": email, "phone": "+911234567890", **extra}


class TestClaimFreeTicket:
    def test_verified_email_gets_a_paid_ticket(self, client: Client, free_event: Event, verified_email: str) -> None:
        response = _claim(client, "claim_free_ticket", free_event, _payload(verified_email))

        assert response.status_code == 201, response.content
        data = response.json()
        assert data["payment_status"] == PaymentStatus.PAID
        assert data["is_validated"] is False
        assert data["event"]["title"] == "Community Meetup"
        ticket = Ticket.objects.get(pk=data["id"])
        assert ticket.ticket_code == data["ticket_code"]
        assert ticket.attendee_email == verified_email

    def test_contact_details_are_not_echoed(self, client: Client, free_event: Event, verified_email: str) -> None:
        response = _claim(client, "claim_free_ticket", free_event, _payload(verified_email))

        assert "attendee_email" not in response.json()
        assert "attendee_phone" not in response.json()

    def test_unverified_email_is_refused(self, client: Client, free_event: Event) -> None:
        response = _claim(client, "claim_free_ticket", free_event, _payload("ravi@example.com"))

        assert response.status_code == 400
        assert response.json()["code"] == "verification_failed"
        assert not Ticket.objects.exists()

    def test_one_verification_buys_one_ticket(self, client: Client, free_event: Event, verified_email: str) -> None:
        assert _claim(client, "claim_free_ticket", free_event, _payload(verified_email)).status_code == 201

        response = _claim(client, "claim_free_ticket", free_event, _payload(verified_email))

        assert response.status_code == 400
        assert Ticket.objects.count() == 1

    def test_sold_out_keeps_the_verification(self, client: Client, free_event: Event, verified_email: str) -> None:
        Event.objects.filter(pk=free_event.pk).update(capacity=1, tickets_issued=1)

        response = _claim(client, "claim_free_ticket", free_event, _payload(verified_email))

        assert response.status_code == 409
        assert response.json() == {"detail": "This event is sold out.", "code": "capacity_exceeded"}
        assert claim_verifier.has_verified_claim(verified_email)

    def test_paid_event_is_refused(self, client: Client, paid_event: Event, verified_email: str) -> None:
        response = _claim(client, "claim_free_ticket", paid_event, _payload(verified_email))

        assert response.status_code == 409
        assert response.json()["code"] == "invalid_transition"

    def test_unknown_event(self, client: Client, verified_email: str) -> None:
        url = reverse("api:claim_free_ticket", kwargs={"event_id": uuid.uuid4()})

        response = client.post(url, data=orjson.dumps(_payload(verified_email)), content_type="application/json")

        assert response.status_code == 404

    def test_invalid_payload(self, client: Client, free_event: Event) -> None:
        response = _claim(client, "claim_free_ticket", free_event, {"name": "", "email": "nope"})

        assert response.status_code == 422


class TestClaimPendingTicket:
    def test_online_payment_is_pending(self, client: Client, paid_event: Event, verified_email: str) -> None:
        response = _claim(client, "claim_pending_ticket", paid_event, _payload(verified_email))

        assert response.status_code == 201, response.content
        assert response.json()["payment_status"] == PaymentStatus.PENDING

    def test_venue_payment(self, client: Client, paid_event: Event, verified_email: str) -> None:
        response = _claim(
            client, "claim_pending_ticket", paid_event, _payload(verified_email, payment_method="venue")
        )

        assert response.status_code == 201, response.content
        ticket = Ticket.objects.get(pk=response.json()["id"])
        assert ticket.payment_status == PaymentStatus.PAY_AT_VENUE
        assert ticket.payment_ref_id == PAY_AT_VENUE_REF

    def test_with_tier(self, client: Client, paid_event: Event, tier: TicketTier, verified_email: str) -> None:
        response = _claim(
            client, "claim_pending_ticket", paid_event, _payload(verified_email, tier_id=str(tier.pk))
        )

        assert response.status_code == 201, response.content
        assert response.json()["tier_name"] == "General"
        tier.refresh_from_db()
        assert tier.tickets_sold == 1

    def test_tier_of_another_event(
        self, client: Client, free_event: Event, tier: TicketTier, verified_email: str
    ) -> None:
        response = _claim(client, "claim_free_ticket", free_event, _payload(verified_email, tier_id=str(tier.pk)))

        assert response.status_code == 404
        assert claim_verifier.has_verified_claim(verified_email)

    def test_inactive_tier(self, client: Client, paid_event: Event, tier: TicketTier, verified_email: str) -> None:
        TicketTier.objects.filter(pk=tier.pk).update(is_active=False)

        response = _claim(
            client, "claim_pending_ticket", paid_event, _payload(verified_email, tier_id=str(tier.pk))
        )

        assert response.status_code == 400
        assert response.json()["code"] == "inactive_tier"

    def test_unknown_payment_method(self, client: Client, paid_event: Event, verified_email: str) -> None:
        response = _claim(
            client, "claim_pending_ticket", paid_event, _payload(verified_email, payment_method="crypto")
        )

        assert response.status_code == 422

    def test_free_event_is_refused(self, client: Client, free_event: Event, verified_email: str) -> None:
        response = _claim(client, "claim_pending_ticket", free_event, _payload(verified_email))

        assert response.status_code == 409


class TestGetTicket:
    def test_returns_the_ticket(self, client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory()

        response = client.get(reverse("api:get_ticket", kwargs={"ticket_id": ticket.pk}))

        assert response.status_code == 200
        data = response.json()
        assert data["ticket_code"] == ticket.ticket_code
        assert data["payment_status"] == PaymentStatus.PENDING
        assert data["download_window_open"] is False
        assert data["download_window_closes_at"] is None

    def test_reports_the_download_window(self, client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_service.confirm_online_payment(ticket_factory(), "pay_123")

        data = client.get(reverse("api:get_ticket", kwargs={"ticket_id": ticket.pk})).json()

        assert data["payment_status"] == PaymentStatus.VERIFIED
        assert data["download_window_open"] is True
        assert data["download_window_closes_at"] is not None

    def test_unknown_ticket(self, client: Client) -> None:
        response = client.get(reverse("api:get_ticket", kwargs={"ticket_id": uuid.uuid4()}))

        assert response.status_code == 404


class TestGetTicketQr:
    def test_paid_ticket_is_downloadable(self, client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory(payment_status=PaymentStatus.PAID)

        response = client.get(reverse("api:get_ticket_qr", kwargs={"ticket_id": ticket.pk}))

        assert response.status_code == 200
        assert response["Content-Type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    def test_pending_ticket_is_not_downloadable(self, client: Client, ticket_factory: TicketFactory) -> None:
        ticket = ticket_factory()

        response = client.get(reverse("api:get_ticket_qr", kwargs={"ticket_id": ticket.pk}))

        assert response.status_code == 409

    def test_verified_ticket_only_inside_the_window(self, client: Client, ticket_factory: TicketFactory) -> None:
        with freeze_time("2026-03-01 10:00:00"):
            ticket = ticket_service.confirm_online_payment(ticket_factory(), "pay_123")
        url = reverse("api:get_ticket_qr", kwargs={"ticket_id": ticket.pk})

        with freeze_time("2026-03-01 15:00:00"):
            assert client.get(url).status_code == 200
        with freeze_time(ticket.verified_at + timedelta(hours=6, seconds=1)):  # type: ignore[operator]
            assert client.get(url).status_code == 409
