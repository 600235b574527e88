"""Tests for the capacity ledger."""

import uuid
from unittest.mock import patch

import pytest

from events.exceptions import CapacityExceededError, InactiveTierError, NotFoundError, StoreConflictError
from events.models import Event, TicketTier
from events.service import capacity_ledger

pytestmark = pytest.mark.django_db


class TestAvailability:
    def test_unlimited_event_is_always_available(self, paid_event: Event) -> None:
        Event.objects.filter(pk=paid_event.pk).update(tickets_issued=10_000)
        assert capacity_ledger.check_event_availability(paid_event.pk) is True

    def test_full_event_is_unavailable(self, paid_event: Event) -> None:
        Event.objects.filter(pk=paid_event.pk).update(capacity=2, tickets_issued=2)
        assert capacity_ledger.check_event_availability(paid_event.pk) is False

    def test_reads_the_current_row_not_the_instance(self, paid_event: Event) -> None:
        paid_event.capacity = 1
        paid_event.save()
        assert capacity_ledger.check_event_availability(paid_event.pk) is True

        Event.objects.filter(pk=paid_event.pk).update(tickets_issued=1)

        # paid_event in memory still says 0 issued
        assert capacity_ledger.check_event_availability(paid_event.pk) is False

    def test_inactive_tier_is_unavailable(self, tier: TicketTier) -> None:
        TicketTier.objects.filter(pk=tier.pk).update(is_active=False)
        assert capacity_ledger.check_tier_availability(tier.pk) is False

    def test_missing_event_raises_not_found(self) -> None:
        with pytest.raises(NotFoundError):
            capacity_ledger.check_event_availability(uuid.uuid4())


class TestAdmission:
    def test_admits_exactly_capacity_then_refuses(self, paid_event: Event) -> None:
        """N+K admissions against capacity N: exactly N succeed, K are refused."""
        Event.objects.filter(pk=paid_event.pk).update(capacity=3)

        admitted = refused = 0
        for _ in range(5):
            try:
                capacity_ledger.admit(paid_event.pk)
                admitted += 1
            except CapacityExceededError:
                refused += 1

        paid_event.refresh_from_db()
        assert (admitted, refused) == (3, 2)
        assert paid_event.tickets_issued == 3

    def test_two_callers_who_both_saw_room_cannot_both_take_the_last_seat(self, paid_event: Event) -> None:
        Event.objects.filter(pk=paid_event.pk).update(capacity=1)

        # both callers checked before either admitted
        assert capacity_ledger.check_event_availability(paid_event.pk)
        assert capacity_ledger.check_event_availability(paid_event.pk)

        capacity_ledger.admit_event(paid_event.pk)
        with pytest.raises(CapacityExceededError, match="This event is sold out."):
            capacity_ledger.admit_event(paid_event.pk)

        paid_event.refresh_from_db()
        assert paid_event.tickets_issued == 1

    def test_sold_out_tier_message(self, tier: TicketTier) -> None:
        TicketTier.objects.filter(pk=tier.pk).update(capacity=1, tickets_sold=1)

        with pytest.raises(CapacityExceededError, match="This ticket tier is sold out."):
            capacity_ledger.admit_tier(tier.pk)

    def test_inactive_tier_is_refused(self, tier: TicketTier) -> None:
        TicketTier.objects.filter(pk=tier.pk).update(is_active=False)

        with pytest.raises(InactiveTierError):
            capacity_ledger.admit_tier(tier.pk)

    def test_missing_tier_raises_not_found(self) -> None:
        with pytest.raises(NotFoundError):
            capacity_ledger.admit_tier(uuid.uuid4())

    def test_tier_increment_is_rolled_back_when_event_is_full(self, paid_event: Event, tier: TicketTier) -> None:
        Event.objects.filter(pk=paid_event.pk).update(capacity=1, tickets_issued=1)
        TicketTier.objects.filter(pk=tier.pk).update(capacity=10)

        with pytest.raises(CapacityExceededError):
            capacity_ledger.admit(paid_event.pk, tier.pk)

        tier.refresh_from_db()
        assert tier.tickets_sold == 0

    def test_admission_counts_against_tier_and_event(self, paid_event: Event, tier: TicketTier) -> None:
        capacity_ledger.admit(paid_event.pk, tier.pk)

        paid_event.refresh_from_db()
        tier.refresh_from_db()
        assert paid_event.tickets_issued == 1
        assert tier.tickets_sold == 1

    def test_store_conflict_after_one_retry(self, paid_event: Event) -> None:
        """If the update keeps missing while the re-read claims room, give up with a conflict."""
        Event.objects.filter(pk=paid_event.pk).update(capacity=1, tickets_issued=1)

        with patch.object(capacity_ledger, "check_event_availability", return_value=True) as check:
            with pytest.raises(StoreConflictError):
                capacity_ledger.admit_event(paid_event.pk)

        assert check.call_count == 2
