import typing as t
from uuid import UUID

from django.shortcuts import get_object_or_404

from common.controllers import UserAwareController
from events import models


class EventPublicBaseController(UserAwareController):
    """Base controller for anonymous ticket endpoints.

    Subclasses should be decorated with @api_controller to register routes.
    """

    def get_one(self, event_id: UUID) -> models.Event:
        return t.cast(models.Event, self.get_object_or_exception(models.Event.objects.all(), pk=event_id))

    def get_tier(self, event: models.Event, tier_id: UUID | None) -> models.TicketTier | None:
        if tier_id is None:
            return None
        return get_object_or_404(models.TicketTier, pk=tier_id, event=event)
