import typing as t
from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404

from common.controllers import UserAwareController
from events import models


class EventAdminBaseController(UserAwareController):
    """Base controller for event admin endpoints.

    Subclasses should be decorated with @api_controller to register routes.
    """

    def get_queryset(self) -> QuerySet[models.Event]:
        return models.Event.objects.all()

    def get_one(self, event_id: UUID) -> models.Event:
        """Fetch the event and run the controller's object permissions against it."""
        return t.cast(models.Event, self.get_object_or_exception(self.get_queryset(), pk=event_id))

    def get_ticket_or_404(self, event: models.Event, ticket_id: UUID) -> models.Ticket:
        return get_object_or_404(models.Ticket.objects.full(), pk=ticket_id, event=event)
