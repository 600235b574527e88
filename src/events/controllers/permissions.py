from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from events import models


class RootPermission(BasePermission):
    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Must implement abstract method. This is due to an error in Ninja Extra.

        This Method will be ignored, only has_object_permission will be called.
        """
        return True


class EventOrganizerPermission(RootPermission):
    def __init__(self, *, allow_staff: bool = False) -> None:
        self.allow_staff = allow_staff

    def has_object_permission(
        self,
        request: HttpRequest,
        controller: ControllerBase,
        obj: models.Event,
    ) -> bool:
        """Only the event's organizer (and optionally Django staff) may act on it."""
        if self.allow_staff and request.user.is_staff:
            return True
        return obj.organizer_id == request.user.id
