"""JWT authentication for the ticketing API."""

import typing as t

from django.contrib.auth.models import AnonymousUser
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _
from ninja_extra import status
from ninja_extra.exceptions import APIException
from ninja_jwt.authentication import JWTAuth


class PermissionDenied(APIException):
    """Exception raised when user doesn't have required permissions."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("Permission denied")


class TicketingJWTAuth(JWTAuth):
    """Bearer authentication with an optional staff requirement.

    Usage:
        @route.post("/sweep", auth=TicketingJWTAuth(is_staff=True))
    """

    def __init__(self, *, is_staff: bool = False) -> None:
        self.is_staff = is_staff
        super().__init__()

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate and verify user permissions.

        Raises:
            PermissionDenied: If the endpoint requires staff and the user is not
        """
        user = super().authenticate(request, token)

        if user and not isinstance(user, AnonymousUser):
            if self.is_staff and not getattr(user, "is_staff", False):
                raise PermissionDenied(str(_("Staff access required.")))

        return user
