"""Exception handlers for the API."""

import traceback
import typing as t

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from events.exceptions import AlreadyUsedError, TicketingError

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Log an unexpected exception and answer with a generic 500."""
    logger.exception("INTERNAL_SERVER_ERROR", method=request.method, path=request.path, exc_info=True)
    data = {"detail": "Internal Server Error."}
    is_staff = getattr(request, "user", None) and request.user.is_staff
    if settings.DEBUG or is_staff:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a model validation error raised by full_clean()."""
    logger.warning("VALIDATION_ERROR", path=request.path)
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": list(exc.messages)}  # type: ignore[union-attr]
    return Response(status=400, data={"errors": error_dict})


def handle_ticketing_error(request: HttpRequest, exc: TicketingError) -> Response:
    """Map a domain error to its HTTP status with a user-safe message."""
    logger.info("ticketing_error", error=exc.code, status=exc.status_code, path=request.path)
    data: dict[str, t.Any] = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, AlreadyUsedError) and exc.validated_at:
        data["validated_at"] = exc.validated_at.isoformat()
    return Response(status=exc.status_code, data=data)
