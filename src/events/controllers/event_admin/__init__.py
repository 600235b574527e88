"""Event admin controllers package."""

from .maintenance import EventAdminMaintenanceController
from .tickets import EventAdminTicketsController

EVENT_ADMIN_CONTROLLERS: list[type] = [
    EventAdminMaintenanceController,
    EventAdminTicketsController,
]

__all__ = [
    "EventAdminMaintenanceController",
    "EventAdminTicketsController",
    "EVENT_ADMIN_CONTROLLERS",
]
