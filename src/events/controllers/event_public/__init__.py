"""Public (anonymous) ticket controllers."""

from .tickets import EventPublicTicketsController, TicketController

EVENT_PUBLIC_CONTROLLERS: list[type] = [
    EventPublicTicketsController,
    TicketController,
]

__all__ = ["EventPublicTicketsController", "TicketController", "EVENT_PUBLIC_CONTROLLERS"]
