# src/events/admin/__init__.py
"""Events admin module.

Django autodiscover imports this module, which registers the admin classes in the submodules.
"""

from events.admin.event import EventAdmin
from events.admin.ticket import ClaimChallengeAdmin, TicketAdmin, TicketTierAdmin

__all__ = [
    "ClaimChallengeAdmin",
    "EventAdmin",
    "TicketAdmin",
    "TicketTierAdmin",
]
