# src/events/admin/base.py
"""Base admin components: link mixins and inlines."""

import typing as t

from django.urls import reverse
from django.utils.html import format_html
from unfold.admin import TabularInline

from events import models


class UserLinkMixin:
    """Mixin to add a link to the event organizer."""

    def organizer_link(self, obj: t.Any) -> str | None:
        user = getattr(obj, "organizer", None)
        if user is None:
            return None
        url = reverse("admin:auth_user_change", args=[user.pk])
        return format_html('<a href="{}">{}</a>', url, user.get_username())

    organizer_link.short_description = "Organizer"  # type: ignore[attr-defined]


class EventLinkMixin:
    """Mixin to add a link to an event."""

    def event_link(self, obj: t.Any) -> str | None:
        if not hasattr(obj, "event") or not obj.event:
            return None
        url = reverse("admin:events_event_change", args=[obj.event.id])
        return format_html('<a href="{}">{}</a>', url, obj.event.title)

    event_link.short_description = "Event"  # type: ignore[attr-defined]


class TicketTierInline(TabularInline):  # type: ignore[misc]
    model = models.TicketTier
    extra = 0
    fields = ["name", "price", "capacity", "tickets_sold", "is_active", "is_early_bird", "display_order"]
    readonly_fields = ["tickets_sold"]
