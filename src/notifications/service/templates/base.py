"""Base template interface for lifecycle emails."""

import typing as t
from abc import ABC, abstractmethod

from django.conf import settings
from django.template.loader import render_to_string

from notifications.enums import LifecycleEvent


class LifecycleEmailTemplate(ABC):
    """Renders one lifecycle event as an email.

    The body is rendered from ``notifications/email/{lifecycle_event}.txt``.
    """

    lifecycle_event: LifecycleEvent

    @abstractmethod
    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        pass

    def get_email_text_body(self, context: dict[str, t.Any]) -> str:
        template_name = f"notifications/email/{self.lifecycle_event}.txt"
        return render_to_string(template_name, self._get_template_context(context))

    def _get_template_context(self, context: dict[str, t.Any]) -> dict[str, t.Any]:
        return {
            "context": context,
            "site_name": settings.SITE_NAME,
            "frontend_base_url": settings.FRONTEND_BASE_URL,
        }
