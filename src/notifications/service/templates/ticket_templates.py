"""Templates for ticket lifecycle emails."""

import typing as t

from django.conf import settings
from django.utils.translation import gettext as _

from notifications.enums import LifecycleEvent
from notifications.service.templates.base import LifecycleEmailTemplate
from notifications.service.templates.registry import register_template


class ChallengeRequestedTemplate(LifecycleEmailTemplate):
    lifecycle_event = LifecycleEvent.CHALLENGE_REQUESTED

    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        return _("Your %(site)s verification code") % {"site": settings.SITE_NAME}


class TicketClaimedTemplate(LifecycleEmailTemplate):
    lifecycle_event = LifecycleEvent.TICKET_CLAIMED

    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        return _("Your ticket for %(event)s") % {"event": context["event_title"]}


class PaymentConfirmedTemplate(LifecycleEmailTemplate):
    lifecycle_event = LifecycleEvent.PAYMENT_CONFIRMED

    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        return _("Payment confirmed for %(event)s") % {"event": context["event_title"]}


class TicketValidatedTemplate(LifecycleEmailTemplate):
    lifecycle_event = LifecycleEvent.TICKET_VALIDATED

    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        return _("Welcome to %(event)s") % {"event": context["event_title"]}


register_template(ChallengeRequestedTemplate())
register_template(TicketClaimedTemplate())
register_template(PaymentConfirmedTemplate())
register_template(TicketValidatedTemplate())
