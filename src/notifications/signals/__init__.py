"""Signals for the notification system."""

from django.dispatch import Signal

# Sent once a ticket lifecycle transition has been decided.
# Expected kwargs:
#   - lifecycle_event: LifecycleEvent value
#   - recipient: email address of the attendee
#   - context: dict of plain values for the email template
ticket_lifecycle = Signal()
