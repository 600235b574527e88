"""Celery tasks for the ticket lifecycle."""

import structlog
from celery import shared_task

from events.service import expiry_sweeper

logger = structlog.get_logger(__name__)


@shared_task(name="events.sweep_expired_tickets")
def sweep_expired_tickets() -> int:
    """Expire unpaid tickets whose grace window has passed.

    Scheduled through CELERY_BEAT_SCHEDULE and safe to run at any time.
    """
    count = expiry_sweeper.sweep()
    if count:
        logger.info("sweep_expired_tickets_completed", expired=count)
    return count
