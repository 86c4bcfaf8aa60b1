"""Celery tasks for the subscription lifecycle."""

import logging

from celery import shared_task

from .services import ExpirationSweeper, SweepLock

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True)
def sweep_expired_subscriptions():
    """Expire lapsed subscriptions. Scheduled by celery beat every 6 hours."""
    logger.info("Starting scheduled subscription sweep")
    try:
        report = ExpirationSweeper(lock=SweepLock()).run()
    except Exception:
        # Not retried: the next scheduled run picks up whatever is left.
        logger.exception("Scheduled subscription sweep failed")
        return None
    if report is None:
        return None
    return {
        'found': report.found,
        'expired': report.expired,
        'skipped': report.skipped,
        'failed': report.failed,
    }
