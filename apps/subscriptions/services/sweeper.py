"""
Expiration sweeper.

Periodically finds subscriptions still marked active whose end date has
passed and expires them through the same rule the scan handler uses. Each
record is handled in its own transaction; a record that fails is logged and
left for the next run, which rediscovers it through the same query.
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.students.models import CanteenStudent
from apps.subscriptions.models import Subscription, SubscriptionStatus
from .state_machine import expire_if_lapsed

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    started_at: datetime
    found: int = 0
    expired: int = 0
    skipped: int = 0
    failed: int = 0


class SweepLock:
    """
    Non-blocking lock keeping sweeps from overlapping.

    A thread lock covers the current process; a cache entry covers other
    worker processes when the cache backend is shared. The cache entry has
    a timeout so a crashed worker cannot hold it forever.
    """

    cache_key = 'subscriptions:sweep-lock'

    def __init__(self, *, timeout: Optional[int] = None, cache_backend=None):
        self._local = threading.Lock()
        self._timeout = timeout or settings.SUBSCRIPTION_SWEEP_LOCK_TIMEOUT
        self._cache = cache_backend or cache

    @contextmanager
    def hold(self):
        if not self._local.acquire(blocking=False):
            yield False
            return
        token = uuid.uuid4().hex
        try:
            if not self._cache.add(self.cache_key, token, self._timeout):
                yield False
                return
            try:
                yield True
            finally:
                if self._cache.get(self.cache_key) == token:
                    self._cache.delete(self.cache_key)
        finally:
            self._local.release()


class ExpirationSweeper:
    """
    Expire lapsed subscriptions and notify their parents.

    Args:
        clock: Callable returning the current aware datetime
        lock: SweepLock shared by every caller that must not overlap
    """

    def __init__(self, *, clock: Callable[[], datetime] = timezone.now, lock: Optional[SweepLock] = None):
        self._clock = clock
        self._lock = lock or SweepLock()

    def run(self) -> Optional[SweepReport]:
        """Run one sweep. Returns None if another sweep is in progress."""
        with self._lock.hold() as acquired:
            if not acquired:
                logger.warning("Subscription sweep already running, skipping this run")
                return None
            return self.sweep(self._clock())

    def sweep(self, now: datetime) -> SweepReport:
        report = SweepReport(started_at=now)
        lapsed_ids = list(
            Subscription.objects
            .filter(status=SubscriptionStatus.ACTIVE, end_date__lt=now)
            .order_by('end_date')
            .values_list('id', flat=True)
        )
        report.found = len(lapsed_ids)

        if not lapsed_ids:
            logger.info("Subscription sweep: no lapsed subscription found")
            return report

        logger.info("Subscription sweep: %d lapsed subscription(s) found", report.found)

        for subscription_id in lapsed_ids:
            try:
                if self._expire_one(subscription_id, now):
                    report.expired += 1
                else:
                    report.skipped += 1
            except DatabaseError:
                report.failed += 1
                logger.exception(
                    "Subscription sweep: failed to expire subscription %s", subscription_id
                )

        logger.info(
            "Subscription sweep finished: %d expired, %d skipped, %d failed",
            report.expired, report.skipped, report.failed,
        )
        return report

    @transaction.atomic
    def _expire_one(self, subscription_id, now: datetime) -> bool:
        # Lock the owning student before the subscription, the same order
        # scans and purchases use. Re-read under lock: a scan or purchase
        # may have reconciled the row since the candidate list was built.
        student = (
            CanteenStudent.objects
            .select_for_update(of=('self',))
            .select_related('enrolled_student')
            .filter(subscriptions__id=subscription_id)
            .first()
        )
        if student is None:
            return False
        subscription = (
            Subscription.objects
            .select_for_update()
            .filter(id=subscription_id)
            .first()
        )
        if subscription is None:
            return False
        return expire_if_lapsed(subscription, now, canteen_student=student) is not None
