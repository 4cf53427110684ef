"""Background tasks.

Tasks are plain functions wrapped with ``shared_task``; calling one directly
runs it synchronously, which is how the tests exercise them.
"""
import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from careers.auto_apply import expire_stale_pending

logger = logging.getLogger(__name__)


def _expire_stale_auto_apply_logs_sync(timeout_minutes=None):
    if timeout_minutes is None:
        timeout_minutes = getattr(settings, 'AUTO_APPLY_PENDING_TIMEOUT_MINUTES', 30)
    cutoff = timezone.now() - timedelta(minutes=timeout_minutes)
    expired = expire_stale_pending(cutoff)
    logger.info('Stale auto-apply sweep (cutoff=%s) expired %d logs', cutoff.isoformat(), expired)
    return expired


@shared_task(bind=True)
def expire_stale_auto_apply_logs(self, timeout_minutes=None):
    return _expire_stale_auto_apply_logs_sync(timeout_minutes)
