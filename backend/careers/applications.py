"""
Manual applications and the merged application history.

Auto-apply lives in ``careers.auto_apply``; both write append-only logs that
are read back here.
"""
import logging

from django.db import DatabaseError

from careers.exceptions import NotFound, PersistenceError, Unauthenticated
from careers.models import AutoApplyLog, JobListing, ManualApplyLog, OptimizedResume

logger = logging.getLogger(__name__)

METHOD_MANUAL = 'manual'
METHOD_AUTO = 'auto'


def _require_user(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        raise Unauthenticated()


def _get_job(job_id):
    # Applying to a listing that was deactivated after it was viewed is allowed
    try:
        return JobListing.objects.get(pk=job_id)
    except (JobListing.DoesNotExist, ValueError):
        raise NotFound('Job not found.')


def _get_users_resume(user, resume_id):
    try:
        return OptimizedResume.objects.get(pk=resume_id, user=user)
    except (OptimizedResume.DoesNotExist, ValueError):
        raise NotFound('Optimized resume not found.')


def submit_manual_application(user, job_id, resume_id, redirect_url=None):
    """Record that the user applied to ``job_id`` on the employer's site.

    Every call writes a new log row; repeated applications are not merged.
    """
    _require_user(user)
    job = _get_job(job_id)
    resume = _get_users_resume(user, resume_id)

    try:
        log = ManualApplyLog.objects.create(
            user=user,
            job=job,
            optimized_resume=resume,
            redirect_url=redirect_url or job.application_link,
        )
    except DatabaseError as exc:
        logger.exception('Error logging manual application for job %s', job.pk)
        raise PersistenceError('Failed to log manual application') from exc

    logger.info('Manual application %s logged for user %s', log.pk, user.pk)
    return log


def application_history(user, status=None, method=None):
    """Manual and auto applications of ``user``, newest first.

    Returns ``{'applications': [...], 'total': n, 'status_counts': {...}}``
    where each application is a log model instance.
    """
    _require_user(user)
    logs = []
    if method in (None, '', METHOD_MANUAL):
        manual = ManualApplyLog.objects.filter(user=user).select_related('job')
        if status:
            manual = manual.filter(status=status)
        logs.extend(manual)
    if method in (None, '', METHOD_AUTO):
        auto = AutoApplyLog.objects.filter(user=user).select_related('job')
        if status:
            auto = auto.filter(status=status)
        logs.extend(auto)

    logs.sort(key=lambda log: log.application_date, reverse=True)
    status_counts = {}
    for log in logs:
        status_counts[log.status] = status_counts.get(log.status, 0) + 1
    return {
        'applications': logs,
        'total': len(logs),
        'status_counts': status_counts,
    }
