"""
Auto-apply workflow.

One call creates one ``AutoApplyLog`` in ``pending``, hands the job, the
optimized resume and a snapshot of the candidate profile to the configured
executor, and moves the log to ``submitted`` or ``failed``. The log never
stays pending because of anything the executor does: exceptions and timeouts
are recorded as failures and reported to the caller as a result, not raised.

The executor, the profile snapshot provider and the completeness check are
resolved from settings by dotted path:

    AUTO_APPLY_EXECUTOR = 'careers.auto_apply.SimulatedAutoApplyExecutor'
    AUTO_APPLY_PROFILE_PROVIDER = 'careers.profile_store.build_auto_apply_profile'
    AUTO_APPLY_COMPLETENESS_CHECK = 'careers.profile_store.is_profile_complete_for_auto_apply'
"""
import logging
import random
from dataclasses import dataclass
from django.conf import settings
from django.db import DatabaseError
from django.utils.module_loading import import_string

from careers.api_monitoring import SERVICE_AUTO_APPLY, get_or_create_service, track_api_call
from careers.exceptions import NotFound, PersistenceError, ProfileIncomplete, ProviderUnavailable, Unauthenticated
from careers.models import AutoApplyLog, JobListing, OptimizedResume

logger = logging.getLogger(__name__)

SIMULATED_FAILURE_MESSAGE = 'Simulated application failure - website may be down or changed'


@dataclass
class AutoApplyOutcome:
    """What an executor reports back for one application attempt."""
    success: bool
    screenshot_url: str = ''
    error_message: str = ''


@dataclass
class AutoApplyResult:
    success: bool
    message: str
    application_id: str
    status: str
    resume_url: str = ''
    screenshot_url: str = ''
    fallback_url: str = ''
    error: str = ''
    # True when the executor raised instead of reporting an outcome
    provider_error: bool = False

    def as_response(self):
        data = {
            'success': self.success,
            'message': self.message,
            'applicationId': self.application_id,
            'status': self.status,
            'resumeUrl': self.resume_url,
        }
        if self.success:
            data['screenshotUrl'] = self.screenshot_url
        else:
            data['error'] = self.error
            data['fallbackUrl'] = self.fallback_url
        return data


class SimulatedAutoApplyExecutor:
    """Stands in for browser automation: succeeds with a fixed probability."""

    def __init__(self, success_rate=None, screenshot_base_url=None, rng=None):
        if success_rate is None:
            success_rate = getattr(settings, 'AUTO_APPLY_SIMULATED_SUCCESS_RATE', 0.7)
        self.success_rate = success_rate
        self.screenshot_base_url = (
            screenshot_base_url
            or getattr(settings, 'AUTO_APPLY_SCREENSHOT_BASE_URL', 'https://example.com/screenshots')
        ).rstrip('/')
        self.rng = rng or random.Random()

    def execute(self, application_id, job, resume, form_data):
        if self.rng.random() < self.success_rate:
            return AutoApplyOutcome(
                success=True,
                screenshot_url=f'{self.screenshot_base_url}/success_{application_id}.png',
            )
        return AutoApplyOutcome(success=False, error_message=SIMULATED_FAILURE_MESSAGE)


def get_executor():
    try:
        executor_class = import_string(settings.AUTO_APPLY_EXECUTOR)
    except ImportError as exc:
        logger.error('Auto-apply executor %s cannot be imported: %s', settings.AUTO_APPLY_EXECUTOR, exc)
        raise ProviderUnavailable('Auto-apply is not available right now.') from exc
    return executor_class()


def build_form_data_snapshot(profile_row):
    """Map a profile provider row to the form fields recorded on the log."""
    return {
        'full_name': profile_row.get('full_name'),
        'email': profile_row.get('email_address'),
        'phone': profile_row.get('phone'),
        'linkedin': profile_row.get('linkedin_profile_url'),
        'github': profile_row.get('github_profile_url'),
        'headline': profile_row.get('resume_headline'),
        'location': profile_row.get('current_location'),
        'education': profile_row.get('education_details') or [],
        'experience': profile_row.get('experience_details') or [],
        'skills': profile_row.get('skills_details') or [],
    }


def profile_is_complete(user) -> bool:
    """Run the configured completeness check for ``user``."""
    return bool(import_string(settings.AUTO_APPLY_COMPLETENESS_CHECK)(user))


def _load_profile_snapshot(user):
    provider = import_string(settings.AUTO_APPLY_PROFILE_PROVIDER)
    rows = provider(user)
    if not rows:
        raise ProfileIncomplete('User profile not found or incomplete')

    if not profile_is_complete(user):
        raise ProfileIncomplete()
    return build_form_data_snapshot(rows[0])


def _finish(log, status, **fields):
    try:
        if not log.finish(status, **fields):
            logger.warning('Auto-apply log %s was already terminal, left as is', log.pk)
    except DatabaseError:
        logger.exception('Error updating auto apply log %s to %s', log.pk, status)


def submit_auto_application(user, job_id, resume_id, executor=None) -> AutoApplyResult:
    """Run one auto-apply attempt for ``user``.

    Raises ``Unauthenticated``, ``NotFound``, ``ProfileIncomplete`` or
    ``ProviderUnavailable`` (executor not importable) before anything is written. Once the pending log exists every path returns an
    ``AutoApplyResult``.
    """
    if user is None or not getattr(user, 'is_authenticated', False):
        raise Unauthenticated()

    try:
        job = JobListing.objects.get(pk=job_id)
    except (JobListing.DoesNotExist, ValueError):
        raise NotFound('Job not found')

    form_data = _load_profile_snapshot(user)

    try:
        resume = OptimizedResume.objects.get(pk=resume_id, user=user)
    except (OptimizedResume.DoesNotExist, ValueError):
        raise NotFound('Optimized resume not found')

    executor = executor or get_executor()
    try:
        service = get_or_create_service(SERVICE_AUTO_APPLY, 'auto_apply')
    except DatabaseError as exc:
        logger.exception('Error loading auto-apply service record')
        raise PersistenceError('Failed to initiate auto-apply process') from exc

    try:
        log = AutoApplyLog.objects.create(
            user=user,
            job=job,
            optimized_resume=resume,
            status=AutoApplyLog.STATUS_PENDING,
            form_data_snapshot=form_data,
        )
    except DatabaseError as exc:
        logger.exception('Error creating auto apply log for job %s', job.pk)
        raise PersistenceError('Failed to initiate auto-apply process') from exc

    application_id = str(log.pk)
    try:
        with track_api_call(service, endpoint=job.application_link, method='POST', user=user,
                            metadata={'application_id': application_id}):
            outcome = executor.execute(application_id, job, resume, form_data)
    except Exception as exc:
        logger.error('Error during auto-apply process for %s: %s', application_id, exc, exc_info=True)
        error = str(exc) or 'Unknown error during auto-apply'
        _finish(log, AutoApplyLog.STATUS_FAILED, error_message=error, fallback_url=job.application_link)
        return AutoApplyResult(
            success=False,
            message='Auto-apply failed. Please try manual apply.',
            application_id=application_id,
            status=AutoApplyLog.STATUS_FAILED,
            resume_url=resume.pdf_url,
            fallback_url=job.application_link,
            error=error,
            provider_error=True,
        )

    if outcome.success:
        _finish(log, AutoApplyLog.STATUS_SUBMITTED, screenshot_url=outcome.screenshot_url)
        logger.info('Auto-apply %s submitted for user %s', application_id, user.pk)
        return AutoApplyResult(
            success=True,
            message='Application submitted successfully',
            application_id=application_id,
            status=AutoApplyLog.STATUS_SUBMITTED,
            resume_url=resume.pdf_url,
            screenshot_url=outcome.screenshot_url,
        )

    error = outcome.error_message or 'Auto-apply failed'
    _finish(log, AutoApplyLog.STATUS_FAILED, error_message=error, fallback_url=job.application_link)
    logger.info('Auto-apply %s failed for user %s: %s', application_id, user.pk, error)
    return AutoApplyResult(
        success=False,
        message='Auto-apply failed. Please try manual apply.',
        application_id=application_id,
        status=AutoApplyLog.STATUS_FAILED,
        resume_url=resume.pdf_url,
        fallback_url=job.application_link,
        error=error,
    )


def expire_stale_pending(older_than) -> int:
    """Fail pending logs created before ``older_than``. Returns how many moved."""
    expired = 0
    stale = AutoApplyLog.objects.filter(
        status=AutoApplyLog.STATUS_PENDING, application_date__lt=older_than
    ).select_related('job')
    for log in stale:
        if log.finish(
            AutoApplyLog.STATUS_FAILED,
            error_message='Auto-apply did not complete in time',
            fallback_url=log.job.application_link,
        ):
            expired += 1
    if expired:
        logger.warning('Expired %s stale pending auto-apply logs', expired)
    return expired
