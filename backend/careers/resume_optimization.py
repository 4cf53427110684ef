"""
Resume Optimization Gateway.

Posts the candidate's resume text and the target job to the external
optimization function and records the result as an immutable
``OptimizedResume``. The function itself is opaque; only its request/response
shape matters here:

    request:  {"jobId": "<uuid>", "userResumeText": "..."}
    response: {"success": true, "resumeContent": {...}, "pdfUrl": "...",
               "docxUrl": "...", "optimizationScore": 87}
"""
import logging
from decimal import Decimal, InvalidOperation

import requests
from django.conf import settings
from django.db import DatabaseError

from careers.api_monitoring import SERVICE_RESUME_OPTIMIZER, get_or_create_service, track_api_call
from careers.exceptions import NotFound, OptimizationFailed, PersistenceError, ProviderUnavailable, Unauthenticated
from careers.job_catalog import get_job
from careers.models import OptimizedResume
from careers.profile_store import render_profile_as_text

logger = logging.getLogger(__name__)


def _clamp_score(value):
    if value in (None, ''):
        return None
    try:
        score = Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.warning('Optimizer returned a non-numeric score: %r', value)
        return None
    return max(Decimal('0'), min(score, Decimal('100'))).quantize(Decimal('0.01'))


def _error_from_response(response):
    try:
        body = response.json()
    except ValueError:
        return ''
    if isinstance(body, dict):
        return body.get('error') or body.get('message') or ''
    return ''


def call_optimizer(job_id, resume_text, token='', user=None):
    """POST to the optimization function and return its decoded success body."""
    url = getattr(settings, 'RESUME_OPTIMIZER_URL', '')
    if not url:
        raise ProviderUnavailable('Resume optimization service is not configured.')
    timeout = getattr(settings, 'RESUME_OPTIMIZER_TIMEOUT', 60)

    headers = {'Content-Type': 'application/json'}
    if token:
        headers['Authorization'] = f'Bearer {token}'
    payload = {'jobId': str(job_id), 'userResumeText': resume_text}

    service = get_or_create_service(SERVICE_RESUME_OPTIMIZER, 'resume_optimizer')
    try:
        with track_api_call(service, endpoint=url, method='POST', user=user, metadata={'job_id': str(job_id)}):
            response = requests.post(url, json=payload, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.error('Resume optimizer request failed: %s', exc)
        raise ProviderUnavailable('Unable to reach the resume optimization service. Please try again.') from exc

    if not response.ok:
        message = _error_from_response(response) or 'Failed to optimize resume'
        logger.warning('Resume optimizer returned HTTP %s: %s', response.status_code, message)
        raise OptimizationFailed(message)

    try:
        data = response.json()
    except ValueError as exc:
        raise OptimizationFailed('Resume optimization returned an unreadable response.') from exc

    if not isinstance(data, dict) or not data.get('success'):
        message = (data.get('error') if isinstance(data, dict) else None) or 'Resume optimization failed'
        logger.warning('Resume optimizer reported failure for job %s: %s', job_id, message)
        raise OptimizationFailed(message)
    return data


def optimize_resume_for_job(user, job_id, resume_text=None, token=''):
    """Optimize the user's resume for ``job_id`` and store the result."""
    if user is None or not getattr(user, 'is_authenticated', False):
        raise Unauthenticated()
    job = get_job(job_id)

    if not (resume_text or '').strip():
        resume_text = render_profile_as_text(user)

    data = call_optimizer(job.pk, resume_text, token=token, user=user)

    content = data.get('resumeContent')
    try:
        optimized = OptimizedResume.objects.create(
            user=user,
            job=job,
            resume_content=content if isinstance(content, (dict, list)) else {'text': content or ''},
            pdf_url=data.get('pdfUrl') or '',
            docx_url=data.get('docxUrl') or '',
            optimization_score=_clamp_score(data.get('optimizationScore')),
        )
    except DatabaseError as exc:
        logger.exception('Could not record optimized resume for job %s', job.pk)
        raise PersistenceError() from exc

    logger.info('Optimized resume %s created for user %s and job %s', optimized.pk, user.pk, job.pk)
    return optimized


def list_optimized_resumes(user, job_id=None):
    queryset = OptimizedResume.objects.filter(user=user).select_related('job')
    if job_id:
        queryset = queryset.filter(job_id=job_id)
    return queryset.order_by('-created_at')


def get_optimized_resume(user, resume_id):
    """Return the user's optimized resume ``resume_id`` or raise ``NotFound``."""
    try:
        return OptimizedResume.objects.get(pk=resume_id, user=user)
    except (OptimizedResume.DoesNotExist, ValueError):
        raise NotFound('Optimized resume not found.')
