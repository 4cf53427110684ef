"""
Admin Job Intake: the only write path into the job catalog.
"""
import logging

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from careers.exceptions import PersistenceError
from careers.serializers import JobListingIntakeSerializer

logger = logging.getLogger(__name__)


def create_job_listing(data, created_by=None):
    """Validate ``data`` and insert a new active listing.

    Raises ``ValidationError`` with per-field messages when the form is
    invalid and ``PersistenceError`` when the insert fails.
    """
    serializer = JobListingIntakeSerializer(data=data)
    serializer.is_valid(raise_exception=True)

    try:
        job = serializer.save(
            created_by=created_by if getattr(created_by, 'pk', None) else None,
            posted_date=timezone.now(),
            source_api=getattr(settings, 'JOB_INTAKE_SOURCE_MARKER', 'admin_portal'),
        )
    except DatabaseError as exc:
        logger.exception('Failed to insert job listing for %s', serializer.validated_data.get('company_name'))
        raise PersistenceError('Could not save the job listing.') from exc

    logger.info('Job listing %s created by %s', job.pk, getattr(created_by, 'pk', None))
    return job
