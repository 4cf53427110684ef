"""
Job Catalog: filtered, paginated reads over active job listings.
"""
import logging
from decimal import Decimal

from django.db.models import Max, Min, Q

from careers.exceptions import NotFound
from careers.models import JobListing

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Bounds reported to the filter UI even when the catalog is narrower
PACKAGE_RANGE_FLOOR = Decimal('0')
PACKAGE_RANGE_CEILING = Decimal('1000000')


def active_jobs():
    return JobListing.objects.filter(is_active=True)


def _clamp_limit(limit):
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return DEFAULT_PAGE_SIZE
    return max(1, min(limit, MAX_PAGE_SIZE))


def filter_jobs(queryset, filters):
    """Apply catalog filters (already validated) to ``queryset``."""
    filters = filters or {}
    if filters.get('domain'):
        queryset = queryset.filter(domain__iexact=filters['domain'])
    if filters.get('location_type'):
        queryset = queryset.filter(location_type=filters['location_type'])
    if filters.get('experience_required'):
        queryset = queryset.filter(experience_required__iexact=filters['experience_required'])
    if filters.get('package_min') is not None:
        queryset = queryset.filter(package_amount__gte=filters['package_min'])
    if filters.get('package_max') is not None:
        queryset = queryset.filter(package_amount__lte=filters['package_max'])

    search = (filters.get('search') or '').strip()
    if search:
        queryset = queryset.filter(
            Q(company_name__icontains=search)
            | Q(role_title__icontains=search)
            | Q(short_description__icontains=search)
        )

    sort_by = filters.get('sort_by') or 'posted_date'
    prefix = '' if filters.get('sort_order') == 'asc' else '-'
    return queryset.order_by(f'{prefix}{sort_by}', '-id')


def list_jobs(filters=None, limit=DEFAULT_PAGE_SIZE, offset=0):
    """Return one page of active jobs as ``{'jobs', 'total', 'has_more'}``."""
    limit = _clamp_limit(limit)
    offset = max(0, int(offset or 0))

    queryset = filter_jobs(active_jobs(), filters)
    total = queryset.count()
    jobs = list(queryset[offset:offset + limit])
    logger.debug('Catalog page offset=%s limit=%s returned %s of %s', offset, limit, len(jobs), total)
    return {
        'jobs': jobs,
        'total': total,
        'has_more': offset + len(jobs) < total,
    }


def get_job(job_id):
    """Return the active listing ``job_id`` or raise ``NotFound``."""
    try:
        return active_jobs().get(pk=job_id)
    except (JobListing.DoesNotExist, ValueError):
        raise NotFound('Job not found.')


def filter_options():
    """Distinct values the catalog can currently be filtered by."""
    jobs = active_jobs()
    bounds = jobs.aggregate(lowest=Min('package_amount'), highest=Max('package_amount'))
    lowest = bounds['lowest'] if bounds['lowest'] is not None else PACKAGE_RANGE_FLOOR
    highest = bounds['highest'] if bounds['highest'] is not None else PACKAGE_RANGE_CEILING
    return {
        'domains': sorted(set(jobs.exclude(domain='').values_list('domain', flat=True))),
        'location_types': sorted(set(jobs.values_list('location_type', flat=True))),
        'experience_levels': sorted(set(jobs.exclude(experience_required='').values_list('experience_required', flat=True))),
        'package_ranges': {
            'min': min(lowest, PACKAGE_RANGE_FLOOR),
            'max': max(highest, PACKAGE_RANGE_CEILING),
        },
    }
