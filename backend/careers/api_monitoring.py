"""
Tracking for outbound calls to external collaborators.

Every call to the resume optimizer, the settlement service and the auto-apply
executor goes through ``track_api_call`` so response times and failures are
recorded in ``APIUsageLog``.

Usage Example:
    from careers.api_monitoring import track_api_call, get_or_create_service

    service = get_or_create_service(SERVICE_RESUME_OPTIMIZER, 'resume_optimizer')
    with track_api_call(service, endpoint=url, method='POST', user=user):
        response = requests.post(url, json=data, timeout=30)
"""

import time
import logging
from contextlib import contextmanager
from typing import Optional, Dict, Any

from django.db import DatabaseError
from django.utils import timezone

from careers.models import APIService, APIUsageLog

logger = logging.getLogger(__name__)


# Service name constants for consistency
SERVICE_RESUME_OPTIMIZER = 'resume_optimizer'
SERVICE_SETTLEMENT = 'redemption_settlement'
SERVICE_AUTO_APPLY = 'auto_apply_executor'


def get_or_create_service(service_name: str, service_type: str, **kwargs) -> APIService:
    """
    Get or create an API service configuration.

    Args:
        service_name: Unique name for the service
        service_type: Type from APIService.SERVICE_TYPES choices
        **kwargs: Additional service configuration

    Returns:
        APIService instance
    """
    service, created = APIService.objects.get_or_create(
        name=service_name,
        defaults={
            'service_type': service_type,
            'is_active': True,
            **kwargs
        }
    )
    if created:
        logger.info(f"Created new API service: {service_name}")
    return service


def _record_usage(service, user, endpoint, method, start_time, success, error=None, metadata=None):
    response_time_ms = int((time.time() - start_time) * 1000)
    try:
        APIUsageLog.objects.create(
            service=service,
            user=user if getattr(user, 'pk', None) else None,
            endpoint=endpoint[:500],
            method=method,
            response_time_ms=response_time_ms,
            success=success,
            error_message=(str(error)[:5000] if error else ''),
            error_type=(type(error).__name__ if error else ''),
            metadata=metadata or {},
        )
        if not success:
            service.last_error_at = timezone.now()
            service.save(update_fields=['last_error_at'])
    except DatabaseError as exc:
        # Monitoring must never break the call being monitored
        logger.warning(f"Could not record API usage for {service.name}: {exc}")


@contextmanager
def track_api_call(
    service: APIService,
    endpoint: str,
    method: str = 'GET',
    user=None,
    metadata: Optional[Dict[str, Any]] = None
):
    """
    Context manager to track API call timing and errors.

    Args:
        service: APIService instance
        endpoint: API endpoint being called
        method: HTTP method (GET, POST, etc.)
        user: User making the request
        metadata: Additional tracking data
    """
    start_time = time.time()
    try:
        yield
    except Exception as e:
        _record_usage(service, user, endpoint, method, start_time, False, error=e, metadata=metadata)
        raise
    _record_usage(service, user, endpoint, method, start_time, True, metadata=metadata)
