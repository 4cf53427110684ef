"""
Tests for outbound call tracking.
"""

import pytest

from careers.api_monitoring import SERVICE_SETTLEMENT, get_or_create_service, track_api_call
from careers.models import APIService, APIUsageLog
from careers.tests.factories import UserFactory


@pytest.fixture
def service(db):
    return get_or_create_service(SERVICE_SETTLEMENT, 'settlement')


@pytest.mark.django_db
def test_get_or_create_service_is_idempotent():
    first = get_or_create_service('resume_optimizer', 'resume_optimizer', description='Optimizer')
    second = get_or_create_service('resume_optimizer', 'other')
    assert first.pk == second.pk
    assert second.service_type == 'resume_optimizer'
    assert APIService.objects.count() == 1


def test_successful_call_is_logged(service):
    user = UserFactory()
    with track_api_call(service, endpoint='https://settle.example.com/redeem', method='POST',
                        user=user, metadata={'method': 'upi'}):
        pass

    log = APIUsageLog.objects.get()
    assert log.success is True
    assert log.user == user
    assert log.method == 'POST'
    assert log.metadata == {'method': 'upi'}
    assert log.response_time_ms >= 0
    service.refresh_from_db()
    assert service.last_error_at is None


def test_failed_call_is_logged_and_reraised(service):
    with pytest.raises(TimeoutError):
        with track_api_call(service, endpoint='https://settle.example.com/redeem'):
            raise TimeoutError('read timed out')

    log = APIUsageLog.objects.get()
    assert log.success is False
    assert log.error_type == 'TimeoutError'
    assert log.error_message == 'read timed out'
    assert log.user is None
    service.refresh_from_db()
    assert service.last_error_at is not None


def test_long_endpoint_is_truncated(service):
    with track_api_call(service, endpoint='https://x.example.com/' + 'a' * 600):
        pass
    assert len(APIUsageLog.objects.get().endpoint) == 500
