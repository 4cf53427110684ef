"""
Client for the external redemption settlement service.

    POST REDEMPTION_SETTLEMENT_URL
    {"userId": "...", "amount": "250.00", "method": "upi", "details": {...}}
    -> {"success": true} | {"success": false, "error": "..."}
"""
import logging

import requests
from django.conf import settings

from careers.api_monitoring import SERVICE_SETTLEMENT, get_or_create_service, track_api_call
from careers.exceptions import SettlementUnavailable

logger = logging.getLogger(__name__)


def notify_redemption(user, amount, method, details):
    """Submit a redemption request. Returns the decoded body on success.

    Any transport error, timeout, non-2xx status or ``success: false`` raises
    ``SettlementUnavailable``. Nothing is retried.
    """
    url = getattr(settings, 'REDEMPTION_SETTLEMENT_URL', '')
    if not url:
        raise SettlementUnavailable('Redemption service is not configured.')
    timeout = getattr(settings, 'REDEMPTION_SETTLEMENT_TIMEOUT', 15)

    payload = {
        'userId': user.get_username(),
        'amount': str(amount),
        'method': method,
        'details': details,
    }
    service = get_or_create_service(SERVICE_SETTLEMENT, 'settlement')
    try:
        with track_api_call(service, endpoint=url, method='POST', user=user, metadata={'method': method}):
            response = requests.post(url, json=payload, timeout=timeout)
            response.raise_for_status()
    except requests.RequestException as exc:
        logger.error('Settlement request failed for user %s: %s', user.pk, exc)
        raise SettlementUnavailable() from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise SettlementUnavailable('Redemption service returned an unreadable response.') from exc

    if not isinstance(data, dict) or not data.get('success'):
        error = (data.get('error') if isinstance(data, dict) else None) or 'Failed to process redemption request'
        logger.warning('Settlement rejected redemption for user %s: %s', user.pk, error)
        raise SettlementUnavailable(error)
    return data
