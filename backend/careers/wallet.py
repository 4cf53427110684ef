"""
Wallet & Referral Ledger.

The ledger is the append-only ``WalletTransaction`` table. Balances are never
stored: every read sums the user's completed rows again.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.db.models.functions import Coalesce

from careers.exceptions import BelowMinimum, InsufficientBalance, InvalidDetails, Unauthenticated
from careers.models import WalletTransaction
from careers.settlement import notify_redemption

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')

# Detail fields each redemption method must carry
REQUIRED_DETAILS = {
    'upi': ('upi_id',),
    'bank_transfer': ('account_holder_name', 'account_number', 'ifsc_code'),
}


def _require_user(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        raise Unauthenticated()


def _sum(queryset):
    return queryset.aggregate(total=Coalesce(Sum('amount'), ZERO))['total']


def _completed_total(user):
    return _sum(WalletTransaction.objects.filter(user=user, status=WalletTransaction.STATUS_COMPLETED))


def get_balance(user) -> Decimal:
    """Sum of the user's completed transactions, never shown below zero."""
    _require_user(user)
    return max(ZERO, _completed_total(user))


def available_for_redemption(user) -> Decimal:
    """Balance minus redemption debits that settlement has not completed yet."""
    pending_debits = _sum(WalletTransaction.objects.filter(
        user=user,
        transaction_type=WalletTransaction.TYPE_REDEMPTION,
        status=WalletTransaction.STATUS_PENDING,
    ))
    return max(ZERO, _completed_total(user) + min(pending_debits, ZERO))


class TransactionHistory:
    """Newest-first view of a user's ledger.

    Nothing is queried until iteration starts, and every new iteration runs
    the query again.
    """

    def __init__(self, user, limit=None):
        self.user = user
        self.limit = limit

    def _queryset(self):
        queryset = WalletTransaction.objects.filter(user=self.user).select_related('source_user')
        queryset = queryset.order_by('-created_at', '-id')
        if self.limit is not None:
            queryset = queryset[:self.limit]
        return queryset

    def __iter__(self):
        return iter(self._queryset().iterator())


def list_transactions(user, limit=None):
    _require_user(user)
    return TransactionHistory(user, limit=limit)


def validate_redemption_details(method, details):
    required = REQUIRED_DETAILS.get(method)
    if required is None:
        raise InvalidDetails('Redemption method must be upi or bank_transfer.')
    details = details if isinstance(details, dict) else {}
    missing = [name for name in required if not str(details.get(name) or '').strip()]
    if missing:
        raise InvalidDetails(f"Missing redemption details: {', '.join(missing)}.")
    return {name: str(details[name]).strip() for name in required}


@dataclass
class RedemptionResult:
    success: bool
    message: str
    amount: Decimal
    method: str
    refresh_balance: bool = True


def request_redemption(user, amount, method, details) -> RedemptionResult:
    """Submit a redemption request to the settlement service.

    Checks run in a fixed order: minimum amount, available balance, then
    method details. No ledger row is written here; settlement records the
    debit itself. Requests of the same user are serialized on the user row.
    """
    _require_user(user)
    amount = Decimal(str(amount))
    minimum = Decimal(str(getattr(settings, 'WALLET_MINIMUM_REDEMPTION', 100)))
    if amount < minimum:
        raise BelowMinimum(f'Minimum redemption amount is {minimum}.')

    with transaction.atomic():
        get_user_model().objects.select_for_update().filter(pk=user.pk).first()

        available = available_for_redemption(user)
        if amount > available:
            raise InsufficientBalance(f'Insufficient balance. Available: {available}.')

        cleaned_details = validate_redemption_details(method, details)
        notify_redemption(user, amount, method, cleaned_details)

    logger.info('Redemption of %s via %s submitted for user %s', amount, method, user.pk)
    return RedemptionResult(
        success=True,
        message='Redemption request submitted successfully',
        amount=amount,
        method=method,
    )


def wallet_summary(user):
    """Balance plus referral and redemption totals for the wallet page."""
    _require_user(user)
    completed = Q(status=WalletTransaction.STATUS_COMPLETED)
    pending = Q(status=WalletTransaction.STATUS_PENDING)
    referral = Q(transaction_type=WalletTransaction.TYPE_REFERRAL)
    redemption = Q(transaction_type=WalletTransaction.TYPE_REDEMPTION)

    totals = WalletTransaction.objects.filter(user=user).aggregate(
        referral_earnings=Coalesce(Sum('amount', filter=referral & completed), ZERO),
        redeemed=Coalesce(Sum('amount', filter=redemption & completed), ZERO),
        pending_earnings=Coalesce(Sum('amount', filter=referral & pending), ZERO),
        pending_redemptions=Coalesce(Sum('amount', filter=redemption & pending), ZERO),
        referral_count=Count('source_user', filter=referral & completed, distinct=True),
    )
    return {
        'balance': max(ZERO, _completed_total(user)),
        'total_referral_earnings': totals['referral_earnings'],
        # Redemptions are stored as negative amounts
        'total_redeemed': abs(totals['redeemed']),
        'pending_earnings': totals['pending_earnings'],
        'pending_redemptions': abs(totals['pending_redemptions']),
        'referral_count': totals['referral_count'],
        'minimum_redemption': Decimal(str(getattr(settings, 'WALLET_MINIMUM_REDEMPTION', 100))),
    }
