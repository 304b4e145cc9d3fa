"""
Loyalty ledger service: the only writer of a customer's point balance and tier.

Each write is one atomic unit of work per customer: the customer row is
locked, the new balance is computed from the locked row, an immutable
ledger entry is appended and the balance/tier pair is persisted with an
update guarded by the row version. A version mismatch raises
ConcurrencyConflict and the whole unit is retried.
"""
import logging
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Optional

from django.db.models import F
from django.utils import timezone

from apps.customers.models import Customer
from ..exceptions import (
    LoyaltyError, ConcurrencyConflict, CustomerNotFound, InsufficientBalance,
    RewardNotFound, RewardUsageLimitExceeded
)
from ..models import LoyaltyConfig, LoyaltyReward, LoyaltyTransaction, TransactionType
from .eligibility import reward_availability_error, customer_eligibility_error
from .points_calculator import PointsCalculator
from .retry import atomic_with_retry
from .tier_policy import TierPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AwardResult:
    points_earned: int
    new_balance: int
    new_tier: str

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class RedemptionResult:
    success: bool
    points_used: int = 0
    new_balance: Optional[int] = None
    new_tier: Optional[str] = None
    transaction_id: Optional[int] = None
    error_code: Optional[str] = None
    message: str = ''

    @classmethod
    def failure(cls, error: LoyaltyError) -> 'RedemptionResult':
        return cls(success=False, error_code=error.code, message=error.message)

    def to_dict(self):
        return asdict(self)


def _lock_customer(tenant_id, customer_id) -> Customer:
    try:
        return Customer.objects.select_for_update().get(pk=customer_id, tenant_id=tenant_id)
    except Customer.DoesNotExist:
        raise CustomerNotFound()


def _apply_balance_change(customer, points, transaction_type, config, order_id=None, reward=None, description=''):
    """Append a ledger entry and move the customer's balance and tier with it"""
    balance_before = customer.loyalty_points
    balance_after = balance_before + points
    if balance_after < 0:
        raise InsufficientBalance()

    old_tier = customer.loyalty_tier
    new_tier = TierPolicy.tier_for(balance_after, config)

    updated = Customer.objects.filter(pk=customer.pk, version=customer.version).update(
        loyalty_points=balance_after,
        loyalty_tier=new_tier,
        version=F('version') + 1,
        updated_at=timezone.now(),
    )
    if updated != 1:
        raise ConcurrencyConflict()

    entry = LoyaltyTransaction.objects.create(
        tenant_id=customer.tenant_id,
        customer=customer,
        transaction_type=transaction_type,
        points=points,
        balance_before=balance_before,
        balance_after=balance_after,
        order_id=order_id,
        reward=reward,
        description=description[:255],
    )

    customer.loyalty_points = balance_after
    customer.loyalty_tier = new_tier
    customer.version += 1

    if new_tier != old_tier:
        logger.info(f"Customer {customer.pk} tier changed {old_tier} -> {new_tier} at {balance_after} points")

    return entry


@atomic_with_retry
def _award_order_points(tenant_id, customer_id, order_id, order_total):
    customer = _lock_customer(tenant_id, customer_id)

    if order_id and LoyaltyTransaction.objects.filter(
        customer=customer, order_id=order_id, transaction_type=TransactionType.EARN
    ).exists():
        logger.warning(f"Points for order {order_id} already awarded to customer {customer.pk}, skipping")
        return AwardResult(0, customer.loyalty_points, customer.loyalty_tier)

    config = LoyaltyConfig.get_for_tenant(tenant_id)
    quote = PointsCalculator.calculate(config, customer.loyalty_tier, order_total)

    # Zero-point awards are never written to the ledger
    if quote.points <= 0:
        return AwardResult(0, customer.loyalty_points, customer.loyalty_tier)

    order_ref = order_id[-6:] if order_id else '-'
    entry = _apply_balance_change(
        customer, quote.points, TransactionType.EARN, config,
        order_id=order_id,
        description=f"Order #{order_ref} - {order_total:.2f} (x{quote.multiplier})",
    )
    return AwardResult(quote.points, entry.balance_after, customer.loyalty_tier)


@atomic_with_retry
def _redeem_reward(tenant_id, customer_id, reward_id, order_id):
    now = timezone.now()

    reward = LoyaltyReward.objects.filter(pk=reward_id, tenant_id=tenant_id, is_active=True).first()
    if reward is None:
        raise RewardNotFound()

    error = reward_availability_error(reward, now)
    if error:
        raise error

    customer = _lock_customer(tenant_id, customer_id)

    error = customer_eligibility_error(reward, customer)
    if error:
        raise error

    if not LoyaltyReward.claim_usage(reward.pk):
        raise RewardUsageLimitExceeded()

    config = LoyaltyConfig.get_for_tenant(tenant_id)
    entry = _apply_balance_change(
        customer, -reward.points_cost, TransactionType.REDEEM, config,
        order_id=order_id,
        reward=reward,
        description=f"Reward redeemed: {reward.name}",
    )
    return entry, customer


@atomic_with_retry
def _grant_bonus(tenant_id, customer_id, points, description):
    customer = _lock_customer(tenant_id, customer_id)
    config = LoyaltyConfig.get_for_tenant(tenant_id)
    entry = _apply_balance_change(
        customer, points, TransactionType.BONUS, config,
        description=description or 'Bonus points',
    )
    return AwardResult(points, entry.balance_after, customer.loyalty_tier)


class LoyaltyLedgerService:
    """Earn, redeem and bonus entry points of the loyalty ledger"""

    @staticmethod
    def award_order_points(tenant_id, customer_id, order_id, order_total) -> AwardResult:
        """
        Award points for a durably created order.

        Points are computed from the balance and tier held when the unit of
        work starts. An order whose points were already awarded is skipped.
        Raises CustomerNotFound, or ConcurrencyConflict once retries are spent.
        """
        order_id = str(order_id) if order_id is not None else None
        return _award_order_points(tenant_id, customer_id, order_id, Decimal(str(order_total)))

    @staticmethod
    def redeem_reward(tenant_id, customer_id, reward_id, order_id=None) -> RedemptionResult:
        """
        Spend points on a reward.

        Validation failures come back as a failed RedemptionResult carrying the
        error code; nothing is written in that case. Unexpected storage errors
        propagate.
        """
        order_id = str(order_id) if order_id else None
        try:
            entry, customer = _redeem_reward(tenant_id, customer_id, reward_id, order_id)
        except LoyaltyError as e:
            logger.info(f"Redemption of reward {reward_id} by customer {customer_id} denied: {e.code}")
            return RedemptionResult.failure(e)

        logger.info(
            f"Customer {customer.pk} redeemed reward {reward_id} for {-entry.points} points, "
            f"balance {entry.balance_before} -> {entry.balance_after}"
        )
        return RedemptionResult(
            success=True,
            points_used=-entry.points,
            new_balance=entry.balance_after,
            new_tier=customer.loyalty_tier,
            transaction_id=entry.pk,
        )

    @staticmethod
    def grant_bonus(tenant_id, customer_id, points, description='') -> AwardResult:
        """Credit bonus points outside of an order"""
        if not isinstance(points, int) or isinstance(points, bool) or points <= 0:
            raise ValueError("Bonus points must be a positive integer")
        return _grant_bonus(tenant_id, customer_id, points, description)
