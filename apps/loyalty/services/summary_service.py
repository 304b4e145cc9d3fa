"""
Summary service: a read-only projection of a customer's loyalty state.
"""
from django.conf import settings
from django.utils import timezone

from apps.customers.models import Customer
from ..models import LoyaltyConfig, LoyaltyReward
from .eligibility import is_redeemable
from .tier_policy import TierPolicy


class LoyaltySummaryService:
    """Build the loyalty dashboard for one customer"""

    @staticmethod
    def summary_for(tenant_id, customer_id, now=None):
        """
        Loyalty summary for a customer, or None when the customer is unknown
        or the tenant never set up a loyalty program.

        Rewards come back as model instances annotated with ``can_redeem``,
        using the same eligibility rules as redemption.
        """
        customer = Customer.objects.filter(pk=customer_id, tenant_id=tenant_id).first()
        if customer is None:
            return None

        config = LoyaltyConfig.get_for_tenant(tenant_id)
        if config is None:
            return None

        now = now or timezone.now()
        tier = customer.loyalty_tier
        next_threshold = TierPolicy.next_threshold(tier, config)
        points_to_next_tier = None
        if next_threshold is not None:
            points_to_next_tier = max(0, next_threshold - customer.loyalty_points)

        recent_transactions = list(
            customer.loyalty_transactions.all()[:settings.LOYALTY_RECENT_TRANSACTIONS]
        )

        available_rewards = list(LoyaltyReward.available_for_tenant(tenant_id, now))
        for reward in available_rewards:
            reward.can_redeem = is_redeemable(reward, customer, now)
        redeemable_rewards = [reward for reward in available_rewards if reward.can_redeem]

        return {
            'customer': customer,
            'points': customer.loyalty_points,
            'tier': tier,
            'total_spent': customer.total_spent,
            'visit_count': customer.visit_count,
            'multiplier': TierPolicy.multiplier_for(tier, config),
            'next_tier': TierPolicy.next_tier(tier),
            'points_to_next_tier': points_to_next_tier,
            'program_active': config.is_active,
            'recent_transactions': recent_transactions,
            'available_rewards': available_rewards,
            'redeemable_rewards': redeemable_rewards,
            'redeemable_rewards_count': len(redeemable_rewards),
        }
