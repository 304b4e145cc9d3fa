"""
Reward eligibility rules shared by redemption and the loyalty summary.
"""
from ..exceptions import (
    InsufficientBalance, RewardExpired, RewardUsageLimitExceeded, TierIneligible
)
from .tier_policy import meets_min_tier


def reward_availability_error(reward, now=None):
    """Error that stops anyone from claiming the reward right now, or None"""
    if reward.is_expired(now):
        return RewardExpired()
    if not reward.has_usage_remaining:
        return RewardUsageLimitExceeded()
    return None


def customer_eligibility_error(reward, customer):
    """Error that stops this customer from claiming the reward, or None"""
    if customer.loyalty_points < reward.points_cost:
        return InsufficientBalance(
            f"Insufficient points. Available: {customer.loyalty_points}, required: {reward.points_cost}"
        )
    if not meets_min_tier(customer.loyalty_tier, reward.min_tier):
        return TierIneligible(f"This reward requires at least {reward.min_tier} tier")
    return None


def is_redeemable(reward, customer, now=None):
    if not reward.is_active:
        return False
    return reward_availability_error(reward, now) is None and customer_eligibility_error(reward, customer) is None
