"""
Loyalty views module.

All views are exported from this module to maintain backward compatibility.
"""
from .customer_views import get_loyalty_summary, get_loyalty_transactions, redeem_reward
from .staff_views import get_loyalty_overview, grant_bonus_points

__all__ = [
    'get_loyalty_summary',
    'get_loyalty_transactions',
    'redeem_reward',
    'get_loyalty_overview',
    'grant_bonus_points',
]
