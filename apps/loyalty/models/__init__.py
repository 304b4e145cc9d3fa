"""
Loyalty models module.

All models are exported from this module to maintain backward compatibility.
"""
from ..choices import LoyaltyTier, TransactionType, RewardType
from .config import LoyaltyConfig
from .reward import LoyaltyReward
from .transaction import LoyaltyTransaction

__all__ = [
    'LoyaltyTier',
    'TransactionType',
    'RewardType',
    'LoyaltyConfig',
    'LoyaltyReward',
    'LoyaltyTransaction',
]
