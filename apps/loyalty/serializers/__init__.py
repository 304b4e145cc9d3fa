"""
Loyalty serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .transaction_serializers import LoyaltyTransactionSerializer
from .reward_serializers import LoyaltyRewardSerializer, LoyaltyRewardUsageSerializer, LoyaltyConfigSerializer
from .request_serializers import (
    CustomerLookupSerializer,
    TransactionFilterSerializer,
    RedeemRewardSerializer,
    BonusPointsSerializer,
    TenantLookupSerializer,
)
from .summary_serializers import LoyaltySummarySerializer, LoyaltyOverviewSerializer

__all__ = [
    'LoyaltyTransactionSerializer',
    'LoyaltyRewardSerializer',
    'LoyaltyRewardUsageSerializer',
    'LoyaltyConfigSerializer',
    'CustomerLookupSerializer',
    'TransactionFilterSerializer',
    'RedeemRewardSerializer',
    'BonusPointsSerializer',
    'TenantLookupSerializer',
    'LoyaltySummarySerializer',
    'LoyaltyOverviewSerializer',
]
