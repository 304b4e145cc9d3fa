"""
Loyalty services module.

All services are exported from this module to maintain backward compatibility.
"""
from .tier_policy import TierPolicy, tier_rank, meets_min_tier
from .points_calculator import PointsCalculator, PointsQuote
from .ledger_service import LoyaltyLedgerService, AwardResult, RedemptionResult
from .summary_service import LoyaltySummaryService
from .stats_service import LoyaltyStatsService
from .audit_service import LoyaltyAuditService

__all__ = [
    'TierPolicy',
    'tier_rank',
    'meets_min_tier',
    'PointsCalculator',
    'PointsQuote',
    'LoyaltyLedgerService',
    'AwardResult',
    'RedemptionResult',
    'LoyaltySummaryService',
    'LoyaltyStatsService',
    'LoyaltyAuditService',
]
