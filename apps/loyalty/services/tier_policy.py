"""
Tier policy: pure functions mapping a point balance to a tier and a tier to
an earning multiplier. No I/O; malformed config falls back to BRONZE and a
multiplier of 1.
"""
from decimal import Decimal, InvalidOperation

from ..choices import LoyaltyTier

TIER_ORDER = [LoyaltyTier.BRONZE, LoyaltyTier.SILVER, LoyaltyTier.GOLD, LoyaltyTier.PLATINUM]

DEFAULT_MULTIPLIER = Decimal('1')


def _as_tier(tier):
    try:
        return LoyaltyTier(tier)
    except ValueError:
        return None


def tier_rank(tier):
    """Ordinal rank of a tier, BRONZE=0 ... PLATINUM=3. Unknown values rank as BRONZE."""
    known = _as_tier(tier)
    return TIER_ORDER.index(known) if known is not None else 0


def meets_min_tier(tier, min_tier):
    """True when ``tier`` is at least ``min_tier``"""
    return tier_rank(tier) >= tier_rank(min_tier)


class TierPolicy:
    """Tier thresholds and multipliers driven by a tenant's LoyaltyConfig"""

    @staticmethod
    def tier_for(points, config):
        """Highest tier whose threshold the balance reaches (threshold inclusive)"""
        if config is None:
            return LoyaltyTier.BRONZE
        try:
            if points >= config.platinum_threshold:
                return LoyaltyTier.PLATINUM
            if points >= config.gold_threshold:
                return LoyaltyTier.GOLD
            if points >= config.silver_threshold:
                return LoyaltyTier.SILVER
        except TypeError:
            return LoyaltyTier.BRONZE
        return LoyaltyTier.BRONZE

    @staticmethod
    def multiplier_for(tier, config):
        """Earning multiplier for a tier; 1 when missing or misconfigured"""
        known = _as_tier(tier)
        if config is None or known is None:
            return DEFAULT_MULTIPLIER
        try:
            multiplier = Decimal(str(config.multipliers[known]))
        except (InvalidOperation, KeyError, TypeError, ValueError):
            return DEFAULT_MULTIPLIER
        if not multiplier.is_finite() or multiplier <= 0:
            return DEFAULT_MULTIPLIER
        return multiplier

    @staticmethod
    def next_tier(tier):
        """Tier directly above ``tier``, or None at the top"""
        position = tier_rank(tier)
        if position + 1 < len(TIER_ORDER):
            return TIER_ORDER[position + 1]
        return None

    @staticmethod
    def next_threshold(tier, config):
        """Balance needed to reach the tier above ``tier``; None at the top or without config"""
        upcoming = TierPolicy.next_tier(tier)
        if upcoming is None or config is None:
            return None
        return config.thresholds[upcoming]
