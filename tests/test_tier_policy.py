"""
Tests for tier thresholds, multipliers and tier ranks.
"""
from decimal import Decimal

import pytest
from hypothesis import given, settings, strategies as st

from apps.loyalty.models import LoyaltyConfig, LoyaltyTier
from apps.loyalty.services import TierPolicy, tier_rank, meets_min_tier


def make_config(**overrides):
    """Unsaved config with the default tier table"""
    values = {
        'silver_threshold': 500,
        'gold_threshold': 1500,
        'platinum_threshold': 5000,
        'bronze_multiplier': Decimal('1'),
        'silver_multiplier': Decimal('1.25'),
        'gold_multiplier': Decimal('1.5'),
        'platinum_multiplier': Decimal('2'),
    }
    values.update(overrides)
    return LoyaltyConfig(**values)


class TestTierFor:

    @pytest.mark.parametrize('points, expected', [
        (0, LoyaltyTier.BRONZE),
        (499, LoyaltyTier.BRONZE),
        (500, LoyaltyTier.SILVER),
        (1499, LoyaltyTier.SILVER),
        (1500, LoyaltyTier.GOLD),
        (4999, LoyaltyTier.GOLD),
        (5000, LoyaltyTier.PLATINUM),
        (250000, LoyaltyTier.PLATINUM),
    ])
    def test_threshold_boundaries(self, points, expected):
        assert TierPolicy.tier_for(points, make_config()) == expected

    def test_missing_config_is_bronze(self):
        assert TierPolicy.tier_for(10000, None) == LoyaltyTier.BRONZE

    def test_malformed_threshold_falls_back_to_bronze(self):
        config = make_config(platinum_threshold=None)
        assert TierPolicy.tier_for(10000, config) == LoyaltyTier.BRONZE

    @given(points=st.integers(min_value=0, max_value=10 ** 7))
    @settings(max_examples=200, deadline=None)
    def test_tier_matches_highest_reached_threshold(self, points):
        config = make_config()
        tier = TierPolicy.tier_for(points, config)
        if points >= 5000:
            assert tier == LoyaltyTier.PLATINUM
        elif points >= 1500:
            assert tier == LoyaltyTier.GOLD
        elif points >= 500:
            assert tier == LoyaltyTier.SILVER
        else:
            assert tier == LoyaltyTier.BRONZE

    @given(
        a=st.integers(min_value=0, max_value=10 ** 6),
        b=st.integers(min_value=0, max_value=10 ** 6),
    )
    @settings(max_examples=200, deadline=None)
    def test_tier_is_monotonic_in_balance(self, a, b):
        config = make_config()
        low, high = min(a, b), max(a, b)
        assert tier_rank(TierPolicy.tier_for(low, config)) <= tier_rank(TierPolicy.tier_for(high, config))


class TestMultiplierFor:

    @pytest.mark.parametrize('tier, expected', [
        (LoyaltyTier.BRONZE, Decimal('1')),
        (LoyaltyTier.SILVER, Decimal('1.25')),
        (LoyaltyTier.GOLD, Decimal('1.5')),
        (LoyaltyTier.PLATINUM, Decimal('2')),
        ('GOLD', Decimal('1.5')),
    ])
    def test_table_lookup(self, tier, expected):
        assert TierPolicy.multiplier_for(tier, make_config()) == expected

    def test_missing_config_defaults_to_one(self):
        assert TierPolicy.multiplier_for(LoyaltyTier.PLATINUM, None) == Decimal('1')

    def test_unknown_tier_defaults_to_one(self):
        assert TierPolicy.multiplier_for('DIAMOND', make_config()) == Decimal('1')

    @pytest.mark.parametrize('bad_value', [None, 'abc', Decimal('0'), Decimal('-2')])
    def test_malformed_multiplier_defaults_to_one(self, bad_value):
        config = make_config(gold_multiplier=bad_value)
        assert TierPolicy.multiplier_for(LoyaltyTier.GOLD, config) == Decimal('1')


class TestTierRank:

    def test_order(self):
        ranks = [tier_rank(t) for t in ('BRONZE', 'SILVER', 'GOLD', 'PLATINUM')]
        assert ranks == [0, 1, 2, 3]

    def test_meets_min_tier(self):
        assert meets_min_tier(LoyaltyTier.GOLD, LoyaltyTier.SILVER)
        assert meets_min_tier(LoyaltyTier.SILVER, LoyaltyTier.SILVER)
        assert not meets_min_tier(LoyaltyTier.BRONZE, LoyaltyTier.SILVER)

    def test_next_tier_and_threshold(self):
        config = make_config()
        assert TierPolicy.next_tier(LoyaltyTier.BRONZE) == LoyaltyTier.SILVER
        assert TierPolicy.next_threshold(LoyaltyTier.BRONZE, config) == 500
        assert TierPolicy.next_threshold(LoyaltyTier.GOLD, config) == 5000
        assert TierPolicy.next_tier(LoyaltyTier.PLATINUM) is None
        assert TierPolicy.next_threshold(LoyaltyTier.PLATINUM, config) is None
