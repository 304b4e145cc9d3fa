"""
Loyalty reward and config serializers.
"""
from rest_framework import serializers
from ..models import LoyaltyConfig, LoyaltyReward


class LoyaltyRewardSerializer(serializers.ModelSerializer):
    """Catalog entry as shown to customers"""
    reward_type_display = serializers.CharField(source='get_reward_type_display', read_only=True)
    can_redeem = serializers.SerializerMethodField()

    class Meta:
        model = LoyaltyReward
        fields = [
            'id', 'name', 'description', 'reward_type', 'reward_type_display',
            'points_cost', 'value', 'min_tier', 'valid_until', 'can_redeem'
        ]
        read_only_fields = fields

    def get_can_redeem(self, obj):
        # Set by the summary service; absent on plain catalog reads
        return getattr(obj, 'can_redeem', None)


class LoyaltyRewardUsageSerializer(serializers.ModelSerializer):
    """Catalog entry with usage counters for staff"""

    class Meta:
        model = LoyaltyReward
        fields = [
            'id', 'name', 'reward_type', 'points_cost', 'value', 'min_tier',
            'usage_limit', 'used_count', 'valid_until', 'is_active'
        ]
        read_only_fields = fields


class LoyaltyConfigSerializer(serializers.ModelSerializer):

    class Meta:
        model = LoyaltyConfig
        fields = [
            'points_per_spent', 'min_spend_for_points',
            'silver_threshold', 'gold_threshold', 'platinum_threshold',
            'bronze_multiplier', 'silver_multiplier', 'gold_multiplier', 'platinum_multiplier',
            'points_validity_days', 'birthday_bonus_points', 'is_active'
        ]
        read_only_fields = fields
