"""
Loyalty summary and overview response serializers.
"""
from rest_framework import serializers
from .reward_serializers import LoyaltyConfigSerializer, LoyaltyRewardSerializer, LoyaltyRewardUsageSerializer
from .transaction_serializers import LoyaltyTransactionSerializer


class LoyaltySummarySerializer(serializers.Serializer):
    """Serializer for the customer loyalty dashboard"""
    customer_id = serializers.IntegerField(source='customer.id')
    customer_name = serializers.CharField(source='customer.name')
    points = serializers.IntegerField()
    tier = serializers.CharField()
    total_spent = serializers.DecimalField(max_digits=12, decimal_places=2)
    visit_count = serializers.IntegerField()
    multiplier = serializers.DecimalField(max_digits=4, decimal_places=2)
    next_tier = serializers.CharField(allow_null=True)
    points_to_next_tier = serializers.IntegerField(allow_null=True)
    program_active = serializers.BooleanField()
    recent_transactions = LoyaltyTransactionSerializer(many=True)
    available_rewards = LoyaltyRewardSerializer(many=True)
    redeemable_rewards = LoyaltyRewardSerializer(many=True)
    redeemable_rewards_count = serializers.IntegerField()


class LoyaltyOverviewSerializer(serializers.Serializer):
    """Serializer for the staff tenant overview"""
    config = LoyaltyConfigSerializer(allow_null=True)
    rewards = LoyaltyRewardUsageSerializer(many=True)
    total_customers = serializers.IntegerField()
    total_points = serializers.IntegerField()
    average_points = serializers.IntegerField()
    tier_distribution = serializers.DictField(child=serializers.IntegerField())
