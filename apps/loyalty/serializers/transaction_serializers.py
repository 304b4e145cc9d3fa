"""
Loyalty transaction serializers for ledger listings.
"""
from rest_framework import serializers
from ..models import LoyaltyTransaction


class LoyaltyTransactionSerializer(serializers.ModelSerializer):
    """
    Serializer for ledger rows.
    Used for: GET /api/loyalty/transactions/ and the summary's recent transactions
    """
    transaction_type_display = serializers.CharField(source='get_transaction_type_display', read_only=True)
    reward_name = serializers.CharField(source='reward.name', read_only=True, default=None)

    class Meta:
        model = LoyaltyTransaction
        fields = [
            'id', 'transaction_type', 'transaction_type_display', 'points',
            'balance_before', 'balance_after', 'order_id', 'reward', 'reward_name',
            'description', 'created_at'
        ]
        read_only_fields = fields
