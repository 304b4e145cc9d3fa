"""
Request serializers for the loyalty API.
"""
from rest_framework import serializers

from ..choices import TransactionType


class CustomerLookupSerializer(serializers.Serializer):
    """
    Identify a customer within a tenant by id or phone.
    Used for: GET /api/loyalty/summary/ and GET /api/loyalty/transactions/
    """
    tenant_slug = serializers.SlugField(max_length=100)
    customer_id = serializers.IntegerField(required=False, min_value=1)
    phone = serializers.CharField(required=False, max_length=20)

    def validate(self, attrs):
        if not attrs.get('customer_id') and not attrs.get('phone'):
            raise serializers.ValidationError("Either customer_id or phone is required")
        return attrs


class TransactionFilterSerializer(CustomerLookupSerializer):
    type = serializers.ChoiceField(choices=TransactionType.choices, required=False)
    page = serializers.IntegerField(min_value=1, default=1)
    page_size = serializers.IntegerField(min_value=1, max_value=100, default=20)


class RedeemRewardSerializer(CustomerLookupSerializer):
    """
    Serializer for reward redemption requests.
    Used for: POST /api/loyalty/redeem/
    """
    reward_id = serializers.IntegerField(min_value=1)
    order_id = serializers.CharField(required=False, allow_blank=True, max_length=100)


class BonusPointsSerializer(CustomerLookupSerializer):
    """
    Serializer for staff bonus grants.
    Used for: POST /api/loyalty/bonus/
    """
    points = serializers.IntegerField(min_value=1, max_value=100000)
    description = serializers.CharField(required=False, allow_blank=True, max_length=255)


class TenantLookupSerializer(serializers.Serializer):
    tenant_slug = serializers.SlugField(max_length=100)
