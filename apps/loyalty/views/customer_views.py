"""
Customer-facing loyalty views: summary, ledger history and reward redemption.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.customers.models import Customer
from ..exceptions import ConfigMissingOrInactive, status_for_code
from ..models import LoyaltyTransaction
from ..services import LoyaltyLedgerService, LoyaltySummaryService
from ..serializers import (
    CustomerLookupSerializer, TransactionFilterSerializer, RedeemRewardSerializer,
    LoyaltySummarySerializer, LoyaltyTransactionSerializer
)
from .lookup import (
    invalid_input, error_response, tenant_not_found, customer_not_found,
    resolve_tenant, resolve_customer_id
)


@api_view(['GET'])
@permission_classes([AllowAny])
def get_loyalty_summary(request):
    """Get a customer's balance, tier, recent history and rewards"""
    serializer = CustomerLookupSerializer(data=request.query_params)
    if not serializer.is_valid():
        return invalid_input(serializer)

    tenant = resolve_tenant(serializer.validated_data['tenant_slug'])
    if tenant is None:
        return tenant_not_found()

    customer_id = resolve_customer_id(tenant, serializer.validated_data)
    if customer_id is None:
        return customer_not_found()

    summary = LoyaltySummaryService.summary_for(tenant.id, customer_id)
    if summary is None:
        if not Customer.objects.filter(pk=customer_id, tenant=tenant).exists():
            return customer_not_found()
        error = ConfigMissingOrInactive()
        return error_response(error.code, error.message, error.status_code)

    return Response({
        'success': True,
        'data': LoyaltySummarySerializer(summary).data
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def get_loyalty_transactions(request):
    """Get a customer's ledger history, newest first"""
    serializer = TransactionFilterSerializer(data=request.query_params)
    if not serializer.is_valid():
        return invalid_input(serializer)

    data = serializer.validated_data
    tenant = resolve_tenant(data['tenant_slug'])
    if tenant is None:
        return tenant_not_found()

    customer_id = resolve_customer_id(tenant, data)
    if customer_id is None or not Customer.objects.filter(pk=customer_id, tenant=tenant).exists():
        return customer_not_found()

    transactions = LoyaltyTransaction.objects.filter(
        tenant=tenant, customer_id=customer_id
    ).select_related('reward')
    if data.get('type'):
        transactions = transactions.filter(transaction_type=data['type'])

    page = data['page']
    page_size = data['page_size']
    start = (page - 1) * page_size
    end = start + page_size
    total = transactions.count()

    return Response({
        'success': True,
        'data': {
            'transactions': LoyaltyTransactionSerializer(transactions[start:end], many=True).data,
            'pagination': {
                'page': page,
                'page_size': page_size,
                'total': total,
                'has_next': end < total
            }
        }
    })


@api_view(['POST'])
@permission_classes([AllowAny])
def redeem_reward(request):
    """Spend a customer's points on a reward"""
    serializer = RedeemRewardSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_input(serializer)

    data = serializer.validated_data
    tenant = resolve_tenant(data['tenant_slug'])
    if tenant is None:
        return tenant_not_found()

    # An unknown customer is reported by the ledger after the reward checks
    customer_id = resolve_customer_id(tenant, data)

    result = LoyaltyLedgerService.redeem_reward(
        tenant_id=tenant.id,
        customer_id=customer_id,
        reward_id=data['reward_id'],
        order_id=data.get('order_id') or None,
    )

    if not result.success:
        return error_response(result.error_code, result.message, status_for_code(result.error_code))

    return Response({
        'success': True,
        'message': 'Reward redeemed',
        'data': result.to_dict()
    })
