"""
Staff loyalty views: tenant overview and manual bonus grants.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from ..services import LoyaltyLedgerService, LoyaltyStatsService
from ..serializers import BonusPointsSerializer, TenantLookupSerializer, LoyaltyOverviewSerializer
from .lookup import invalid_input, tenant_not_found, customer_not_found, resolve_tenant, resolve_customer_id


@api_view(['GET'])
@permission_classes([IsAdminUser])
def get_loyalty_overview(request):
    """Get the tenant's loyalty config, reward usage and customer statistics"""
    serializer = TenantLookupSerializer(data=request.query_params)
    if not serializer.is_valid():
        return invalid_input(serializer)

    tenant = resolve_tenant(serializer.validated_data['tenant_slug'])
    if tenant is None:
        return tenant_not_found()

    overview = LoyaltyStatsService.tenant_overview(tenant.id)
    return Response({
        'success': True,
        'data': LoyaltyOverviewSerializer(overview).data
    })


@api_view(['POST'])
@permission_classes([IsAdminUser])
def grant_bonus_points(request):
    """Credit bonus points to a customer"""
    serializer = BonusPointsSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_input(serializer)

    data = serializer.validated_data
    tenant = resolve_tenant(data['tenant_slug'])
    if tenant is None:
        return tenant_not_found()

    customer_id = resolve_customer_id(tenant, data)
    if customer_id is None:
        return customer_not_found()

    # CustomerNotFound and ConcurrencyConflict are rendered by the API exception handler
    result = LoyaltyLedgerService.grant_bonus(
        tenant.id, customer_id, data['points'], data.get('description', '')
    )

    return Response({
        'success': True,
        'message': f'{result.points_earned} bonus points granted',
        'data': result.to_dict()
    }, status=status.HTTP_201_CREATED)
