"""
Tenant-wide loyalty statistics for staff dashboards.
"""
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Avg, Count, Sum

from apps.customers.models import Customer
from ..models import LoyaltyConfig, LoyaltyReward
from .tier_policy import TIER_ORDER


class LoyaltyStatsService:

    @staticmethod
    def tenant_overview(tenant_id):
        """Config, reward catalog with usage, and customer balance statistics"""
        customers = Customer.objects.filter(tenant_id=tenant_id)
        totals = customers.aggregate(
            total_customers=Count('id'),
            total_points=Sum('loyalty_points'),
            average_points=Avg('loyalty_points'),
        )

        average = totals['average_points']
        average_points = 0
        if average is not None:
            average_points = int(Decimal(str(average)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))

        tier_distribution = {tier.value: 0 for tier in TIER_ORDER}
        rows = customers.values('loyalty_tier').annotate(count=Count('id')).order_by()
        for row in rows:
            tier = row['loyalty_tier']
            if tier in tier_distribution:
                tier_distribution[tier] = row['count']

        return {
            'config': LoyaltyConfig.get_for_tenant(tenant_id),
            'rewards': list(LoyaltyReward.objects.filter(tenant_id=tenant_id).order_by('points_cost', 'id')),
            'total_customers': totals['total_customers'] or 0,
            'total_points': totals['total_points'] or 0,
            'average_points': average_points,
            'tier_distribution': tier_distribution,
        }
