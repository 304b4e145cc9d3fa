"""
Points calculator for tier-based point calculations.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR

from apps.customers.models import Customer
from ..choices import LoyaltyTier
from ..models import LoyaltyConfig
from .tier_policy import TierPolicy, DEFAULT_MULTIPLIER


@dataclass(frozen=True)
class PointsQuote:
    points: int
    multiplier: Decimal
    tier_used: str


NO_POINTS = PointsQuote(points=0, multiplier=DEFAULT_MULTIPLIER, tier_used=LoyaltyTier.BRONZE)


def _floor(value):
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


class PointsCalculator:
    """Calculate points an order earns for a customer"""

    @staticmethod
    def calculate(config, tier, order_total):
        """
        Points for an order given the customer's tier before the order.

        A missing or inactive config disables earning. Orders under the
        minimum spend earn nothing but still report the customer's tier.
        """
        if config is None or not config.is_active:
            return NO_POINTS

        order_total = Decimal(str(order_total))
        if order_total < config.min_spend_for_points:
            return PointsQuote(points=0, multiplier=DEFAULT_MULTIPLIER, tier_used=tier)

        multiplier = TierPolicy.multiplier_for(tier, config)
        base_points = _floor(order_total * Decimal(str(config.points_per_spent)))
        points = _floor(Decimal(base_points) * multiplier)

        return PointsQuote(points=max(points, 0), multiplier=multiplier, tier_used=tier)

    @classmethod
    def points_for_order(cls, tenant_id, customer_id, order_total):
        """Quote an order for a stored customer without writing anything"""
        config = LoyaltyConfig.get_for_tenant(tenant_id)
        if config is None or not config.is_active:
            return NO_POINTS

        customer = Customer.objects.filter(pk=customer_id, tenant_id=tenant_id).only('loyalty_tier').first()
        if customer is None:
            return NO_POINTS

        return cls.calculate(config, customer.loyalty_tier, order_total)
