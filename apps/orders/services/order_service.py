"""
Order placement as seen by the loyalty ledger.
"""
import uuid
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.customers.models import Customer
from ..models import Order


class OrderService:
    """Service class for order creation"""

    @staticmethod
    def generate_order_number() -> str:
        return f"ORD-{uuid.uuid4().hex[:10].upper()}"

    @staticmethod
    def touch_customer(tenant, phone, name='', total=Decimal('0')) -> Customer:
        """Find or create the customer for a phone and count the visit"""
        customer, created = Customer.objects.get_or_create(
            tenant=tenant, phone=phone, defaults={'name': name or ''}
        )
        # Loyalty columns are left alone; the ledger owns them
        Customer.objects.filter(pk=customer.pk).update(
            visit_count=F('visit_count') + 1,
            total_spent=F('total_spent') + total,
            last_visit_at=timezone.now(),
            name=name or customer.name,
        )
        customer.refresh_from_db()
        return customer

    @staticmethod
    @transaction.atomic
    def create_order(tenant, total, customer_phone: Optional[str] = None, customer_name: str = '') -> Order:
        """
        Create an order, counting the visit for a known or new customer.

        Points are awarded by the loyalty app once this transaction commits.
        """
        total = Decimal(str(total))
        if total < 0:
            raise ValueError("Order total cannot be negative")

        customer = None
        if customer_phone:
            customer = OrderService.touch_customer(tenant, customer_phone, customer_name, total)

        return Order.objects.create(
            tenant=tenant,
            customer=customer,
            order_number=OrderService.generate_order_number(),
            total=total,
        )
