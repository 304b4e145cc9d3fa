from django.db import models
from django.utils import timezone


class Order(models.Model):
    """A placed order; only the fields the loyalty ledger reads are kept here"""
    tenant = models.ForeignKey('tenants.Tenant', on_delete=models.CASCADE, related_name='orders')
    customer = models.ForeignKey(
        'customers.Customer', on_delete=models.SET_NULL, null=True, blank=True, related_name='orders'
    )
    order_number = models.CharField(max_length=50, unique=True)
    total = models.DecimalField(max_digits=10, decimal_places=2, help_text="Total order amount")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['tenant', 'created_at'], name='orders_tenant_created'),
        ]

    def __str__(self):
        return f"Order {self.order_number} - {self.total}"
