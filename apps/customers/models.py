from django.db import models

from apps.loyalty.choices import LoyaltyTier

# Written only by the loyalty ledger through conditional updates
LEDGER_FIELDS = ('loyalty_points', 'loyalty_tier', 'version')


class Customer(models.Model):
    """
    A diner known to one tenant.

    loyalty_points and loyalty_tier are owned by the loyalty ledger
    (apps.loyalty.services.LoyaltyLedgerService); nothing else writes them.
    version is bumped on every ledger write and guards the conditional update.
    """
    tenant = models.ForeignKey('tenants.Tenant', on_delete=models.CASCADE, related_name='customers')
    phone = models.CharField(max_length=20)
    name = models.CharField(max_length=200, blank=True)
    loyalty_points = models.PositiveIntegerField(default=0)
    loyalty_tier = models.CharField(max_length=10, choices=LoyaltyTier.choices, default=LoyaltyTier.BRONZE)
    total_spent = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    visit_count = models.PositiveIntegerField(default=0)
    last_visit_at = models.DateTimeField(null=True, blank=True)
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        ordering = ['-created_at']
        verbose_name = 'Customer'
        verbose_name_plural = 'Customers'
        constraints = [
            models.UniqueConstraint(fields=['tenant', 'phone'], name='uniq_customer_phone_per_tenant'),
            models.CheckConstraint(condition=models.Q(loyalty_points__gte=0), name='customer_loyalty_points_non_negative'),
        ]

    def __str__(self):
        return f"{self.name or self.phone} - {self.loyalty_points} points ({self.loyalty_tier})"

    def save(self, *args, **kwargs):
        """
        Save the customer without writing back the ledger-owned columns.

        A plain save of an existing row updates every other concrete field,
        so a stale instance cannot roll back a balance the ledger moved.
        """
        if not self._state.adding and self.pk is not None and kwargs.get('update_fields') is None:
            kwargs['update_fields'] = [
                field.name for field in self._meta.concrete_fields
                if not field.primary_key and field.name not in LEDGER_FIELDS
            ]
        super().save(*args, **kwargs)

    @classmethod
    def find_for_tenant(cls, tenant_id, customer_id=None, phone=None):
        """Look a customer up by id or phone, only within the given tenant"""
        queryset = cls.objects.filter(tenant_id=tenant_id)
        if customer_id is not None:
            return queryset.filter(pk=customer_id).first()
        if phone:
            return queryset.filter(phone=phone).first()
        return None
