from django.db import models
from django.db.models import F, Q

from ..choices import TransactionType


class LoyaltyTransaction(models.Model):
    """Immutable ledger entry for one balance change"""
    tenant = models.ForeignKey('tenants.Tenant', on_delete=models.CASCADE, related_name='loyalty_transactions')
    customer = models.ForeignKey('customers.Customer', on_delete=models.PROTECT, related_name='loyalty_transactions')
    transaction_type = models.CharField(max_length=10, choices=TransactionType.choices)
    points = models.IntegerField()  # Positive for EARN/BONUS, negative for REDEEM/EXPIRE
    balance_before = models.PositiveIntegerField()
    balance_after = models.PositiveIntegerField()
    order_id = models.CharField(max_length=100, blank=True, null=True)
    reward = models.ForeignKey(
        'loyalty.LoyaltyReward', on_delete=models.SET_NULL, null=True, blank=True, related_name='redemptions'
    )
    description = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'loyalty_transactions'
        ordering = ['-created_at', '-id']
        verbose_name = 'Loyalty Transaction'
        verbose_name_plural = 'Loyalty Transactions'
        indexes = [
            models.Index(fields=['customer', 'created_at'], name='loyalty_tx_customer_created'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(balance_after=F('balance_before') + F('points')),
                name='loyalty_tx_balance_chain',
            ),
            models.UniqueConstraint(
                fields=['customer', 'order_id'],
                condition=Q(transaction_type='EARN'),
                name='uniq_loyalty_earn_per_order',
            ),
        ]

    def __str__(self):
        return f"{self.customer} - {self.points} points ({self.get_transaction_type_display()})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Loyalty transactions are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Loyalty transactions cannot be deleted")

    @property
    def is_earning(self):
        """Check if this transaction added points"""
        return self.points > 0

    @property
    def is_spending(self):
        """Check if this transaction removed points"""
        return self.points < 0
