from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from ..choices import LoyaltyTier, RewardType


class LoyaltyReward(models.Model):
    """Catalog entry a customer can spend points on"""
    tenant = models.ForeignKey('tenants.Tenant', on_delete=models.CASCADE, related_name='loyalty_rewards')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    reward_type = models.CharField(max_length=20, choices=RewardType.choices)
    points_cost = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    value = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    min_tier = models.CharField(max_length=10, choices=LoyaltyTier.choices, default=LoyaltyTier.BRONZE)
    usage_limit = models.PositiveIntegerField(default=0, help_text="0 means unlimited")
    used_count = models.PositiveIntegerField(default=0)
    valid_until = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'loyalty_rewards'
        ordering = ['points_cost']
        verbose_name = 'Loyalty Reward'
        verbose_name_plural = 'Loyalty Rewards'
        constraints = [
            models.CheckConstraint(
                condition=Q(usage_limit=0) | Q(used_count__lte=F('usage_limit')),
                name='reward_used_count_within_limit',
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.points_cost} points)"

    def is_expired(self, now=None):
        if self.valid_until is None:
            return False
        return (now or timezone.now()) > self.valid_until

    @property
    def has_usage_remaining(self):
        return self.usage_limit == 0 or self.used_count < self.usage_limit

    @classmethod
    def available_for_tenant(cls, tenant_id, now=None):
        """Active rewards that have not expired, cheapest first"""
        now = now or timezone.now()
        return cls.objects.filter(tenant_id=tenant_id, is_active=True).filter(
            Q(valid_until__isnull=True) | Q(valid_until__gte=now)
        ).order_by('points_cost', 'id')

    @classmethod
    def claim_usage(cls, reward_id):
        """
        Count one use of a reward without exceeding its usage limit.

        The limit check and the increment are a single UPDATE, so concurrent
        claims on a capped reward can never push used_count past usage_limit.
        Returns False when the limit has already been reached.
        """
        updated = cls.objects.filter(pk=reward_id).filter(
            Q(usage_limit=0) | Q(used_count__lt=F('usage_limit'))
        ).update(used_count=F('used_count') + 1, updated_at=timezone.now())
        return updated == 1
