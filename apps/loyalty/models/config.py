from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from ..choices import LoyaltyTier


class LoyaltyConfig(models.Model):
    """Per-tenant earning rate, tier thresholds and tier multipliers"""
    tenant = models.OneToOneField('tenants.Tenant', on_delete=models.CASCADE, related_name='loyalty_config')
    points_per_spent = models.DecimalField(
        max_digits=8, decimal_places=2, default=Decimal('1'),
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Points earned per unit of currency spent"
    )
    min_spend_for_points = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Orders below this total earn no points"
    )
    silver_threshold = models.PositiveIntegerField(default=500)
    gold_threshold = models.PositiveIntegerField(default=1500)
    platinum_threshold = models.PositiveIntegerField(default=5000)
    bronze_multiplier = models.DecimalField(max_digits=4, decimal_places=2, default=Decimal('1'), validators=[MinValueValidator(Decimal('1'))])
    silver_multiplier = models.DecimalField(max_digits=4, decimal_places=2, default=Decimal('1.25'), validators=[MinValueValidator(Decimal('1'))])
    gold_multiplier = models.DecimalField(max_digits=4, decimal_places=2, default=Decimal('1.5'), validators=[MinValueValidator(Decimal('1'))])
    platinum_multiplier = models.DecimalField(max_digits=4, decimal_places=2, default=Decimal('2'), validators=[MinValueValidator(Decimal('1'))])
    points_validity_days = models.PositiveIntegerField(default=365)
    birthday_bonus_points = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'loyalty_configs'
        verbose_name = 'Loyalty Config'
        verbose_name_plural = 'Loyalty Configs'

    def __str__(self):
        state = 'active' if self.is_active else 'inactive'
        return f"{self.tenant} loyalty ({state})"

    def clean(self):
        super().clean()
        if not (self.silver_threshold < self.gold_threshold < self.platinum_threshold):
            raise ValidationError("Tier thresholds must be strictly increasing: silver < gold < platinum.")

    @property
    def thresholds(self):
        """Lower bound of every tier above BRONZE"""
        return {
            LoyaltyTier.SILVER: self.silver_threshold,
            LoyaltyTier.GOLD: self.gold_threshold,
            LoyaltyTier.PLATINUM: self.platinum_threshold,
        }

    @property
    def multipliers(self):
        return {
            LoyaltyTier.BRONZE: self.bronze_multiplier,
            LoyaltyTier.SILVER: self.silver_multiplier,
            LoyaltyTier.GOLD: self.gold_multiplier,
            LoyaltyTier.PLATINUM: self.platinum_multiplier,
        }

    @classmethod
    def get_for_tenant(cls, tenant_id):
        """Get the tenant's config, active or not; None when the program was never set up"""
        return cls.objects.filter(tenant_id=tenant_id).first()
