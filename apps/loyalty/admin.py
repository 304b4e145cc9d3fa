from django.contrib import admin

from .models import LoyaltyConfig, LoyaltyReward, LoyaltyTransaction


@admin.register(LoyaltyConfig)
class LoyaltyConfigAdmin(admin.ModelAdmin):
    list_display = [
        'tenant', 'points_per_spent', 'min_spend_for_points',
        'silver_threshold', 'gold_threshold', 'platinum_threshold', 'is_active'
    ]
    list_filter = ['is_active']
    search_fields = ['tenant__name', 'tenant__slug']
    fieldsets = (
        ('Earning', {
            'fields': ('tenant', 'points_per_spent', 'min_spend_for_points', 'is_active')
        }),
        ('Tier Thresholds', {
            'fields': ('silver_threshold', 'gold_threshold', 'platinum_threshold')
        }),
        ('Tier Multipliers', {
            'fields': ('bronze_multiplier', 'silver_multiplier', 'gold_multiplier', 'platinum_multiplier')
        }),
        ('Other', {
            'fields': ('points_validity_days', 'birthday_bonus_points'),
            'classes': ('collapse',)
        }),
    )


@admin.register(LoyaltyReward)
class LoyaltyRewardAdmin(admin.ModelAdmin):
    list_display = ['name', 'tenant', 'reward_type', 'points_cost', 'min_tier', 'used_count', 'usage_limit', 'valid_until', 'is_active']
    list_filter = ['reward_type', 'min_tier', 'is_active']
    search_fields = ['name', 'tenant__name']
    readonly_fields = ['used_count', 'created_at', 'updated_at']


@admin.register(LoyaltyTransaction)
class LoyaltyTransactionAdmin(admin.ModelAdmin):
    list_display = ['customer', 'transaction_type', 'points', 'balance_before', 'balance_after', 'order_id', 'created_at']
    list_filter = ['transaction_type', 'created_at']
    search_fields = ['customer__phone', 'customer__name', 'order_id', 'description']
    readonly_fields = [
        'tenant', 'customer', 'transaction_type', 'points', 'balance_before', 'balance_after',
        'order_id', 'reward', 'description', 'created_at'
    ]

    def has_add_permission(self, request):
        return False  # Transactions are created by the ledger service

    def has_change_permission(self, request, obj=None):
        return False  # Ledger rows are immutable

    def has_delete_permission(self, request, obj=None):
        return False
