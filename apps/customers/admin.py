from django.contrib import admin
from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone', 'tenant', 'loyalty_points', 'loyalty_tier', 'total_spent', 'visit_count']
    list_filter = ['tenant', 'loyalty_tier']
    search_fields = ['name', 'phone']
    # Balance and tier only change through ledger transactions
    readonly_fields = ['loyalty_points', 'loyalty_tier', 'version', 'created_at', 'updated_at']
