from django.contrib import admin

from .models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['order_number', 'tenant', 'customer', 'total', 'created_at']
    list_filter = ['tenant', 'created_at']
    search_fields = ['order_number', 'customer__phone', 'customer__name']
    ordering = ['-created_at']
    readonly_fields = ['order_number', 'created_at']
    raw_id_fields = ['customer']
