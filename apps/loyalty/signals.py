from django.db.models.signals import post_save
from django.dispatch import receiver

from apps.orders.models import Order
from .tasks import schedule_order_award


@receiver(post_save, sender=Order)
def award_points_for_new_order(sender, instance, created, **kwargs):
    """Schedule the loyalty award for a newly created order with a known customer"""
    if created and instance.customer_id:
        schedule_order_award(instance.tenant_id, instance.customer_id, instance.order_number, instance.total)
