"""
Loyalty enumerations shared by the customer record and the loyalty models.
"""
from django.db import models


class LoyaltyTier(models.TextChoices):
    """Status levels, declared lowest to highest"""
    BRONZE = 'BRONZE', 'Bronze'
    SILVER = 'SILVER', 'Silver'
    GOLD = 'GOLD', 'Gold'
    PLATINUM = 'PLATINUM', 'Platinum'


class TransactionType(models.TextChoices):
    EARN = 'EARN', 'Points Earned'
    REDEEM = 'REDEEM', 'Points Redeemed'
    BONUS = 'BONUS', 'Bonus Points'
    EXPIRE = 'EXPIRE', 'Points Expired'


class RewardType(models.TextChoices):
    FREE_ITEM = 'free_item', 'Free Item'
    DISCOUNT_PERCENT = 'discount_percent', 'Percentage Discount'
    DISCOUNT_AMOUNT = 'discount_amount', 'Fixed Amount Discount'
