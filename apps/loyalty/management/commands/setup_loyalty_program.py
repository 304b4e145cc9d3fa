from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.loyalty.models import LoyaltyConfig, LoyaltyReward, LoyaltyTier, RewardType
from apps.tenants.models import Tenant

DEFAULT_CONFIG = {
    'points_per_spent': Decimal('1'),
    'min_spend_for_points': Decimal('20'),
    'silver_threshold': 500,
    'gold_threshold': 1500,
    'platinum_threshold': 5000,
    'bronze_multiplier': Decimal('1'),
    'silver_multiplier': Decimal('1.25'),
    'gold_multiplier': Decimal('1.5'),
    'platinum_multiplier': Decimal('2'),
    'points_validity_days': 365,
    'birthday_bonus_points': 100,
    'is_active': True,
}

DEFAULT_REWARDS = [
    {
        'name': 'Free Turkish Coffee',
        'description': 'A free Turkish coffee with any order',
        'reward_type': RewardType.FREE_ITEM,
        'points_cost': 100,
        'value': Decimal('45'),
        'min_tier': LoyaltyTier.BRONZE,
    },
    {
        'name': '10% Discount',
        'description': '10% off the whole bill',
        'reward_type': RewardType.DISCOUNT_PERCENT,
        'points_cost': 200,
        'value': Decimal('10'),
        'min_tier': LoyaltyTier.BRONZE,
    },
    {
        'name': 'Free Dessert',
        'description': 'Cheesecake or tiramisu',
        'reward_type': RewardType.FREE_ITEM,
        'points_cost': 300,
        'value': Decimal('90'),
        'min_tier': LoyaltyTier.SILVER,
    },
    {
        'name': '20% Discount',
        'description': '20% off the whole bill',
        'reward_type': RewardType.DISCOUNT_PERCENT,
        'points_cost': 500,
        'value': Decimal('20'),
        'min_tier': LoyaltyTier.SILVER,
    },
    {
        'name': '50 Off',
        'description': '50 off orders over 100',
        'reward_type': RewardType.DISCOUNT_AMOUNT,
        'points_cost': 750,
        'value': Decimal('50'),
        'min_tier': LoyaltyTier.GOLD,
    },
    {
        'name': 'VIP Breakfast',
        'description': 'Breakfast platter for two',
        'reward_type': RewardType.FREE_ITEM,
        'points_cost': 1000,
        'value': Decimal('250'),
        'min_tier': LoyaltyTier.PLATINUM,
    },
]


class Command(BaseCommand):
    help = 'Set up the default loyalty program for a tenant'

    def add_arguments(self, parser):
        parser.add_argument('--tenant', required=True, help='Tenant slug')
        parser.add_argument(
            '--with-rewards',
            action='store_true',
            help='Also create the default reward catalog',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        tenant = Tenant.objects.filter(slug=options['tenant']).first()
        if tenant is None:
            raise CommandError(f"Tenant '{options['tenant']}' not found")

        config, created = LoyaltyConfig.objects.update_or_create(tenant=tenant, defaults=DEFAULT_CONFIG)
        config.full_clean()
        if created:
            self.stdout.write(self.style.SUCCESS(f'Created loyalty config for {tenant.slug}'))
        else:
            self.stdout.write(f'Updated loyalty config for {tenant.slug}')

        if not options['with_rewards']:
            return

        created_count = 0
        for reward_data in DEFAULT_REWARDS:
            _, reward_created = LoyaltyReward.objects.get_or_create(
                tenant=tenant,
                name=reward_data['name'],
                defaults=reward_data,
            )
            if reward_created:
                created_count += 1
                self.stdout.write(f"Created reward: {reward_data['name']}")

        self.stdout.write(
            self.style.SUCCESS(
                f'Rewards setup complete. Created: {created_count}, '
                f'existing: {len(DEFAULT_REWARDS) - created_count}'
            )
        )
