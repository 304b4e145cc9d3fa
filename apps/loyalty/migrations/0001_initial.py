import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


TIER_CHOICES = [('BRONZE', 'Bronze'), ('SILVER', 'Silver'), ('GOLD', 'Gold'), ('PLATINUM', 'Platinum')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('tenants', '0001_initial'),
        ('customers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='LoyaltyConfig',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('points_per_spent', models.DecimalField(decimal_places=2, default=Decimal('1'), help_text='Points earned per unit of currency spent', max_digits=8, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('min_spend_for_points', models.DecimalField(decimal_places=2, default=Decimal('0'), help_text='Orders below this total earn no points', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('silver_threshold', models.PositiveIntegerField(default=500)),
                ('gold_threshold', models.PositiveIntegerField(default=1500)),
                ('platinum_threshold', models.PositiveIntegerField(default=5000)),
                ('bronze_multiplier', models.DecimalField(decimal_places=2, default=Decimal('1'), max_digits=4, validators=[django.core.validators.MinValueValidator(Decimal('1'))])),
                ('silver_multiplier', models.DecimalField(decimal_places=2, default=Decimal('1.25'), max_digits=4, validators=[django.core.validators.MinValueValidator(Decimal('1'))])),
                ('gold_multiplier', models.DecimalField(decimal_places=2, default=Decimal('1.5'), max_digits=4, validators=[django.core.validators.MinValueValidator(Decimal('1'))])),
                ('platinum_multiplier', models.DecimalField(decimal_places=2, default=Decimal('2'), max_digits=4, validators=[django.core.validators.MinValueValidator(Decimal('1'))])),
                ('points_validity_days', models.PositiveIntegerField(default=365)),
                ('birthday_bonus_points', models.PositiveIntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('tenant', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='loyalty_config', to='tenants.tenant')),
            ],
            options={
                'verbose_name': 'Loyalty Config',
                'verbose_name_plural': 'Loyalty Configs',
                'db_table': 'loyalty_configs',
            },
        ),
        migrations.CreateModel(
            name='LoyaltyReward',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('reward_type', models.CharField(choices=[('free_item', 'Free Item'), ('discount_percent', 'Percentage Discount'), ('discount_amount', 'Fixed Amount Discount')], max_length=20)),
                ('points_cost', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('value', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('min_tier', models.CharField(choices=TIER_CHOICES, default='BRONZE', max_length=10)),
                ('usage_limit', models.PositiveIntegerField(default=0, help_text='0 means unlimited')),
                ('used_count', models.PositiveIntegerField(default=0)),
                ('valid_until', models.DateTimeField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='loyalty_rewards', to='tenants.tenant')),
            ],
            options={
                'verbose_name': 'Loyalty Reward',
                'verbose_name_plural': 'Loyalty Rewards',
                'db_table': 'loyalty_rewards',
                'ordering': ['points_cost'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('usage_limit', 0), ('used_count__lte', models.F('usage_limit')), _connector='OR'), name='reward_used_count_within_limit'),
                ],
            },
        ),
        migrations.CreateModel(
            name='LoyaltyTransaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('transaction_type', models.CharField(choices=[('EARN', 'Points Earned'), ('REDEEM', 'Points Redeemed'), ('BONUS', 'Bonus Points'), ('EXPIRE', 'Points Expired')], max_length=10)),
                ('points', models.IntegerField()),
                ('balance_before', models.PositiveIntegerField()),
                ('balance_after', models.PositiveIntegerField()),
                ('order_id', models.CharField(blank=True, max_length=100, null=True)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='loyalty_transactions', to='customers.customer')),
                ('reward', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='redemptions', to='loyalty.loyaltyreward')),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='loyalty_transactions', to='tenants.tenant')),
            ],
            options={
                'verbose_name': 'Loyalty Transaction',
                'verbose_name_plural': 'Loyalty Transactions',
                'db_table': 'loyalty_transactions',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['customer', 'created_at'], name='loyalty_tx_customer_created'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('balance_after', models.F('balance_before') + models.F('points'))), name='loyalty_tx_balance_chain'),
                    models.UniqueConstraint(condition=models.Q(('transaction_type', 'EARN')), fields=('customer', 'order_id'), name='uniq_loyalty_earn_per_order'),
                ],
            },
        ),
    ]
