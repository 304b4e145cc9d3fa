"""
Tests for the earn path of the loyalty ledger.
"""
from decimal import Decimal
from unittest import mock

from django.db import IntegrityError, OperationalError, transaction
from django.test import SimpleTestCase, TestCase, override_settings

from apps.customers.models import Customer
from apps.loyalty.exceptions import ConcurrencyConflict, CustomerNotFound
from apps.loyalty.models import LoyaltyTier, LoyaltyTransaction, TransactionType
from apps.loyalty.services import LoyaltyLedgerService
from apps.loyalty.services import ledger_service
from apps.loyalty.services.retry import is_write_conflict
from tests.factories import CustomerFactory, create_customer_with_points, create_program


class AwardOrderPointsTest(TestCase):

    def setUp(self):
        self.tenant, self.config = create_program()

    def test_award_crosses_silver_threshold(self):
        customer = create_customer_with_points(self.tenant, 480)

        result = LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, 'order-1', Decimal('50'))

        self.assertEqual(result.points_earned, 50)
        self.assertEqual(result.new_balance, 530)
        self.assertEqual(result.new_tier, LoyaltyTier.SILVER)

        customer.refresh_from_db()
        self.assertEqual(customer.loyalty_points, 530)
        self.assertEqual(customer.loyalty_tier, LoyaltyTier.SILVER)
        self.assertEqual(customer.version, 1)

        entry = LoyaltyTransaction.objects.get(customer=customer)
        self.assertEqual(entry.transaction_type, TransactionType.EARN)
        self.assertEqual(entry.points, 50)
        self.assertEqual(entry.balance_before, 480)
        self.assertEqual(entry.balance_after, 530)
        self.assertEqual(entry.order_id, 'order-1')
        self.assertEqual(entry.tenant_id, self.tenant.id)

    def test_multiplier_uses_tier_before_order(self):
        # 1400 points is SILVER; this order lifts the customer to GOLD but earns at 1.25
        customer = create_customer_with_points(self.tenant, 1400)

        result = LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, 'order-2', Decimal('200'))

        self.assertEqual(result.points_earned, 250)
        self.assertEqual(result.new_balance, 1650)
        self.assertEqual(result.new_tier, LoyaltyTier.GOLD)

    def test_below_minimum_spend_writes_nothing(self):
        customer = create_customer_with_points(self.tenant, 100)

        result = LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, 'order-3', Decimal('19.99'))

        self.assertEqual(result.points_earned, 0)
        self.assertEqual(result.new_balance, 100)
        self.assertFalse(LoyaltyTransaction.objects.filter(customer=customer).exists())
        customer.refresh_from_db()
        self.assertEqual(customer.version, 0)

    def test_inactive_program_writes_nothing(self):
        self.config.is_active = False
        self.config.save()
        customer = create_customer_with_points(self.tenant, 100)

        result = LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, 'order-4', Decimal('500'))

        self.assertEqual(result.points_earned, 0)
        self.assertFalse(LoyaltyTransaction.objects.exists())

    def test_same_order_is_awarded_once(self):
        customer = create_customer_with_points(self.tenant, 0)

        LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, 'order-5', Decimal('100'))
        second = LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, 'order-5', Decimal('100'))

        self.assertEqual(second.points_earned, 0)
        self.assertEqual(second.new_balance, 100)
        self.assertEqual(LoyaltyTransaction.objects.filter(customer=customer).count(), 1)

    def test_duplicate_earn_row_rejected_by_database(self):
        customer = create_customer_with_points(self.tenant, 0)
        LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, 'order-6', Decimal('100'))

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                LoyaltyTransaction.objects.create(
                    tenant=self.tenant, customer=customer, transaction_type=TransactionType.EARN,
                    points=10, balance_before=100, balance_after=110, order_id='order-6',
                )

    def test_unknown_customer(self):
        with self.assertRaises(CustomerNotFound):
            LoyaltyLedgerService.award_order_points(self.tenant.id, 999999, 'order-7', Decimal('100'))

    def test_customer_of_other_tenant_is_not_found(self):
        other_tenant, _ = create_program()
        stranger = create_customer_with_points(other_tenant, 0)

        with self.assertRaises(CustomerNotFound):
            LoyaltyLedgerService.award_order_points(self.tenant.id, stranger.id, 'order-8', Decimal('100'))

        stranger.refresh_from_db()
        self.assertEqual(stranger.loyalty_points, 0)

    def test_consecutive_awards_chain_balances(self):
        customer = create_customer_with_points(self.tenant, 0)

        for n, total in enumerate(['30', '45.50', '120'], start=1):
            LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, f'chain-{n}', Decimal(total))

        entries = list(LoyaltyTransaction.objects.filter(customer=customer).order_by('created_at', 'id'))
        self.assertEqual([e.points for e in entries], [30, 45, 120])
        for previous, current in zip(entries, entries[1:]):
            self.assertEqual(current.balance_before, previous.balance_after)
        customer.refresh_from_db()
        self.assertEqual(customer.loyalty_points, entries[-1].balance_after)


class BonusPointsTest(TestCase):

    def setUp(self):
        self.tenant, self.config = create_program()

    def test_bonus_writes_bonus_row(self):
        customer = create_customer_with_points(self.tenant, 450)

        result = LoyaltyLedgerService.grant_bonus(self.tenant.id, customer.id, 100, 'Birthday bonus')

        self.assertEqual(result.new_balance, 550)
        self.assertEqual(result.new_tier, LoyaltyTier.SILVER)
        entry = LoyaltyTransaction.objects.get(customer=customer)
        self.assertEqual(entry.transaction_type, TransactionType.BONUS)
        self.assertEqual(entry.description, 'Birthday bonus')

    def test_bonus_must_be_positive(self):
        customer = create_customer_with_points(self.tenant, 0)

        for points in (0, -5, True, 1.5):
            with self.assertRaises(ValueError):
                LoyaltyLedgerService.grant_bonus(self.tenant.id, customer.id, points)

        self.assertFalse(LoyaltyTransaction.objects.exists())


class VersionGuardTest(TestCase):

    def setUp(self):
        self.tenant, self.config = create_program()

    def test_stale_customer_is_rejected(self):
        customer = create_customer_with_points(self.tenant, 100)
        Customer.objects.filter(pk=customer.pk).update(version=5)

        with self.assertRaises(ConcurrencyConflict):
            with transaction.atomic():
                ledger_service._apply_balance_change(customer, 10, TransactionType.BONUS, self.config)

        customer.refresh_from_db()
        self.assertEqual(customer.loyalty_points, 100)
        self.assertFalse(LoyaltyTransaction.objects.exists())

    def test_conflict_is_retried(self):
        customer = create_customer_with_points(self.tenant, 0)
        original = ledger_service._apply_balance_change
        calls = []

        def conflict_once(*args, **kwargs):
            calls.append(1)
            if len(calls) == 1:
                raise ConcurrencyConflict()
            return original(*args, **kwargs)

        with mock.patch.object(ledger_service, '_apply_balance_change', side_effect=conflict_once):
            result = LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, 'retry-1', Decimal('40'))

        self.assertEqual(len(calls), 2)
        self.assertEqual(result.new_balance, 40)
        self.assertEqual(LoyaltyTransaction.objects.filter(customer=customer).count(), 1)

    @override_settings(LOYALTY_MAX_RETRIES=3, LOYALTY_RETRY_BACKOFF_SECONDS=0)
    def test_retries_are_bounded(self):
        customer = create_customer_with_points(self.tenant, 0)

        with mock.patch.object(
            ledger_service, '_apply_balance_change', side_effect=ConcurrencyConflict()
        ) as patched:
            with self.assertRaises(ConcurrencyConflict) as ctx:
                LoyaltyLedgerService.award_order_points(self.tenant.id, customer.id, 'retry-2', Decimal('40'))

        self.assertEqual(patched.call_count, 3)
        self.assertIsInstance(ctx.exception.__cause__, ConcurrencyConflict)
        customer.refresh_from_db()
        self.assertEqual(customer.loyalty_points, 0)


class WriteConflictTest(SimpleTestCase):

    def test_version_conflict(self):
        self.assertTrue(is_write_conflict(ConcurrencyConflict()))

    def test_mysql_deadlock_and_lock_wait_timeout(self):
        self.assertTrue(is_write_conflict(OperationalError(1213, 'Deadlock found when trying to get lock')))
        self.assertTrue(is_write_conflict(OperationalError(1205, 'Lock wait timeout exceeded')))

    def test_sqlite_locked_database(self):
        self.assertTrue(is_write_conflict(OperationalError('database is locked')))

    def test_other_storage_failures(self):
        self.assertFalse(is_write_conflict(OperationalError(2006, 'MySQL server has gone away')))
        self.assertFalse(is_write_conflict(OperationalError('no such table: customers')))
        self.assertFalse(is_write_conflict(ValueError('database is locked')))


class LedgerImmutabilityTest(TestCase):

    def test_rows_cannot_be_changed_or_deleted(self):
        tenant, _ = create_program()
        customer = CustomerFactory(tenant=tenant)
        LoyaltyLedgerService.award_order_points(tenant.id, customer.id, 'imm-1', Decimal('50'))
        entry = LoyaltyTransaction.objects.get(customer=customer)

        entry.points = 500
        with self.assertRaises(ValueError):
            entry.save()
        with self.assertRaises(ValueError):
            entry.delete()
