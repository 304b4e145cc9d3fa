"""
Concurrency tests for the loyalty ledger.

Each worker thread gets its own database connection, so these tests run
with real transactions and close their connections when done.
"""
import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from django.db import connection

from apps.customers.models import Customer
from apps.loyalty.models import LoyaltyReward, LoyaltyTransaction, TransactionType
from apps.loyalty.services import LoyaltyAuditService, LoyaltyLedgerService
from tests.factories import LoyaltyRewardFactory, create_customer_with_points, create_program


def in_thread(func, *args, **kwargs):
    """Run ``func`` and release this thread's database connection afterwards"""
    try:
        return func(*args, **kwargs)
    finally:
        connection.close()


@pytest.mark.django_db(transaction=True)
class TestConcurrentAwards:

    def test_two_concurrent_awards_both_land(self):
        tenant, _ = create_program()
        customer = create_customer_with_points(tenant, 0)
        barrier = threading.Barrier(2)
        errors = []

        def award(order_id):
            try:
                barrier.wait()
                in_thread(
                    LoyaltyLedgerService.award_order_points, tenant.id, customer.id, order_id, Decimal('30')
                )
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=award, args=(f'order-{n}',)) for n in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        customer.refresh_from_db()
        assert customer.loyalty_points == 60
        assert LoyaltyTransaction.objects.filter(customer=customer).count() == 2

    def test_many_concurrent_awards_sum_exactly(self):
        tenant, config = create_program()
        customer = create_customer_with_points(tenant, 0)
        totals = [Decimal('25'), Decimal('40'), Decimal('55.75'), Decimal('100')] * 5

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [
                executor.submit(
                    in_thread, LoyaltyLedgerService.award_order_points,
                    tenant.id, customer.id, f'bulk-{n}', total
                )
                for n, total in enumerate(totals)
            ]
            results = [future.result() for future in futures]

        customer.refresh_from_db()
        assert customer.loyalty_points == sum(result.points_earned for result in results)
        assert LoyaltyTransaction.objects.filter(customer=customer).count() == len(totals)
        assert LoyaltyAuditService.verify_customer(customer, config) == []

    def test_concurrent_duplicate_order_awarded_once(self):
        tenant, _ = create_program()
        customer = create_customer_with_points(tenant, 0)

        with ThreadPoolExecutor(max_workers=4) as executor:
            futures = [
                executor.submit(
                    in_thread, LoyaltyLedgerService.award_order_points,
                    tenant.id, customer.id, 'same-order', Decimal('80')
                )
                for _ in range(4)
            ]
            for future in futures:
                future.result()

        customer.refresh_from_db()
        assert customer.loyalty_points == 80
        assert LoyaltyTransaction.objects.filter(
            customer=customer, transaction_type=TransactionType.EARN
        ).count() == 1


@pytest.mark.django_db(transaction=True)
class TestConcurrentRedemptions:

    def test_scarce_reward_goes_to_exactly_one_customer(self):
        tenant, _ = create_program()
        customers = [create_customer_with_points(tenant, 500) for _ in range(6)]
        reward = LoyaltyRewardFactory(tenant=tenant, points_cost=100, usage_limit=1)

        with ThreadPoolExecutor(max_workers=6) as executor:
            futures = [
                executor.submit(in_thread, LoyaltyLedgerService.redeem_reward, tenant.id, c.id, reward.id)
                for c in customers
            ]
            results = [future.result() for future in futures]

        winners = [r for r in results if r.success]
        losers = [r for r in results if not r.success]
        assert len(winners) == 1
        assert {r.error_code for r in losers} == {'reward_usage_limit_exceeded'}

        reward.refresh_from_db()
        assert reward.used_count == 1
        balances = sorted(Customer.objects.filter(pk__in=[c.id for c in customers]).values_list('loyalty_points', flat=True))
        assert balances == [400] + [500] * 5
        assert LoyaltyTransaction.objects.filter(transaction_type=TransactionType.REDEEM).count() == 1

    def test_balance_never_goes_negative(self):
        tenant, config = create_program()
        customer = create_customer_with_points(tenant, 300)
        reward = LoyaltyRewardFactory(tenant=tenant, points_cost=100)

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [
                executor.submit(in_thread, LoyaltyLedgerService.redeem_reward, tenant.id, customer.id, reward.id)
                for _ in range(8)
            ]
            results = [future.result() for future in futures]

        assert sum(1 for r in results if r.success) == 3
        assert {r.error_code for r in results if not r.success} == {'insufficient_balance'}

        customer.refresh_from_db()
        reward.refresh_from_db()
        assert customer.loyalty_points == 0
        assert reward.used_count == 3
        assert LoyaltyAuditService.verify_customer(customer, config) == []

    def test_mixed_awards_and_redemptions(self):
        tenant, config = create_program()
        customer = create_customer_with_points(tenant, 200)
        reward = LoyaltyRewardFactory(tenant=tenant, points_cost=50)

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = []
            for n in range(6):
                futures.append(executor.submit(
                    in_thread, LoyaltyLedgerService.award_order_points,
                    tenant.id, customer.id, f'mixed-{n}', Decimal('50')
                ))
                futures.append(executor.submit(
                    in_thread, LoyaltyLedgerService.redeem_reward, tenant.id, customer.id, reward.id
                ))
            for future in futures:
                future.result()

        customer.refresh_from_db()
        earned = sum(LoyaltyTransaction.objects.filter(
            customer=customer, transaction_type=TransactionType.EARN
        ).values_list('points', flat=True))
        redeemed = LoyaltyTransaction.objects.filter(
            customer=customer, transaction_type=TransactionType.REDEEM
        ).count()

        assert customer.loyalty_points == 200 + earned - 50 * redeemed
        assert customer.loyalty_points >= 0
        assert LoyaltyReward.objects.get(pk=reward.pk).used_count == redeemed
        assert LoyaltyAuditService.verify_customer(customer, config) == []
