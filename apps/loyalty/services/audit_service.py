"""
Ledger audit: replay each customer's transactions and check that the stored
balance and tier agree with them.
"""
import logging

from apps.customers.models import Customer
from ..models import LoyaltyConfig, LoyaltyTransaction
from .tier_policy import TierPolicy

logger = logging.getLogger(__name__)


class LoyaltyAuditService:

    @staticmethod
    def verify_customer(customer, config=None):
        """Return a list of problems found in one customer's ledger (empty when consistent)"""
        if config is None:
            config = LoyaltyConfig.get_for_tenant(customer.tenant_id)

        problems = []
        entries = LoyaltyTransaction.objects.filter(customer=customer).order_by('created_at', 'id')

        previous_balance = None
        for entry in entries:
            if entry.balance_after != entry.balance_before + entry.points:
                problems.append(
                    f"Transaction {entry.pk}: balance_after {entry.balance_after} != "
                    f"{entry.balance_before} + {entry.points}"
                )
            if previous_balance is not None and entry.balance_before != previous_balance:
                problems.append(
                    f"Transaction {entry.pk}: balance_before {entry.balance_before} does not continue "
                    f"from previous balance {previous_balance}"
                )
            previous_balance = entry.balance_after

        if previous_balance is None:
            if customer.loyalty_points != 0:
                problems.append(f"Balance is {customer.loyalty_points} but the ledger is empty")
        elif customer.loyalty_points != previous_balance:
            problems.append(
                f"Balance is {customer.loyalty_points} but the ledger ends at {previous_balance}"
            )

        expected_tier = TierPolicy.tier_for(customer.loyalty_points, config)
        if customer.loyalty_tier != expected_tier:
            problems.append(f"Tier is {customer.loyalty_tier} but {customer.loyalty_points} points give {expected_tier}")

        return problems

    @staticmethod
    def verify_tenant(tenant_id):
        """Audit every customer of a tenant; maps customer id to its problems, only for customers with problems"""
        config = LoyaltyConfig.get_for_tenant(tenant_id)
        report = {}
        for customer in Customer.objects.filter(tenant_id=tenant_id).order_by('id').iterator():
            problems = LoyaltyAuditService.verify_customer(customer, config)
            if problems:
                logger.warning(f"Ledger problems for customer {customer.pk}: {len(problems)}")
                report[customer.pk] = problems
        return report
