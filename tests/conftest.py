"""
Test configuration for the loyalty ledger.
"""
import os

import django
import pytest


def pytest_configure():
    """Configure Django settings for testing."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'dine_server.settings_test')
    django.setup()


@pytest.fixture
def tenant():
    from tests.factories import TenantFactory
    return TenantFactory()


@pytest.fixture
def loyalty_config(tenant):
    """Active program with thresholds 500/1500/5000 and multipliers 1/1.25/1.5/2"""
    from tests.factories import LoyaltyConfigFactory
    return LoyaltyConfigFactory(tenant=tenant)


@pytest.fixture
def customer(tenant, loyalty_config):
    from tests.factories import CustomerFactory
    return CustomerFactory(tenant=tenant)


@pytest.fixture
def customer_with_points(tenant, loyalty_config):
    """Build customers holding a given balance, with the tier that balance implies"""
    from tests.factories import create_customer_with_points

    def _create(points):
        return create_customer_with_points(tenant, points, loyalty_config)
    return _create


@pytest.fixture
def reward_factory(tenant):
    from tests.factories import LoyaltyRewardFactory

    def _create(**kwargs):
        kwargs.setdefault('tenant', tenant)
        return LoyaltyRewardFactory(**kwargs)
    return _create
