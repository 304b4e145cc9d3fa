"""
Loyalty ledger error kinds.

Every error carries a stable ``code`` the API hands back to clients so they
can show an actionable message.
"""
from rest_framework import status

from apps.common.exceptions import ServiceError


class LoyaltyError(ServiceError):
    """Base class for loyalty ledger failures"""
    code = 'loyalty_error'
    default_message = 'Loyalty operation failed'


class ConfigMissingOrInactive(LoyaltyError):
    # Earning treats this as a soft disable and never raises it
    code = 'config_missing_or_inactive'
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Loyalty program is not active'


class InsufficientBalance(LoyaltyError):
    code = 'insufficient_balance'
    default_message = 'Insufficient points'


class RewardNotFound(LoyaltyError):
    code = 'reward_not_found'
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Reward not found'


class RewardExpired(LoyaltyError):
    code = 'reward_expired'
    default_message = 'Reward has expired'


class RewardUsageLimitExceeded(LoyaltyError):
    code = 'reward_usage_limit_exceeded'
    default_message = 'Reward usage limit reached'


class TierIneligible(LoyaltyError):
    code = 'tier_ineligible'
    default_message = 'Tier too low for this reward'


class CustomerNotFound(LoyaltyError):
    code = 'customer_not_found'
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Customer not found'


class ConcurrencyConflict(LoyaltyError):
    """The balance changed underneath a write; retried before it is surfaced"""
    code = 'concurrency_conflict'
    status_code = status.HTTP_409_CONFLICT
    default_message = 'The balance was updated concurrently, please try again'


ERROR_CLASSES = {
    error_class.code: error_class
    for error_class in (
        ConfigMissingOrInactive, InsufficientBalance, RewardNotFound, RewardExpired,
        RewardUsageLimitExceeded, TierIneligible, CustomerNotFound, ConcurrencyConflict,
    )
}


def status_for_code(code):
    """HTTP status for a loyalty error code"""
    error_class = ERROR_CLASSES.get(code, LoyaltyError)
    return error_class.status_code
