"""
Detached execution of the earn path.

Orders schedule their point award after their own transaction commits. The
award runs on a small thread pool so the order request never waits on, or
fails because of, the loyalty ledger.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings
from django.db import connection, transaction

from .services import LoyaltyLedgerService

logger = logging.getLogger(__name__)

_executor = None
_executor_lock = threading.Lock()


def _get_executor():
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=settings.LOYALTY_AWARD_WORKERS,
                thread_name_prefix='loyalty-award',
            )
        return _executor


def run_order_award(tenant_id, customer_id, order_id, order_total, close_connection=False):
    """Award points for an order; failures are logged and never raised"""
    try:
        result = LoyaltyLedgerService.award_order_points(tenant_id, customer_id, order_id, order_total)
        if result.points_earned:
            logger.info(
                f"Awarded {result.points_earned} points to customer {customer_id} for order {order_id}, "
                f"balance {result.new_balance} ({result.new_tier})"
            )
        return result
    except Exception as e:
        logger.error(f"Failed to award points for order {order_id} (customer {customer_id}): {e}", exc_info=True)
        return None
    finally:
        if close_connection:
            connection.close()


def _dispatch(tenant_id, customer_id, order_id, order_total):
    if not settings.LOYALTY_AWARD_ASYNC:
        run_order_award(tenant_id, customer_id, order_id, order_total)
        return
    try:
        _get_executor().submit(
            run_order_award, tenant_id, customer_id, order_id, order_total, close_connection=True
        )
    except RuntimeError as e:
        # Executor already shut down (interpreter exit)
        logger.error(f"Could not schedule points award for order {order_id}: {e}")


def schedule_order_award(tenant_id, customer_id, order_id, order_total):
    """Award points for an order once the surrounding transaction commits"""
    transaction.on_commit(lambda: _dispatch(tenant_id, customer_id, order_id, order_total))


def shutdown(wait=True):
    """Stop the award pool, waiting for queued awards by default"""
    global _executor
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=wait)
            _executor = None
