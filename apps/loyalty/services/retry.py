"""
Atomic unit of work with bounded retry on write conflicts.
"""
import functools
import logging
import time

from django.conf import settings
from django.db import OperationalError, transaction

from ..exceptions import ConcurrencyConflict

logger = logging.getLogger(__name__)

# MySQL lock wait timeout and deadlock
MYSQL_CONFLICT_CODES = (1205, 1213)
SQLITE_CONFLICT_MESSAGES = ('database is locked', 'database table is locked')


def is_write_conflict(error):
    """True when an OperationalError means another writer got in the way"""
    if isinstance(error, ConcurrencyConflict):
        return True
    if not isinstance(error, OperationalError):
        return False
    if error.args and error.args[0] in MYSQL_CONFLICT_CODES:
        return True
    message = str(error).lower()
    return any(text in message for text in SQLITE_CONFLICT_MESSAGES)


def atomic_with_retry(func):
    """
    Run ``func`` inside ``transaction.atomic()`` and run it again on a write conflict.

    Conflicts are ConcurrencyConflict (a version-guarded update matched no
    row) and the OperationalErrors the backend raises for lock timeouts and
    deadlocks. Every attempt starts from a fresh transaction. Once
    LOYALTY_MAX_RETRIES attempts have failed, ConcurrencyConflict is raised
    chained to the last error. Any other exception, including other
    OperationalErrors such as a lost connection, propagates immediately.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        max_attempts = max(1, settings.LOYALTY_MAX_RETRIES)
        backoff = settings.LOYALTY_RETRY_BACKOFF_SECONDS
        last_exception = None

        for attempt in range(1, max_attempts + 1):
            try:
                with transaction.atomic():
                    return func(*args, **kwargs)
            except (ConcurrencyConflict, OperationalError) as e:
                if not is_write_conflict(e):
                    raise
                last_exception = e
                if attempt < max_attempts:
                    logger.warning(f"Retry {attempt} for {func.__name__}: {e}")
                    time.sleep(backoff * attempt)

        logger.error(f"All {max_attempts} attempts failed for {func.__name__}: {last_exception}")
        raise ConcurrencyConflict() from last_exception

    return wrapper
