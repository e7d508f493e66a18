# app/utils/retry.py
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
import redis

from app.domain.exceptions import CartConflict
from app.utils.settings import CART_CONFLICT_RETRIES, CART_LOCK_WAIT_ATTEMPTS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def _log_retry(retry_state):
    logger.warning(
        f"Retrying {retry_state.fn.__name__} after {retry_state.outcome.exception()!r} "
        f"(attempt {retry_state.attempt_number})"
    )


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def lock_wait(exc_type):
    """Keeps trying to take a busy lock for a short while, then gives up."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(CART_LOCK_WAIT_ATTEMPTS),
        wait=wait_exponential(multiplier=0.01, min=0.01, max=0.2),
        retry=retry_if_exception_type(exc_type),
    )


def conflict_retry():
    #reruns the whole unit of work, the session is rolled back before CartConflict is raised
    return retry(
        reraise=True,
        stop=stop_after_attempt(CART_CONFLICT_RETRIES),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_exception_type(CartConflict),
        before_sleep=_log_retry,
    )
