# app/utils/retry.py
from tenacity import (
    retry,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_fixed,
    retry_if_exception_type,
)
import redis

from app.domain.errors import CartBusy
from app.utils.settings import SESSION_LOCK_WAIT_SECONDS


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def lock_wait_retry(max_wait: float | None = None):
    """
    Czeka az lock sesji sie zwolni.
    Po przekroczeniu czasu leci CartBusy do wywolujacego.
    """
    return retry(
        reraise=True,
        stop=stop_after_delay(SESSION_LOCK_WAIT_SECONDS if max_wait is None else max_wait),
        wait=wait_fixed(0.05),
        retry=retry_if_exception_type(CartBusy),
    )
