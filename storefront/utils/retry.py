# storefront/utils/retry.py
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
    retry_if_exception_type,
    retry_if_result,
)
import redis


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def acquire_retry(attempts: int = 5, wait: float = 0.05):
    #keep polling while the lock is held, give up with False
    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(wait),
        retry=retry_if_result(lambda acquired: not acquired),
        retry_error_callback=lambda state: False,
    )
