# storefront/services/lock_service.py
import uuid
from contextlib import contextmanager

import redis
from storefront.domain.errors import CartBusy, LockUnavailable
from storefront.utils.retry import redis_retry, acquire_retry
from storefront.utils.settings import REDIS_URL, SESSION_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#compare-and-delete in one Lua call, redis runs scripts atomically
#so nobody can slip between GET and DEL and drop a lock they do not own
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Per-session mutual exclusion for cart operations.

    - one lock per session id, held for a single cart operation or checkout
    - owner token per acquisition, only the owner can release
    - TTL so a crashed request cannot wedge the session forever
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None, ttl: int | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl or SESSION_LOCK_TTL_SECONDS

    @staticmethod
    def _key(session_id: str) -> str:
        return f"session:{session_id}:lock"

    @redis_retry()
    def acquire(self, session_id: str, token: str) -> bool:
        key = self._key(session_id)
        logger.debug(f"Acquire lock {key}")
        #SET session:<sid>:lock <token> NX EX <ttl>
        return bool(self.redis.set(name=key, value=token, nx=True, ex=self.ttl))

    @redis_retry()
    def release(self, session_id: str, token: str) -> bool:
        key = self._key(session_id)
        logger.debug(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @acquire_retry()
    def _acquire_waiting(self, session_id: str, token: str) -> bool:
        return self.acquire(session_id, token)

    @contextmanager
    def session_lock(self, session_id: str):
        token = uuid.uuid4().hex
        try:
            acquired = self._acquire_waiting(session_id, token)
        except redis.RedisError as e:
            logger.error(f"Lock store unreachable for session {session_id}: {e}")
            raise LockUnavailable("Cart is temporarily unavailable, try again") from e

        if not acquired:
            logger.warning(f"Session {session_id} cart is locked by another request")
            raise CartBusy("Cart is being modified by another request, try again")
        try:
            yield
        finally:
            try:
                if not self.release(session_id, token):
                    logger.warning(f"Lock for session {session_id} expired before release")
            except redis.RedisError as e:
                #the TTL frees the key
                logger.warning(f"Lock for session {session_id} not released: {e}")
