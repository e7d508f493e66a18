import uuid
from contextlib import contextmanager
from functools import cache
from typing import Iterator
from uuid import UUID

import redis
from redis.exceptions import RedisError

from app.domain.exceptions import CartBusy, StorageError
from app.utils.retry import lock_wait, redis_retry
from app.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

#compare and delete in one step, lua runs atomically on the redis side
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    -short lived lock per cart, held for one command
    -release only by the holder (token compared in lua)
    -the lock expires on its own if the holder dies
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None, ttl: int | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl or CART_LOCK_TTL_SECONDS

    @staticmethod
    def _key(cart_id: UUID) -> str:
        return f"cart:{cart_id}:lock"

    @redis_retry()
    def acquire(self, cart_id: UUID, token: str) -> bool:
        #SET cart:<id>:lock <token> NX EX ttl
        return bool(self.redis.set(name=self._key(cart_id), value=token, nx=True, ex=self.ttl))

    @redis_retry()
    def release(self, cart_id: UUID, token: str) -> bool:
        res = self.redis.eval(_RELEASE_LUA, 1, self._key(cart_id), token)
        return bool(res)

    @contextmanager
    def cart_lock(self, cart_id: UUID) -> Iterator[str]:
        token = uuid.uuid4().hex

        @lock_wait(CartBusy)
        def _acquire():
            if not self.acquire(cart_id, token):
                raise CartBusy(cart_id)

        try:
            _acquire()
        except RedisError as e:
            logger.error(f"Redis unavailable while locking cart {cart_id}: {e}")
            raise StorageError("Lock storage unavailable", details={"cart_id": cart_id}) from e
        except CartBusy:
            logger.warning(f"Cart {cart_id} is locked by another operation")
            raise

        logger.debug(f"Acquired lock for cart {cart_id}")
        try:
            yield token
        finally:
            try:
                self.release(cart_id, token)
            except RedisError as e:
                #the key still expires after ttl
                logger.warning(f"Failed to release lock for cart {cart_id}: {e}")


@cache
def get_lock_service() -> LockService:
    #one client (and connection pool) per process
    return LockService()
