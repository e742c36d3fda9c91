import redis

from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua jako jedna nieprzerywalna operacje
#nie mozna wcisnac sie miedzy GET a DEL, wiec lock zwalnia tylko ten kto go wzial


class LockService:
    """
    -blokada per user na czas tworzenia zamowienia
    -zwalnianie locka tylko przez wlasciciela (token)
    -atomowosc przy pomocy lua
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def order_lock_key(user_id: int) -> str:
        return f"user:{user_id}:order:lock"

    @redis_retry()
    def acquire_order_lock(self, user_id: int, token: str, ttl: int) -> bool:
        key = self.order_lock_key(user_id)
        logger.info(f"Acquire lock {key}")
        #SET user:1:order:lock "<token>" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True, #tylko jesli klucz nie istnieje
                ex=ttl, #wygasa sam, lock po padnietym procesie nie wisi wiecznie
            )
        )

    @redis_retry()
    def release_order_lock(self, user_id: int, token: str) -> bool:
        key = self.order_lock_key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
