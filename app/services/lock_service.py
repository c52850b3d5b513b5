import uuid
from contextlib import contextmanager

import redis

from app.domain.errors import CartBusy
from app.utils.retry import redis_retry, lock_wait_retry
from app.utils.settings import REDIS_URL, SESSION_LOCK_TTL_SECONDS, SESSION_LOCK_WAIT_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nikt nie wcisnie sie miedzy GET a DEL
#wiec nie zwolnimy locka ktory po wygasnieciu TTL przejal ktos inny


class LockService:
    """
    -lock na sesje koszyka (wszystkie zmiany koszyka i checkout jednej sesji ida po kolei)
    -zwalnianie locka tylko przez wlasciciela (token)
    -atomowosc przy pomocy lua
    """

    def __init__(
        self,
        url: str | None = None,
        client: redis.Redis | None = None,
        ttl: int = SESSION_LOCK_TTL_SECONDS,
        wait_seconds: float = SESSION_LOCK_WAIT_SECONDS,
    ):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl
        self.wait_seconds = wait_seconds

    @staticmethod
    def _key(session_id: str) -> str:
        return f"cart:{session_id}:lock"

    @redis_retry()
    def acquire_session_lock(self, session_id: str, token: str, ttl: int) -> bool:
        key = self._key(session_id)
        #SET cart:abc:lock "<token>" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True, #jak klucz juz jest to nic nie rob i zwroc None
                ex=ttl, #wygasa sam, padniety proces nie zablokuje sesji na zawsze
            )
        )

    @redis_retry()
    def release_session_lock(self, session_id: str, token: str) -> bool:
        key = self._key(session_id)
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    def _acquire_or_busy(self, session_id: str, token: str) -> None:
        if not self.acquire_session_lock(session_id, token, self.ttl):
            raise CartBusy(session_id)

    @contextmanager
    def session_lock(self, session_id: str):
        """
        Sekcja krytyczna dla jednej sesji.
        Czeka na lock do wait_seconds, potem CartBusy.
        """
        token = uuid.uuid4().hex
        lock_wait_retry(self.wait_seconds)(self._acquire_or_busy)(session_id, token)
        logger.debug(f"Acquired lock {self._key(session_id)}")
        try:
            yield token
        finally:
            if not self.release_session_lock(session_id, token):
                logger.warning(f"Lock {self._key(session_id)} expired before release")
