# shop/services/idempotency_service.py
import json

import redis

from shop.utils.retry import redis_retry
from shop.utils.settings import REDIS_URL, IDEMPOTENCY_TTL_SECONDS, IDEMPOTENCY_PENDING_TTL_SECONDS
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class IdempotencyService:
    """
    -klucz Idempotency-Key jest zajmowany (SET NX) zanim zamowienie powstanie
    -dopoki zamowienie sie sklada, pod kluczem lezy znacznik PENDING
    -po commicie znacznik jest nadpisywany wynikiem, po bledzie klucz jest zwalniany
    -klucze wygasaja po IDEMPOTENCY_TTL_SECONDS
    """

    PENDING = "pending"

    def __init__(
        self,
        url: str | None = None,
        ttl: int = IDEMPOTENCY_TTL_SECONDS,
        pending_ttl: int = IDEMPOTENCY_PENDING_TTL_SECONDS,
    ):
        # from_url nie laczy sie od razu, redis potrzebny dopiero przy pierwszym kluczu
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl
        self.pending_ttl = pending_ttl

    @staticmethod
    def _key(scope: str, key: str) -> str:
        return f"idempotency:{scope}:{key}"

    @redis_retry()
    def claim(self, scope: str, key: str) -> bool:
        # NX: tylko pierwszy request z danym kluczem sklada zamowienie
        return bool(
            self.redis.set(
                name=self._key(scope, key),
                value=self.PENDING,
                nx=True,
                ex=self.pending_ttl,
            )
        )

    @redis_retry()
    def get_result(self, scope: str, key: str) -> dict | str | None:
        """Zwraca zapisany wynik, PENDING gdy zamowienie jeszcze trwa, albo None."""
        raw = self.redis.get(self._key(scope, key))
        if raw is None or raw == self.PENDING:
            return raw
        logger.info(f"Idempotency hit for {self._key(scope, key)}")
        return json.loads(raw)

    @redis_retry()
    def store_result(self, scope: str, key: str, result: dict) -> None:
        # nadpisuje PENDING wynikiem
        self.redis.set(
            name=self._key(scope, key),
            value=json.dumps(result, default=str),
            ex=self.ttl,
        )

    @redis_retry()
    def release(self, scope: str, key: str) -> None:
        self.redis.delete(self._key(scope, key))
