"""Redis Ephemeral Store.

EphemeralStore 포트의 구현체입니다.

take_once는 Lua Script로 GET + DEL을 서버에서 원자적으로 실행합니다.
동시에 같은 키를 요청해도 하나의 호출자만 값을 받습니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from apps.sso.application.common.exceptions import StoreUnavailableError

if TYPE_CHECKING:
    import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

# KEYS[1] = key
# Returns: value or nil
TAKE_ONCE_SCRIPT = """
local value = redis.call('GET', KEYS[1])
if value then
    redis.call('DEL', KEYS[1])
end
return value
"""


class RedisEphemeralStore:
    """Redis 기반 TTL key/value 저장소.

    EphemeralStore 구현체.
    """

    def __init__(self, redis: "aioredis.Redis") -> None:
        self._redis = redis
        # register_script는 로컬 캐싱만 수행 (EVALSHA는 호출 시점)
        self._take_once_script = redis.register_script(TAKE_ONCE_SCRIPT)

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """값 저장."""
        try:
            await self._redis.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            self._log_failure("put", key, e)
            raise StoreUnavailableError("Ephemeral store unavailable") from e

    async def peek(self, key: str) -> str | None:
        """값 조회 (삭제하지 않음)."""
        try:
            return await self._redis.get(key)
        except RedisError as e:
            self._log_failure("peek", key, e)
            raise StoreUnavailableError("Ephemeral store unavailable") from e

    async def take_once(self, key: str) -> str | None:
        """값 조회 및 삭제 (원자적)."""
        try:
            return await self._take_once_script(keys=[key])
        except RedisError as e:
            self._log_failure("take_once", key, e)
            raise StoreUnavailableError("Ephemeral store unavailable") from e

    async def delete(self, key: str) -> None:
        """값 삭제."""
        try:
            await self._redis.delete(key)
        except RedisError as e:
            self._log_failure("delete", key, e)
            raise StoreUnavailableError("Ephemeral store unavailable") from e

    @staticmethod
    def _log_failure(operation: str, key: str, error: Exception) -> None:
        # 키 prefix만 기록 (값 부분은 일회용 credential)
        prefix = key.rsplit(":", 1)[0]
        logger.error(
            "Redis operation failed",
            extra={"operation": operation, "key_prefix": prefix, "error": str(error)},
        )
