"""EphemeralStore Port.

단기 일회용 아티팩트(state, PKCE, code)를 보관하는 TTL key/value 저장소입니다.
"""

from typing import Protocol


class EphemeralStore(Protocol):
    """TTL key/value 저장소 인터페이스.

    구현체:
        - RedisEphemeralStore (infrastructure/persistence_redis/)
        - InMemoryEphemeralStore (infrastructure/persistence_memory/)

    모든 메서드는 저장소 장애 시 StoreUnavailableError를 raise합니다.
    """

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """값 저장 (기존 값 덮어쓰기).

        Args:
            key: 저장 키
            value: 직렬화된 값
            ttl_seconds: 만료 시간 (초)
        """
        ...

    async def peek(self, key: str) -> str | None:
        """값 조회 (삭제하지 않음)."""
        ...

    async def take_once(self, key: str) -> str | None:
        """값 조회 및 삭제 (원자적).

        동시에 같은 키를 요청하면 정확히 하나의 호출자만 값을 받습니다.

        Returns:
            값 또는 None (없거나 만료되었거나 이미 소비됨)
        """
        ...

    async def delete(self, key: str) -> None:
        """값 삭제 (없으면 무시)."""
        ...
