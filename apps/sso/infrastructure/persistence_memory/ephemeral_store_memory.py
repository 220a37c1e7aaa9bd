"""In-memory Ephemeral Store.

로컬 실행 및 테스트용 EphemeralStore 구현체입니다.

만료는 조회 시점에 monotonic clock으로 판단합니다.
take_once는 단일 dict.pop이므로 이벤트 루프 안에서 원자적입니다.
"""

from __future__ import annotations

import time
from collections.abc import Callable


class InMemoryEphemeralStore:
    """프로세스 로컬 TTL key/value 저장소."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        self._entries[key] = (value, self._clock() + ttl_seconds)

    async def peek(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    async def take_once(self, key: str) -> str | None:
        entry = self._entries.pop(key, None)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            return None
        return value

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
