"""State Manager.

Anti-CSRF state 발급 및 일회성 검증을 담당합니다.
"""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING

from apps.sso.application.common.keys import STATE_KEY_PREFIX
from apps.sso.application.common.masking import mask

if TYPE_CHECKING:
    from apps.sso.application.common.ports import EphemeralStore

logger = logging.getLogger(__name__)

STATE_BYTES = 32
STATE_MARKER = "1"
DEFAULT_STATE_TTL_SECONDS = 600


class StateManager:
    """State 발급/검증 서비스.

    state는 prefix + state 키로 저장되며, 검증 시 원자적으로 소비됩니다.
    """

    def __init__(self, store: "EphemeralStore") -> None:
        self._store = store

    async def issue_state(
        self,
        prefix: str = STATE_KEY_PREFIX,
        ttl_seconds: int = DEFAULT_STATE_TTL_SECONDS,
    ) -> str:
        """새 state 발급.

        Args:
            prefix: 저장 키 prefix
            ttl_seconds: 만료 시간 (초)

        Returns:
            URL-safe state 문자열
        """
        state = secrets.token_urlsafe(STATE_BYTES)
        await self._store.put(f"{prefix}{state}", STATE_MARKER, ttl_seconds)
        logger.debug("State issued", extra={"state": mask(state), "prefix": prefix})
        return state

    async def validate_and_consume(self, state: str | None, prefix: str = STATE_KEY_PREFIX) -> bool:
        """state 검증 및 소비 (한 번만 True)."""
        if not state or not state.strip():
            return False
        value = await self._store.take_once(f"{prefix}{state}")
        if value is None:
            logger.info(
                "State rejected (unknown, expired or replayed)",
                extra={"state": mask(state), "prefix": prefix},
            )
            return False
        return True

    async def is_valid(self, state: str | None, prefix: str = STATE_KEY_PREFIX) -> bool:
        """state 존재 여부 확인 (소비하지 않음)."""
        if not state or not state.strip():
            return False
        return await self._store.peek(f"{prefix}{state}") is not None
