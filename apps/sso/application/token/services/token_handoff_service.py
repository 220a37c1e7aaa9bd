"""Token Handoff Service.

토큰을 리다이렉트 URL에 노출하지 않도록 일회용 pickup code로 감쌉니다.
"""

from __future__ import annotations

import json
import logging
import secrets
import string
from typing import TYPE_CHECKING

from apps.sso.application.common.exceptions import InvalidGrantError
from apps.sso.application.common.keys import TOKEN_HANDOFF_KEY_PREFIX
from apps.sso.application.common.masking import mask
from apps.sso.application.common.ports import TokenPair
from apps.sso.application.token.dto import TokenHandoffCode

if TYPE_CHECKING:
    from apps.sso.application.common.ports import EphemeralStore

logger = logging.getLogger(__name__)

HANDOFF_CODE_LENGTH = 32
HANDOFF_TTL_SECONDS = 300
ALPHANUMERIC = string.ascii_letters + string.digits


def random_alphanumeric(length: int) -> str:
    return "".join(secrets.choice(ALPHANUMERIC) for _ in range(length))


class TokenHandoffService:
    """Token handoff 서비스."""

    def __init__(self, store: "EphemeralStore", ttl_seconds: int = HANDOFF_TTL_SECONDS) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds

    async def issue(self, token_pair: TokenPair) -> TokenHandoffCode:
        """토큰을 보관하고 pickup code 발급."""
        value = random_alphanumeric(HANDOFF_CODE_LENGTH)
        await self._store.put(
            f"{TOKEN_HANDOFF_KEY_PREFIX}{value}",
            json.dumps(token_pair.to_dict()),
            self._ttl_seconds,
        )
        logger.debug("Token handoff code issued", extra={"code": mask(value)})
        return TokenHandoffCode(value=value, token_payload=token_pair, ttl=self._ttl_seconds)

    async def pickup(self, value: str | None) -> TokenPair:
        """pickup code로 토큰 조회 (한 번만 성공).

        Raises:
            InvalidGrantError: code 없음/만료/재사용
        """
        raw = await self._store.take_once(f"{TOKEN_HANDOFF_KEY_PREFIX}{value}") if value else None
        if raw is None:
            raise InvalidGrantError("Invalid, expired or already used token code")
        return TokenPair.from_dict(json.loads(raw))
