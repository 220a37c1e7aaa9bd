"""Authorization Code Issuer.

일회용 authorization code 발급 및 원자적 소비를 담당합니다.
"""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING

from apps.sso.application.authorization.dto import AuthorizationCode
from apps.sso.application.common.exceptions import InvalidRequestError
from apps.sso.application.common.keys import AUTHORIZATION_CODE_KEY_PREFIX
from apps.sso.application.common.masking import mask
from apps.sso.domain.enums import ChallengeMethod

if TYPE_CHECKING:
    from apps.sso.application.common.ports import EphemeralStore

logger = logging.getLogger(__name__)

CODE_BYTES = 16
CODE_TTL_SECONDS = 600


class AuthorizationCodeIssuer:
    """Authorization code 서비스."""

    def __init__(self, store: "EphemeralStore") -> None:
        self._store = store

    async def issue(
        self,
        client_id: str,
        principal_id: str,
        scopes: Iterable[str] = (),
        code_challenge: str | None = None,
        challenge_method: ChallengeMethod | str | None = None,
        redirect_uri: str | None = None,
    ) -> AuthorizationCode:
        """Authorization code 발급.

        Args:
            client_id: code를 받을 client
            principal_id: 인증된 사용자
            scopes: 부여된 scope
            code_challenge: PKCE challenge (선택)
            challenge_method: PKCE 방식 (S256만 허용)
            redirect_uri: code가 전달될 redirect_uri (교환 시 일치 확인)

        Returns:
            발급된 AuthorizationCode

        Raises:
            InvalidRequestError: S256 이외의 challenge 방식
        """
        method: ChallengeMethod | None = None
        if code_challenge:
            method = ChallengeMethod.parse(challenge_method or ChallengeMethod.S256)
            if method is not ChallengeMethod.S256:
                raise InvalidRequestError(f"Unsupported code_challenge_method: {challenge_method}")

        now = time.time()
        code = AuthorizationCode(
            value=secrets.token_hex(CODE_BYTES),
            client_id=client_id,
            principal_id=principal_id,
            scopes=frozenset(scopes),
            code_challenge=code_challenge or None,
            challenge_method=method,
            redirect_uri=redirect_uri,
            issued_at=now,
            expires_at=now + CODE_TTL_SECONDS,
        )
        await self._store.put(
            f"{AUTHORIZATION_CODE_KEY_PREFIX}{code.value}",
            code.to_json(),
            CODE_TTL_SECONDS,
        )

        logger.info(
            "Authorization code issued",
            extra={
                "code": mask(code.value),
                "client_id": client_id,
                "pkce": code.has_challenge,
            },
        )
        return code

    async def redeem(self, value: str | None) -> AuthorizationCode | None:
        """Authorization code 소비 (성공 여부와 무관하게 한 번만 반환)."""
        if not value:
            return None
        raw = await self._store.take_once(f"{AUTHORIZATION_CODE_KEY_PREFIX}{value}")
        if raw is None:
            logger.info("Authorization code not found", extra={"code": mask(value)})
            return None

        code = AuthorizationCode.from_json(raw)
        if code.is_expired():
            logger.info("Authorization code expired", extra={"code": mask(value)})
            return None
        return code
