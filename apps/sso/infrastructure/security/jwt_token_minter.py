"""JWT Token Minter.

TokenMinter 포트의 구현체입니다.
"""

from __future__ import annotations

import time
import uuid
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt

from apps.sso.application.common.ports import TokenPair

if TYPE_CHECKING:
    from apps.sso.application.common.ports import ClientRecord

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JwtTokenMinter:
    """JWT 토큰 발급기.

    TokenMinter 구현체. access/refresh 토큰을 같은 키로 서명합니다.
    """

    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "sso-service",
        audience: str | None = None,
        access_token_expire_minutes: int = 15,
        refresh_token_expire_minutes: int = 10080,  # 7일
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._issuer = issuer
        self._audience = audience
        self._access_token_expire = timedelta(minutes=access_token_expire_minutes)
        self._refresh_token_expire = timedelta(minutes=refresh_token_expire_minutes)

    def _now_timestamp(self) -> int:
        """현재 UTC Unix timestamp 반환."""
        return int(time.time())

    def _create_token(
        self,
        *,
        subject: str,
        client_id: str,
        scope: str,
        token_type: str,
        grant_type: str,
        expires_delta: timedelta,
    ) -> str:
        now = self._now_timestamp()
        payload: dict[str, Any] = {
            "sub": subject,
            "jti": str(uuid.uuid4()),
            "type": token_type,
            "exp": now + int(expires_delta.total_seconds()),
            "iat": now,
            "nbf": now,
            "iss": self._issuer,
            "aud": self._audience or client_id,
            "client_id": client_id,
            "scope": scope,
            "grant_type": grant_type,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def mint(
        self,
        principal_id: str,
        client: "ClientRecord",
        scopes: frozenset[str],
        grant_type: str,
    ) -> TokenPair:
        """토큰 쌍 발급."""
        scope = " ".join(sorted(scopes))
        access_token = self._create_token(
            subject=principal_id,
            client_id=client.client_id,
            scope=scope,
            token_type=ACCESS_TOKEN_TYPE,
            grant_type=grant_type,
            expires_delta=self._access_token_expire,
        )
        refresh_token = self._create_token(
            subject=principal_id,
            client_id=client.client_id,
            scope=scope,
            token_type=REFRESH_TOKEN_TYPE,
            grant_type=grant_type,
            expires_delta=self._refresh_token_expire,
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=int(self._access_token_expire.total_seconds()),
            scope=scope,
        )

    def decode(self, token: str, *, audience: str) -> dict[str, Any]:
        """토큰 디코딩 (서명/만료/issuer/audience 검증).

        Raises:
            ValueError: 검증 실패
        """
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience or audience,
                issuer=self._issuer,
            )
        except JWTError as e:
            raise ValueError(str(e)) from e
