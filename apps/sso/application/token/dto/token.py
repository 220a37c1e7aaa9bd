"""Token DTOs."""

from __future__ import annotations

from dataclasses import dataclass

from apps.sso.application.common.ports import TokenPair
from apps.sso.domain.enums import GrantType


@dataclass(frozen=True, slots=True)
class TokenExchangeRequest:
    """Token endpoint 요청 (RFC 6749 §4.1.3)."""

    code: str | None
    client_id: str | None
    grant_type: str | None = GrantType.AUTHORIZATION_CODE.value
    redirect_uri: str | None = None
    client_secret: str | None = None
    code_verifier: str | None = None
    state: str | None = None


@dataclass(frozen=True, slots=True)
class TokenHandoffCode:
    """리다이렉트 URL에 토큰 대신 싣는 일회용 pickup code."""

    value: str
    token_payload: TokenPair
    ttl: int
