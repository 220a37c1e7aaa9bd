"""OAuth2 HTTP Schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from apps.sso.application.common.ports import TokenPair


class PkceParamsResponse(BaseModel):
    """PKCE 파라미터 응답."""

    state: str = Field(..., description="CSRF 방지용 상태 값")
    code_verifier: str = Field(..., description="PKCE code_verifier")
    code_challenge: str = Field(..., description="PKCE code_challenge")
    code_challenge_method: str = Field(default="S256", description="challenge 방식")


class AuthorizeRequest(BaseModel):
    """Authorization code 발급 요청."""

    client_id: str = Field(..., description="client ID")
    state: str = Field(..., description="PKCE 파라미터 발급 시 받은 state")
    redirect_uri: str | None = Field(None, description="code를 전달받을 redirect URI")
    scope: str | None = Field(None, description="공백 구분 scope (생략 시 client 전체 scope)")

    def scope_set(self) -> frozenset[str]:
        return frozenset(self.scope.split()) if self.scope else frozenset()


class AuthorizeResponse(BaseModel):
    """Authorization code 발급 응답."""

    code: str = Field(..., description="일회용 authorization code")
    state: str = Field(..., description="요청한 state")
    redirect_uri: str | None = Field(None, description="redirect URI")


class TokenResponse(BaseModel):
    """RFC 6749 §5.1 토큰 응답."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    scope: str = ""
    refresh_token: str | None = None
    id_token: str | None = None

    @classmethod
    def from_pair(cls, pair: "TokenPair") -> TokenResponse:
        return cls(
            access_token=pair.access_token,
            token_type=pair.token_type,
            expires_in=pair.expires_in,
            scope=pair.scope,
            refresh_token=pair.refresh_token,
            id_token=pair.id_token,
        )


class TokenPickupRequest(BaseModel):
    """Token handoff code pickup 요청."""

    code: str = Field(..., description="콜백 리다이렉트로 받은 token_code")


class ErrorResponse(BaseModel):
    """RFC 6749 §5.2 오류 응답."""

    error: str
    error_description: str | None = None
