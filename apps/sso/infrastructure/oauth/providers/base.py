"""Third-party OAuth Provider Base Class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from apps.sso.application.third_party.dto import ExternalProfile
    from apps.sso.domain.enums import Platform


class OAuthProviderError(RuntimeError):
    """외부 플랫폼 응답 오류 (HTTP 200이지만 오류 payload 등)."""

    pass


class OAuthProvider(ABC):
    """외부 플랫폼 OAuth 프로바이더 추상 클래스."""

    platform: "Platform"

    def __init__(self, *, client_id: str, client_secret: str | None) -> None:
        self.client_id = client_id
        self.client_secret = client_secret

    @property
    def default_scopes(self) -> tuple[str, ...]:
        """기본 스코프."""
        return ()

    @abstractmethod
    def build_authorization_url(self, *, state: str, redirect_uri: str) -> str:
        """인증 URL 생성."""
        raise NotImplementedError

    @abstractmethod
    async def exchange_code(
        self,
        *,
        client: "httpx.AsyncClient",
        code: str,
        redirect_uri: str,
    ) -> dict:
        """인증 코드로 토큰 교환."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_profile(
        self,
        *,
        client: "httpx.AsyncClient",
        tokens: dict,
    ) -> "ExternalProfile":
        """사용자 프로필 조회."""
        raise NotImplementedError
