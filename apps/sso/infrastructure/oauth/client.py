"""Third-party OAuth Client.

ThirdPartyProviderGateway 포트의 구현체입니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from apps.sso.application.common.exceptions import ServerError
from apps.sso.infrastructure.oauth.providers import OAuthProviderError

if TYPE_CHECKING:
    from apps.sso.application.third_party.dto import ExternalProfile
    from apps.sso.domain.enums import Platform
    from apps.sso.infrastructure.oauth.registry import ProviderRegistry

logger = logging.getLogger(__name__)


class ThirdPartyOAuthClient:
    """외부 플랫폼 OAuth 클라이언트.

    ThirdPartyProviderGateway 구현체.
    """

    def __init__(
        self,
        registry: "ProviderRegistry",
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            registry: 프로바이더 레지스트리
            timeout_seconds: HTTP 클라이언트 타임아웃 (설정에서 주입)
            transport: 테스트용 httpx transport (선택)
        """
        self._registry = registry
        self._timeout = timeout_seconds
        self._transport = transport

    def supports(self, platform: "Platform") -> bool:
        return self._registry.has(platform)

    def get_authorization_url(self, platform: "Platform", *, state: str, redirect_uri: str) -> str:
        """인증 URL 생성."""
        return self._registry.get(platform).build_authorization_url(
            state=state,
            redirect_uri=redirect_uri,
        )

    async def fetch_profile(
        self,
        platform: "Platform",
        *,
        code: str,
        redirect_uri: str,
    ) -> "ExternalProfile":
        """토큰 교환 및 프로필 조회."""
        provider = self._registry.get(platform)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                tokens = await provider.exchange_code(
                    client=client,
                    code=code,
                    redirect_uri=redirect_uri,
                )
                return await provider.fetch_profile(client=client, tokens=tokens)

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Third-party API error",
                extra={"platform": platform.value, "status_code": e.response.status_code},
            )
            raise ServerError(f"{platform.value} API error: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning(
                "Third-party request failed",
                extra={"platform": platform.value, "error": str(e)},
            )
            raise ServerError(f"{platform.value} request failed") from e
        except OAuthProviderError as e:
            logger.warning(
                "Third-party provider rejected code",
                extra={"platform": platform.value, "error": str(e)},
            )
            raise ServerError(f"{platform.value} provider error") from e
