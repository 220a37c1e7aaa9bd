"""ThirdPartyProviderGateway Port.

외부 플랫폼(GitHub, WeChat 등)과의 통신을 담당하는 Gateway 인터페이스입니다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from apps.sso.application.third_party.dto import ExternalProfile
    from apps.sso.domain.enums import Platform


class ThirdPartyProviderGateway(Protocol):
    """외부 플랫폼 Gateway 인터페이스.

    구현체:
        - ThirdPartyOAuthClient (infrastructure/oauth/)
    """

    def supports(self, platform: Platform) -> bool:
        """설정된 플랫폼 여부."""
        ...

    def get_authorization_url(self, platform: Platform, *, state: str, redirect_uri: str) -> str:
        """인증 URL 생성."""
        ...

    async def fetch_profile(
        self,
        platform: Platform,
        *,
        code: str,
        redirect_uri: str,
    ) -> ExternalProfile:
        """외부 플랫폼 code 교환 및 프로필 조회.

        Raises:
            ServerError: 플랫폼 통신 오류
        """
        ...
