"""ThirdPartyAuthorize Command.

외부 플랫폼 인증 URL을 생성하는 Use Case입니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apps.sso.application.common.exceptions import InvalidRequestError
from apps.sso.application.common.execution import run_bounded
from apps.sso.application.common.keys import third_party_state_prefix
from apps.sso.application.third_party.dto import ThirdPartyAuthorizeResponse
from apps.sso.domain.enums import Platform

if TYPE_CHECKING:
    from apps.sso.application.common.context import RequestContext
    from apps.sso.application.common.result import Result
    from apps.sso.application.state.services import StateManager
    from apps.sso.application.third_party.ports import ThirdPartyProviderGateway

logger = logging.getLogger(__name__)


class ThirdPartyAuthorizeInteractor:
    """외부 플랫폼 인증 시작 Interactor.

    Workflow:
        1. 플랫폼 확인
        2. 플랫폼별 prefix로 state 발급
        3. 인증 URL 생성
    """

    def __init__(
        self,
        state_manager: "StateManager",
        provider_gateway: "ThirdPartyProviderGateway",
        state_ttl_seconds: int = 600,
    ) -> None:
        self._state_manager = state_manager
        self._provider_gateway = provider_gateway
        self._state_ttl_seconds = state_ttl_seconds

    async def execute(
        self,
        ctx: "RequestContext",
        platform: str,
        redirect_uri: str,
    ) -> "Result[ThirdPartyAuthorizeResponse]":
        return await run_bounded(
            ctx,
            self._authorize(platform, redirect_uri),
            use_case="third_party_authorize",
        )

    async def _authorize(self, platform_name: str, redirect_uri: str) -> ThirdPartyAuthorizeResponse:
        platform = Platform.parse(platform_name)
        if platform is None or not self._provider_gateway.supports(platform):
            raise InvalidRequestError(f"Unsupported platform: {platform_name}")

        state = await self._state_manager.issue_state(
            prefix=third_party_state_prefix(platform.value),
            ttl_seconds=self._state_ttl_seconds,
        )
        url = self._provider_gateway.get_authorization_url(
            platform,
            state=state,
            redirect_uri=redirect_uri,
        )
        logger.info("Third-party authorization started", extra={"platform": platform.value})
        return ThirdPartyAuthorizeResponse(authorization_url=url, state=state)
