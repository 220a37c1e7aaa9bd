"""ThirdPartyCallback Command.

외부 플랫폼 콜백 처리 Use Case입니다.

Architecture:
    - UseCase(지휘자): ThirdPartyCallbackInteractor
    - Services(연주자): StateManager, ThirdPartyBindingBridge,
      ThirdPartyTokenService, TokenHandoffService
    - Ports(인프라): ThirdPartyProviderGateway
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apps.sso.application.common.exceptions import InvalidGrantError, InvalidRequestError
from apps.sso.application.common.execution import run_bounded
from apps.sso.application.common.keys import third_party_state_prefix
from apps.sso.application.third_party.dto import LinkedUser, ThirdPartyCallbackResponse
from apps.sso.domain.enums import Platform

if TYPE_CHECKING:
    from apps.sso.application.common.context import RequestContext
    from apps.sso.application.common.result import Result
    from apps.sso.application.state.services import StateManager
    from apps.sso.application.third_party.dto import ThirdPartyCallbackRequest
    from apps.sso.application.third_party.ports import ThirdPartyProviderGateway
    from apps.sso.application.third_party.services import (
        ThirdPartyBindingBridge,
        ThirdPartyTokenService,
    )
    from apps.sso.application.token.services import TokenHandoffService

logger = logging.getLogger(__name__)


class ThirdPartyCallbackInteractor:
    """외부 플랫폼 콜백 Interactor (지휘자).

    Workflow:
        1. 플랫폼별 state 검증/소비
        2. 플랫폼 code 교환 + 프로필 조회 (Gateway)
        3. 연결 여부 판단 (Bridge)
        4-a. 연결됨: 토큰 발급 → token handoff code
        4-b. 연결 안 됨: bind code 반환
    """

    def __init__(
        self,
        state_manager: "StateManager",
        provider_gateway: "ThirdPartyProviderGateway",
        bridge: "ThirdPartyBindingBridge",
        token_service: "ThirdPartyTokenService",
        handoff_service: "TokenHandoffService",
    ) -> None:
        self._state_manager = state_manager
        self._provider_gateway = provider_gateway
        self._bridge = bridge
        self._token_service = token_service
        self._handoff_service = handoff_service

    async def execute(
        self,
        ctx: "RequestContext",
        request: "ThirdPartyCallbackRequest",
    ) -> "Result[ThirdPartyCallbackResponse]":
        return await run_bounded(ctx, self._handle(ctx, request), use_case="third_party_callback")

    async def _handle(
        self,
        ctx: "RequestContext",
        request: "ThirdPartyCallbackRequest",
    ) -> ThirdPartyCallbackResponse:
        platform = Platform.parse(request.platform)
        if platform is None or not self._provider_gateway.supports(platform):
            raise InvalidRequestError(f"Unsupported platform: {request.platform}")
        if not request.code:
            raise InvalidRequestError("Missing code")

        valid = await self._state_manager.validate_and_consume(
            request.state,
            prefix=third_party_state_prefix(platform.value),
        )
        if not valid:
            raise InvalidGrantError("Invalid or expired state")

        profile = await self._provider_gateway.fetch_profile(
            platform,
            code=request.code,
            redirect_uri=request.redirect_uri,
        )
        outcome = await self._bridge.on_callback(profile.external_id, platform, profile)

        if isinstance(outcome, LinkedUser):
            tokens = await self._token_service.issue_for_user(ctx, outcome.user_id)
            handoff = await self._handoff_service.issue(tokens)
            logger.info(
                "Third-party login succeeded",
                extra={"platform": platform.value, "user_id": outcome.user_id},
            )
            return ThirdPartyCallbackResponse(platform=platform, token_code=handoff.value)

        bind_code = outcome.bind_code
        return ThirdPartyCallbackResponse(
            platform=platform,
            bind_code=bind_code.value,
            nickname=bind_code.nickname,
            avatar_url=bind_code.avatar_url,
        )
