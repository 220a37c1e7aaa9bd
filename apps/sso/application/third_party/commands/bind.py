"""BindAccount / CreateAccount Commands.

bind code를 소비해 외부 계정을 기존/신규 사용자와 연결하고 토큰을 발급합니다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.sso.application.common.exceptions import InvalidRequestError
from apps.sso.application.common.execution import run_bounded
from apps.sso.domain.enums import Platform

if TYPE_CHECKING:
    from apps.sso.application.common.context import RequestContext
    from apps.sso.application.common.ports import TokenPair
    from apps.sso.application.common.result import Result
    from apps.sso.application.third_party.dto import BindCredentials, NewAccountDetails
    from apps.sso.application.third_party.services import (
        ThirdPartyBindingBridge,
        ThirdPartyTokenService,
    )


def _require_platform(name: str) -> Platform:
    platform = Platform.parse(name)
    if platform is None:
        raise InvalidRequestError(f"Unsupported platform: {name}")
    return platform


class BindAccountInteractor:
    """기존 계정 연결 Interactor."""

    def __init__(
        self,
        bridge: "ThirdPartyBindingBridge",
        token_service: "ThirdPartyTokenService",
    ) -> None:
        self._bridge = bridge
        self._token_service = token_service

    async def execute(
        self,
        ctx: "RequestContext",
        platform: str,
        bind_code: str,
        credentials: "BindCredentials",
    ) -> "Result[TokenPair]":
        return await run_bounded(
            ctx,
            self._bind(ctx, platform, bind_code, credentials),
            use_case="bind_account",
        )

    async def _bind(
        self,
        ctx: "RequestContext",
        platform: str,
        bind_code: str,
        credentials: "BindCredentials",
    ) -> "TokenPair":
        user_id = await self._bridge.complete_bind(
            bind_code, credentials, platform=_require_platform(platform)
        )
        return await self._token_service.issue_for_user(ctx, user_id)


class CreateAccountInteractor:
    """신규 계정 생성 Interactor."""

    def __init__(
        self,
        bridge: "ThirdPartyBindingBridge",
        token_service: "ThirdPartyTokenService",
    ) -> None:
        self._bridge = bridge
        self._token_service = token_service

    async def execute(
        self,
        ctx: "RequestContext",
        platform: str,
        bind_code: str,
        details: "NewAccountDetails",
    ) -> "Result[TokenPair]":
        return await run_bounded(
            ctx,
            self._create(ctx, platform, bind_code, details),
            use_case="create_account",
        )

    async def _create(
        self,
        ctx: "RequestContext",
        platform: str,
        bind_code: str,
        details: "NewAccountDetails",
    ) -> "TokenPair":
        user_id = await self._bridge.complete_create(
            bind_code, details, platform=_require_platform(platform)
        )
        return await self._token_service.issue_for_user(ctx, user_id)
