"""TokenPickup Command.

Frontend가 콜백 리다이렉트로 받은 token_code를 실제 토큰으로 교환합니다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.sso.application.common.execution import run_bounded

if TYPE_CHECKING:
    from apps.sso.application.common.context import RequestContext
    from apps.sso.application.common.ports import TokenPair
    from apps.sso.application.common.result import Result
    from apps.sso.application.token.services import TokenHandoffService


class TokenPickupInteractor:
    """Token pickup Interactor."""

    def __init__(self, handoff_service: "TokenHandoffService") -> None:
        self._handoff_service = handoff_service

    async def execute(self, ctx: "RequestContext", code: str | None) -> "Result[TokenPair]":
        return await run_bounded(ctx, self._handoff_service.pickup(code), use_case="token_pickup")
