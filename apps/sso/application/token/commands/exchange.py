"""TokenExchange Command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.sso.application.common.execution import run_bounded

if TYPE_CHECKING:
    from apps.sso.application.common.context import RequestContext
    from apps.sso.application.common.ports import TokenPair
    from apps.sso.application.common.result import Result
    from apps.sso.application.token.dto import TokenExchangeRequest
    from apps.sso.application.token.services import TokenExchangeEngine


class TokenExchangeInteractor:
    """Token endpoint Interactor."""

    def __init__(self, engine: "TokenExchangeEngine") -> None:
        self._engine = engine

    async def execute(
        self,
        ctx: "RequestContext",
        request: "TokenExchangeRequest",
    ) -> "Result[TokenPair]":
        return await run_bounded(ctx, self._engine.exchange(ctx, request), use_case="token_exchange")
