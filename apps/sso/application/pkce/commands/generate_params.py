"""GeneratePkceParams Command.

state와 PKCE verifier/challenge 쌍을 발급하는 Use Case입니다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.sso.application.common.execution import run_bounded

if TYPE_CHECKING:
    from apps.sso.application.common.context import RequestContext
    from apps.sso.application.common.result import Result
    from apps.sso.application.pkce.dto import PkceParams
    from apps.sso.application.pkce.services import PkceChallengeManager


class GeneratePkceParamsInteractor:
    """PKCE 파라미터 발급 Interactor."""

    def __init__(self, pkce_manager: "PkceChallengeManager", state_ttl_seconds: int = 600) -> None:
        self._pkce_manager = pkce_manager
        self._state_ttl_seconds = state_ttl_seconds

    async def execute(self, ctx: "RequestContext") -> "Result[PkceParams]":
        return await run_bounded(
            ctx,
            self._pkce_manager.generate_params(self._state_ttl_seconds),
            use_case="generate_pkce_params",
        )
