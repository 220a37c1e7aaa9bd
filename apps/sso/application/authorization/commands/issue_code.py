"""IssueAuthorizationCode Command.

인증된 사용자에게 client용 authorization code를 발급하는 Use Case입니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apps.sso.application.authorization.dto import (
    AuthorizationCodeResponse,
    IssueAuthorizationCodeRequest,
)
from apps.sso.application.common.exceptions import (
    InvalidClientError,
    InvalidGrantError,
    InvalidRequestError,
    InvalidScopeError,
)
from apps.sso.application.common.execution import run_bounded
from apps.sso.application.common.masking import mask
from apps.sso.domain.enums import GrantType

if TYPE_CHECKING:
    from apps.sso.application.authorization.services import AuthorizationCodeIssuer
    from apps.sso.application.common.context import RequestContext
    from apps.sso.application.common.ports import ClientRegistry
    from apps.sso.application.common.result import Result
    from apps.sso.application.pkce.services import PkceChallengeManager
    from apps.sso.application.state.services import StateManager

logger = logging.getLogger(__name__)


class IssueAuthorizationCodeInteractor:
    """Authorization code 발급 Interactor.

    Workflow:
        1. client 조회 및 authorization_code grant 허용 확인
        2. redirect_uri 등록 여부 확인
        3. scope가 client scope의 부분집합인지 확인
        4. state 검증/소비 + state에 묶인 PKCE challenge 소비
        5. code 발급
    """

    def __init__(
        self,
        client_registry: "ClientRegistry",
        state_manager: "StateManager",
        pkce_manager: "PkceChallengeManager",
        code_issuer: "AuthorizationCodeIssuer",
    ) -> None:
        self._client_registry = client_registry
        self._state_manager = state_manager
        self._pkce_manager = pkce_manager
        self._code_issuer = code_issuer

    async def execute(
        self,
        ctx: "RequestContext",
        request: IssueAuthorizationCodeRequest,
    ) -> "Result[AuthorizationCodeResponse]":
        return await run_bounded(ctx, self._issue(request), use_case="issue_authorization_code")

    async def _issue(self, request: IssueAuthorizationCodeRequest) -> AuthorizationCodeResponse:
        if not request.principal_id:
            raise InvalidRequestError("Missing authenticated principal")
        if not request.state:
            raise InvalidRequestError("Missing state")

        client = await self._client_registry.lookup_client(request.client_id)
        if client is None or not client.allows_grant(GrantType.AUTHORIZATION_CODE.value):
            raise InvalidClientError("Unknown client or grant not allowed")

        if not client.allows_redirect(request.redirect_uri):
            raise InvalidRequestError("redirect_uri is not registered for this client")

        scopes = request.scopes or client.scopes
        if not scopes <= client.scopes:
            raise InvalidScopeError(f"Scope not allowed: {' '.join(sorted(scopes - client.scopes))}")

        if not await self._state_manager.validate_and_consume(request.state):
            raise InvalidGrantError("Invalid or expired state")
        entry = await self._pkce_manager.take_for_state(request.state)

        code = await self._code_issuer.issue(
            client_id=client.client_id,
            principal_id=request.principal_id,
            scopes=scopes,
            code_challenge=entry.code_challenge if entry else None,
            challenge_method=entry.challenge_method if entry else None,
            redirect_uri=request.redirect_uri,
        )

        logger.info(
            "Authorization granted",
            extra={
                "client_id": client.client_id,
                "principal_id": request.principal_id,
                "state": mask(request.state),
            },
        )
        return AuthorizationCodeResponse(
            code=code.value,
            state=request.state,
            redirect_uri=request.redirect_uri,
        )
