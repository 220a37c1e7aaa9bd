"""Token Exchange Engine.

authorization_code grant의 두 교환 경로를 처리합니다.

- PKCE 경로: code_verifier 제출 → code 소비 → challenge 검증
- Confidential 경로: client_secret 상수 시간 검증 → code 소비

code는 소비 시점에 삭제되므로, 소비 이후의 검증 실패도 code를 소진시킵니다.
"""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

from apps.sso.application.common.exceptions import (
    InvalidClientError,
    InvalidGrantError,
    InvalidRequestError,
    ServerError,
    UnsupportedGrantTypeError,
)
from apps.sso.application.common.masking import mask
from apps.sso.domain.enums import GrantType

if TYPE_CHECKING:
    from apps.sso.application.authorization.dto import AuthorizationCode
    from apps.sso.application.authorization.services import AuthorizationCodeIssuer
    from apps.sso.application.common.context import RequestContext
    from apps.sso.application.common.ports import (
        ClientRecord,
        ClientRegistry,
        TokenMinter,
        TokenPair,
    )
    from apps.sso.application.pkce.services import PkceChallengeManager
    from apps.sso.application.token.dto import TokenExchangeRequest

logger = logging.getLogger(__name__)


class TokenExchangeEngine:
    """Token 교환 서비스.

    Args:
        pkce_required: verifier 없는 교환을 정책 위반으로 취급할지 여부
        allow_pkce_downgrade: pkce_required 상태에서 verifier가 없을 때
            client_secret 경로로 진행할지 여부 (False면 invalid_grant)
    """

    def __init__(
        self,
        client_registry: "ClientRegistry",
        code_issuer: "AuthorizationCodeIssuer",
        pkce_manager: "PkceChallengeManager",
        token_minter: "TokenMinter",
        *,
        pkce_required: bool = True,
        allow_pkce_downgrade: bool = False,
    ) -> None:
        self._client_registry = client_registry
        self._code_issuer = code_issuer
        self._pkce_manager = pkce_manager
        self._token_minter = token_minter
        self._pkce_required = pkce_required
        self._allow_pkce_downgrade = allow_pkce_downgrade

    async def exchange(self, ctx: "RequestContext", request: "TokenExchangeRequest") -> "TokenPair":
        """authorization code를 토큰으로 교환.

        Raises:
            UnsupportedGrantTypeError: authorization_code 이외의 grant
            InvalidRequestError: grant_type/code/client_id 누락
            InvalidClientError: 알 수 없는 client 또는 client 인증 실패
            InvalidGrantError: code 없음/만료/재사용, 바인딩 불일치, verifier 불일치
            ServerError: 토큰 발급 실패
        """
        if not request.grant_type:
            raise InvalidRequestError("Missing grant_type")
        if request.grant_type != GrantType.AUTHORIZATION_CODE.value:
            raise UnsupportedGrantTypeError(f"Unsupported grant_type: {request.grant_type}")
        if not request.code:
            raise InvalidRequestError("Missing code")
        if not request.client_id:
            raise InvalidRequestError("Missing client_id")

        client = await self._client_registry.lookup_client(request.client_id)
        if client is None or not client.allows_grant(GrantType.AUTHORIZATION_CODE.value):
            logger.info(
                "Token exchange rejected: unknown client",
                extra={"client_id": request.client_id, "request_id": ctx.request_id},
            )
            raise InvalidClientError("Unknown client or grant not allowed")

        if request.code_verifier:
            code = await self._redeem_with_verifier(request, client)
        else:
            code = await self._redeem_with_secret(ctx, request, client)

        try:
            tokens = self._token_minter.mint(
                code.principal_id,
                client,
                code.scopes,
                GrantType.AUTHORIZATION_CODE.value,
            )
        except Exception as e:
            logger.exception(
                "Token minting failed",
                extra={"client_id": client.client_id, "request_id": ctx.request_id},
            )
            raise ServerError("Token minting failed") from e

        logger.info(
            "Token exchange succeeded",
            extra={
                "client_id": client.client_id,
                "principal_id": code.principal_id,
                "pkce": request.code_verifier is not None,
                "request_id": ctx.request_id,
            },
        )
        return tokens

    async def _redeem_with_verifier(
        self,
        request: "TokenExchangeRequest",
        client: "ClientRecord",
    ) -> "AuthorizationCode":
        code = await self._redeem_bound(request, client)

        if code.has_challenge:
            if not self._pkce_manager.validate_verifier(
                code.code_challenge,  # type: ignore[arg-type]
                code.challenge_method,
                request.code_verifier,
            ):
                logger.info(
                    "PKCE verification failed",
                    extra={"client_id": client.client_id, "code": mask(request.code)},
                )
                raise InvalidGrantError("PKCE verification failed")
        else:
            # challenge 없이 발급된 code는 verifier만으로 교환할 수 없음
            self._authenticate_client(client, request.client_secret)
        return code

    async def _redeem_with_secret(
        self,
        ctx: "RequestContext",
        request: "TokenExchangeRequest",
        client: "ClientRecord",
    ) -> "AuthorizationCode":
        if self._pkce_required:
            logger.warning(
                "PKCE downgrade: code_verifier missing while PKCE is required",
                extra={
                    "client_id": client.client_id,
                    "request_id": ctx.request_id,
                    "downgrade_allowed": self._allow_pkce_downgrade,
                },
            )
            if not self._allow_pkce_downgrade:
                raise InvalidGrantError("code_verifier is required")

        self._authenticate_client(client, request.client_secret)
        return await self._redeem_bound(request, client)

    async def _redeem_bound(
        self,
        request: "TokenExchangeRequest",
        client: "ClientRecord",
    ) -> "AuthorizationCode":
        code = await self._code_issuer.redeem(request.code)
        if code is None:
            raise InvalidGrantError("Invalid, expired or already used authorization code")
        if code.client_id != client.client_id:
            logger.warning(
                "Authorization code presented by another client",
                extra={"client_id": client.client_id, "code": mask(request.code)},
            )
            raise InvalidGrantError("Authorization code was issued to another client")
        if code.redirect_uri and code.redirect_uri != request.redirect_uri:
            raise InvalidGrantError("redirect_uri does not match")
        return code

    @staticmethod
    def _authenticate_client(client: "ClientRecord", client_secret: str | None) -> None:
        if not client.client_secret:
            raise InvalidClientError("Client has no registered secret")
        if not client_secret or not hmac.compare_digest(
            client.client_secret.encode("utf-8"),
            client_secret.encode("utf-8"),
        ):
            logger.info(
                "Client authentication failed",
                extra={"client_id": client.client_id, "secret_supplied": bool(client_secret)},
            )
            raise InvalidClientError("Client authentication failed")
