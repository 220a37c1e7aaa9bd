"""Third-party Token Service.

외부 계정으로 로그인한 사용자에게 호출 client 기준 토큰을 발급합니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apps.sso.application.common.exceptions import InvalidClientError, ServerError
from apps.sso.domain.enums import GrantType

if TYPE_CHECKING:
    from apps.sso.application.common.context import RequestContext
    from apps.sso.application.common.ports import ClientRegistry, TokenMinter, TokenPair

logger = logging.getLogger(__name__)


class ThirdPartyTokenService:
    """연결된 사용자용 토큰 발급 Facade."""

    def __init__(
        self,
        client_registry: "ClientRegistry",
        token_minter: "TokenMinter",
        default_client_id: str,
    ) -> None:
        self._client_registry = client_registry
        self._token_minter = token_minter
        self._default_client_id = default_client_id

    async def issue_for_user(self, ctx: "RequestContext", user_id: str) -> "TokenPair":
        """ctx.client_id (없으면 기본 client) 기준으로 토큰 발급.

        Raises:
            InvalidClientError: 알 수 없는 client
            ServerError: 토큰 발급 실패
        """
        client_id = ctx.client_id or self._default_client_id
        client = await self._client_registry.lookup_client(client_id)
        if client is None:
            raise InvalidClientError(f"Unknown client: {client_id}")

        try:
            return self._token_minter.mint(
                user_id,
                client,
                client.scopes,
                GrantType.THIRD_PARTY.value,
            )
        except Exception as e:
            logger.exception(
                "Token minting failed",
                extra={"client_id": client_id, "user_id": user_id, "request_id": ctx.request_id},
            )
            raise ServerError("Token minting failed") from e
