"""TokenMinter Port."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from apps.sso.application.common.ports.client_registry import ClientRecord


@dataclass(frozen=True, slots=True)
class TokenPair:
    """발급된 토큰 묶음."""

    access_token: str
    expires_in: int
    scope: str = ""
    token_type: str = "Bearer"
    refresh_token: str | None = None
    id_token: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenPair:
        return cls(
            access_token=data["access_token"],
            expires_in=int(data["expires_in"]),
            scope=data.get("scope", ""),
            token_type=data.get("token_type", "Bearer"),
            refresh_token=data.get("refresh_token"),
            id_token=data.get("id_token"),
        )


class TokenMinter(Protocol):
    """토큰 발급 인터페이스.

    구현체:
        - JwtTokenMinter (infrastructure/security/)
    """

    def mint(
        self,
        principal_id: str,
        client: ClientRecord,
        scopes: frozenset[str],
        grant_type: str,
    ) -> TokenPair:
        """토큰 발급.

        Args:
            principal_id: 토큰 주체 (사용자 ID)
            client: 토큰을 요청한 client
            scopes: 부여할 scope
            grant_type: 발급 근거 grant

        Returns:
            발급된 토큰 묶음
        """
        ...
