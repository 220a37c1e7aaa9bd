"""ClientRegistry Port."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ClientRecord:
    """등록된 OAuth2 client."""

    client_id: str
    client_secret: str | None = None
    token_endpoint: str | None = None
    allowed_grant_types: frozenset[str] = field(default_factory=frozenset)
    scopes: frozenset[str] = field(default_factory=frozenset)
    redirect_uris: tuple[str, ...] = ()

    @property
    def is_confidential(self) -> bool:
        return bool(self.client_secret)

    def allows_grant(self, grant_type: str) -> bool:
        return grant_type in self.allowed_grant_types

    def allows_redirect(self, redirect_uri: str | None) -> bool:
        """등록된 redirect_uri 여부 (등록 목록이 비어 있으면 모두 허용)."""
        if not self.redirect_uris:
            return True
        return redirect_uri in self.redirect_uris


class ClientRegistry(Protocol):
    """Client 조회 인터페이스."""

    async def lookup_client(self, client_id: str) -> ClientRecord | None:
        """client_id로 client 조회 (없으면 None)."""
        ...
