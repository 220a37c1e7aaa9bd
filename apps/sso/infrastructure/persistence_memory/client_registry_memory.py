"""In-memory Client Registry.

설정(SSO_CLIENTS_JSON)으로 주입된 client 목록을 보관합니다.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from apps.sso.application.common.ports import ClientRecord
from apps.sso.domain.enums import GrantType

logger = logging.getLogger(__name__)

DEFAULT_GRANT_TYPES = (GrantType.AUTHORIZATION_CODE.value, GrantType.REFRESH_TOKEN.value)


def client_from_dict(data: dict[str, Any]) -> ClientRecord:
    """JSON 객체 → ClientRecord."""
    return ClientRecord(
        client_id=data["client_id"],
        client_secret=data.get("client_secret"),
        token_endpoint=data.get("token_endpoint"),
        allowed_grant_types=frozenset(data.get("allowed_grant_types") or DEFAULT_GRANT_TYPES),
        scopes=frozenset(data.get("scopes") or ()),
        redirect_uris=tuple(data.get("redirect_uris") or ()),
    )


class InMemoryClientRegistry:
    """ClientRegistry 구현체."""

    def __init__(self, clients: Iterable[ClientRecord] = ()) -> None:
        self._clients = {client.client_id: client for client in clients}

    @classmethod
    def from_json(cls, raw: str) -> InMemoryClientRegistry:
        """JSON 배열 문자열로부터 생성."""
        items = json.loads(raw) if raw else []
        registry = cls(client_from_dict(item) for item in items)
        logger.info("Client registry loaded", extra={"clients": len(registry._clients)})
        return registry

    def register(self, client: ClientRecord) -> None:
        self._clients[client.client_id] = client

    async def lookup_client(self, client_id: str) -> ClientRecord | None:
        return self._clients.get(client_id)
