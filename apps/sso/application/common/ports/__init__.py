"""Common Ports."""

from apps.sso.application.common.ports.client_registry import ClientRecord, ClientRegistry
from apps.sso.application.common.ports.ephemeral_store import EphemeralStore
from apps.sso.application.common.ports.token_minter import TokenMinter, TokenPair

__all__ = [
    "ClientRecord",
    "ClientRegistry",
    "EphemeralStore",
    "TokenMinter",
    "TokenPair",
]
