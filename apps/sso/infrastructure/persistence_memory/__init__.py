"""In-memory Persistence Layer."""

from apps.sso.infrastructure.persistence_memory.client_registry_memory import (
    InMemoryClientRegistry,
    client_from_dict,
)
from apps.sso.infrastructure.persistence_memory.ephemeral_store_memory import (
    InMemoryEphemeralStore,
)
from apps.sso.infrastructure.persistence_memory.user_directory_memory import (
    InMemoryUserDirectory,
)

__all__ = [
    "InMemoryClientRegistry",
    "InMemoryEphemeralStore",
    "InMemoryUserDirectory",
    "client_from_dict",
]
