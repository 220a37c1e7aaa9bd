"""Redis Adapters."""

from apps.sso.infrastructure.persistence_redis.adapters.ephemeral_store_redis import (
    RedisEphemeralStore,
)

__all__ = ["RedisEphemeralStore"]
