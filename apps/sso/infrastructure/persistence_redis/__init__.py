"""Redis Persistence Layer."""

from apps.sso.infrastructure.persistence_redis.adapters import RedisEphemeralStore
from apps.sso.infrastructure.persistence_redis.client import build_async_client

__all__ = ["RedisEphemeralStore", "build_async_client"]
