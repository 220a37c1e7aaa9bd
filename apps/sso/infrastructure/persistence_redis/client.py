"""Redis Client Provider.

Ephemeral store(state, PKCE, code)용 비동기 Redis 클라이언트를 생성합니다.

Retry 설정:
    - ExponentialBackoff: 지수 백오프 재시도
    - MAX_RETRIES: 1회 재시도 (이후 실패는 StoreUnavailableError로 전달)
    - ConnectionError, TimeoutError에서 자동 재시도
    - health_check_interval: 30초마다 연결 상태 확인
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import ConnectionError, TimeoutError

if TYPE_CHECKING:
    import redis.asyncio as aioredis

HEALTH_CHECK_INTERVAL = 30  # seconds
MAX_CONNECTIONS = 50
SOCKET_CONNECT_TIMEOUT = 2.0  # seconds
SOCKET_TIMEOUT = 2.0  # seconds
RETRY_ON_ERROR = [ConnectionError, TimeoutError]
MAX_RETRIES = 1


def build_async_client(redis_url: str) -> "aioredis.Redis":
    """비동기 Redis 클라이언트 생성.

    Key configurations:
    - socket_keepalive: 네트워크 비활성으로 인한 연결 끊김 방지
    - retry: 일시적 장애 시 1회 재연결 (ConnectionError, TimeoutError)
    - health_check_interval: 주기적 연결 검증
    - max_connections: 연결 풀 크기 제한
    """
    import redis.asyncio as aioredis

    retry = Retry(ExponentialBackoff(), retries=MAX_RETRIES)

    return aioredis.from_url(
        redis_url,
        encoding="utf-8",
        decode_responses=True,
        # Health & Keepalive
        health_check_interval=HEALTH_CHECK_INTERVAL,
        socket_keepalive=True,
        # Timeouts
        socket_connect_timeout=SOCKET_CONNECT_TIMEOUT,
        socket_timeout=SOCKET_TIMEOUT,
        # Connection Pool
        max_connections=MAX_CONNECTIONS,
        # Retry on transient errors
        retry=retry,
        retry_on_error=RETRY_ON_ERROR,
    )
