"""Logging Configuration.

ECS 호환 JSON 로깅 설정입니다.
서비스 메타데이터를 모든 레코드에 붙이고, extra로 전달된 민감 필드는 마스킹해서 출력합니다.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Callable

import ecs_logging

from apps.sso.application.common.masking import MASK_PLACEHOLDER, mask

if TYPE_CHECKING:
    from apps.sso.setup.config import Settings

# 요청 단위 로그가 많은 외부 라이브러리
QUIET_LOGGERS = ("httpx", "httpcore", "redis", "uvicorn.access")

# 값이 그대로 남으면 재사용 가능한 필드
SENSITIVE_FIELDS = frozenset(
    {
        "code",
        "state",
        "bind_code",
        "code_verifier",
        "client_secret",
        "access_token",
        "refresh_token",
    }
)


class RedactingEcsFormatter(ecs_logging.StdlibFormatter):
    """민감 필드를 mask()로 가린 뒤 ECS JSON으로 직렬화하는 포맷터."""

    def format_to_ecs(self, record: logging.LogRecord) -> dict[str, Any]:
        result = super().format_to_ecs(record)
        for field in SENSITIVE_FIELDS.intersection(result):
            value = result[field]
            if isinstance(value, str) and not _is_masked(value):
                result[field] = mask(value)
        return result


def _is_masked(value: str) -> bool:
    return value.endswith("...") or value in (MASK_PLACEHOLDER, "<empty>")


def _service_record_factory(settings: "Settings") -> Callable[..., logging.LogRecord]:
    current = logging.getLogRecordFactory()
    # 재설정 시 이전에 설치한 factory 위에 다시 감싸지 않음
    base = getattr(current, "base_factory", current)
    service = {
        "name": settings.service_name,
        "version": settings.service_version,
        "environment": settings.environment,
    }

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = base(*args, **kwargs)
        record.service = dict(service)
        return record

    record_factory.base_factory = base  # type: ignore[attr-defined]
    return record_factory


def setup_logging(settings: "Settings") -> None:
    """루트 로거를 stdout ECS JSON 핸들러 하나로 구성합니다. 여러 번 호출해도 안전합니다."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(RedactingEcsFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level.upper())
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.setLogRecordFactory(_service_record_factory(settings))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
