"""Interactor execution helper.

Use Case 본문을 요청 제한 시간 안에서 실행하고 모든 실패를 Result로 변환합니다.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, TypeVar

from apps.sso.application.common.exceptions import (
    OAuthError,
    ServerError,
    StoreUnavailableError,
)
from apps.sso.application.common.result import Result

if TYPE_CHECKING:
    from apps.sso.application.common.context import RequestContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_bounded(ctx: "RequestContext", operation: Awaitable[T], *, use_case: str) -> Result[T]:
    """operation을 ctx.timeout_seconds 안에서 실행.

    Returns:
        성공 시 Result.ok, OAuthError 발생 시 Result.failure.
        timeout은 재시도 가능한 StoreUnavailableError로,
        그 밖의 예외는 stack trace를 남기고 ServerError로 변환됩니다.
    """
    try:
        value = await asyncio.wait_for(operation, timeout=ctx.timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning(
            "Use case timed out",
            extra={
                "use_case": use_case,
                "request_id": ctx.request_id,
                "timeout_seconds": ctx.timeout_seconds,
            },
        )
        return Result.failure(StoreUnavailableError("Request timed out"))
    except OAuthError as e:
        log = logger.warning if e.retryable else logger.info
        log(
            "Use case failed",
            extra={
                "use_case": use_case,
                "request_id": ctx.request_id,
                "error": e.error_code,
                "error_description": e.description,
            },
        )
        return Result.failure(e)
    except Exception:
        logger.exception(
            "Use case crashed",
            extra={"use_case": use_case, "request_id": ctx.request_id},
        )
        return Result.failure(ServerError("Internal server error"))
    return Result.ok(value)
