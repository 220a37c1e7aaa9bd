"""Interactor Result.

Use Case 경계에서 예외 대신 반환되는 결과 타입입니다.

- Ok: 성공 → value 보유
- Failure: 실패 → OAuthError 보유 (retryable 여부는 오류가 판단)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, TypeVar

from apps.sso.application.common.exceptions import OAuthError

T = TypeVar("T")


class ResultStatus(Enum):
    """Interactor 실행 결과 상태.

    - OK: 성공
    - RETRYABLE: 일시적 실패 (store 장애, timeout) → 백오프 후 재시도
    - FAILED: 영구적 실패 → 그대로 클라이언트에 전달
    """

    OK = auto()
    RETRYABLE = auto()
    FAILED = auto()


@dataclass(frozen=True)
class Result(Generic[T]):
    """Interactor 실행 결과."""

    status: ResultStatus
    value: T | None = None
    error: OAuthError | None = None

    @property
    def is_ok(self) -> bool:
        """성공 여부."""
        return self.status == ResultStatus.OK

    @property
    def is_retryable(self) -> bool:
        """재시도 가능 여부."""
        return self.status == ResultStatus.RETRYABLE

    def unwrap(self) -> T:
        """성공 값 반환 (실패면 보유한 오류를 raise)."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def ok(cls, value: T) -> Result[T]:
        """성공 결과 생성."""
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def failure(cls, error: OAuthError) -> Result[T]:
        """실패 결과 생성 (오류의 retryable 속성으로 상태 결정)."""
        status = ResultStatus.RETRYABLE if error.retryable else ResultStatus.FAILED
        return cls(status=status, error=error)
