"""Request Context.

요청 단위 메타데이터를 Use Case에 명시적으로 전달합니다.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RequestContext:
    """요청 컨텍스트.

    Attributes:
        client_id: 호출 client 식별자 (없으면 기본 client 사용)
        request_id: 로그 상관관계용 요청 ID
        timeout_seconds: Use Case 전체 처리 제한 시간
    """

    client_id: str | None = None
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timeout_seconds: float = 5.0
