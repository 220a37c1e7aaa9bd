"""Third-party DTOs."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field

from apps.sso.domain.enums import Platform


@dataclass(frozen=True, slots=True)
class ExternalProfile:
    """외부 플랫폼에서 조회한 사용자 프로필."""

    platform: Platform
    external_id: str
    nickname: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class BindCode:
    """연결되지 않은 외부 계정의 bind/create 핸드오프 code.

    external_id는 암호문으로만 보관됩니다.
    """

    value: str
    encrypted_external_id: str
    platform: Platform
    issued_at: float = field(default_factory=time.time)
    ttl: int = 300
    nickname: str | None = None
    avatar_url: str | None = None

    def to_json(self) -> str:
        return json.dumps(
            {
                "value": self.value,
                "encrypted_external_id": self.encrypted_external_id,
                "platform": self.platform.value,
                "issued_at": self.issued_at,
                "ttl": self.ttl,
                "nickname": self.nickname,
                "avatar_url": self.avatar_url,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> BindCode:
        data = json.loads(raw)
        return cls(
            value=data["value"],
            encrypted_external_id=data["encrypted_external_id"],
            platform=Platform(data["platform"]),
            issued_at=float(data["issued_at"]),
            ttl=int(data["ttl"]),
            nickname=data.get("nickname"),
            avatar_url=data.get("avatar_url"),
        )


@dataclass(frozen=True, slots=True)
class LinkedUser:
    """이미 내부 사용자와 연결된 외부 계정."""

    user_id: str


@dataclass(frozen=True, slots=True)
class UnlinkedIdentity:
    """연결되지 않은 외부 계정 (bind code 발급됨)."""

    bind_code: BindCode


CallbackOutcome = LinkedUser | UnlinkedIdentity


@dataclass(frozen=True, slots=True)
class BindCredentials:
    """기존 계정 연결용 자격 증명."""

    username: str
    password: str


@dataclass(frozen=True, slots=True)
class NewAccountDetails:
    """신규 계정 생성 정보."""

    username: str
    password: str
    nickname: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class ThirdPartyAuthorizeResponse:
    """외부 플랫폼 인증 URL 응답."""

    authorization_url: str
    state: str


@dataclass(frozen=True, slots=True)
class ThirdPartyCallbackRequest:
    """외부 플랫폼 콜백 요청."""

    platform: str
    code: str | None
    state: str | None
    redirect_uri: str


@dataclass(frozen=True, slots=True)
class ThirdPartyCallbackResponse:
    """콜백 처리 결과.

    연결된 계정이면 token_code, 아니면 bind_code가 채워집니다.
    """

    platform: Platform
    token_code: str | None = None
    bind_code: str | None = None
    nickname: str | None = None
    avatar_url: str | None = None

    @property
    def is_linked(self) -> bool:
        return self.token_code is not None
