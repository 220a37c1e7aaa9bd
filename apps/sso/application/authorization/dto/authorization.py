"""Authorization Code DTOs."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field

from apps.sso.domain.enums import ChallengeMethod


@dataclass(frozen=True, slots=True)
class AuthorizationCode:
    """일회용 authorization code.

    상태 전이는 ISSUED → REDEEMED 또는 ISSUED → EXPIRED 뿐입니다.
    """

    value: str
    client_id: str
    principal_id: str
    scopes: frozenset[str] = field(default_factory=frozenset)
    code_challenge: str | None = None
    challenge_method: ChallengeMethod | None = None
    redirect_uri: str | None = None
    issued_at: float = field(default_factory=time.time)
    expires_at: float = 0.0

    @property
    def has_challenge(self) -> bool:
        return bool(self.code_challenge)

    def is_expired(self, now: float | None = None) -> bool:
        return (now if now is not None else time.time()) >= self.expires_at

    def to_json(self) -> str:
        return json.dumps(
            {
                "value": self.value,
                "client_id": self.client_id,
                "principal_id": self.principal_id,
                "scopes": sorted(self.scopes),
                "code_challenge": self.code_challenge,
                "challenge_method": self.challenge_method.value if self.challenge_method else None,
                "redirect_uri": self.redirect_uri,
                "issued_at": self.issued_at,
                "expires_at": self.expires_at,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> AuthorizationCode:
        data = json.loads(raw)
        method = data.get("challenge_method")
        return cls(
            value=data["value"],
            client_id=data["client_id"],
            principal_id=data["principal_id"],
            scopes=frozenset(data.get("scopes") or ()),
            code_challenge=data.get("code_challenge"),
            challenge_method=ChallengeMethod(method) if method else None,
            redirect_uri=data.get("redirect_uri"),
            issued_at=float(data["issued_at"]),
            expires_at=float(data["expires_at"]),
        )


@dataclass(frozen=True, slots=True)
class IssueAuthorizationCodeRequest:
    """Authorization code 발급 요청 (인증된 사용자 기준)."""

    client_id: str
    principal_id: str
    state: str
    redirect_uri: str | None = None
    scopes: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class AuthorizationCodeResponse:
    """Authorization code 발급 응답."""

    code: str
    state: str
    redirect_uri: str | None = None
