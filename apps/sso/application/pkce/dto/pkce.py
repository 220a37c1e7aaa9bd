"""PKCE DTOs."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field

from apps.sso.domain.enums import ChallengeMethod


@dataclass(frozen=True, slots=True)
class StateEntry:
    """state에 묶여 저장되는 PKCE verifier/challenge."""

    state: str
    code_verifier: str
    code_challenge: str
    challenge_method: ChallengeMethod = ChallengeMethod.S256
    created_at: float = field(default_factory=time.time)
    ttl: int = 600

    def to_json(self) -> str:
        return json.dumps(
            {
                "state": self.state,
                "code_verifier": self.code_verifier,
                "code_challenge": self.code_challenge,
                "challenge_method": self.challenge_method.value,
                "created_at": self.created_at,
                "ttl": self.ttl,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> StateEntry:
        data = json.loads(raw)
        return cls(
            state=data["state"],
            code_verifier=data["code_verifier"],
            code_challenge=data["code_challenge"],
            challenge_method=ChallengeMethod(data["challenge_method"]),
            created_at=float(data["created_at"]),
            ttl=int(data["ttl"]),
        )


@dataclass(frozen=True, slots=True)
class PkceParams:
    """클라이언트에 전달되는 PKCE 파라미터."""

    state: str
    code_verifier: str
    code_challenge: str
    code_challenge_method: str = ChallengeMethod.S256.value
