"""PKCE Challenge Method."""

from enum import Enum


class ChallengeMethod(str, Enum):
    """PKCE code_challenge_method.

    plain은 값으로만 인식하며 발급/검증에는 사용하지 않습니다.
    """

    S256 = "S256"
    PLAIN = "plain"

    @classmethod
    def parse(cls, value: "ChallengeMethod | str | None") -> "ChallengeMethod | None":
        """문자열을 ChallengeMethod로 변환 (대소문자 구분, 알 수 없으면 None)."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None
