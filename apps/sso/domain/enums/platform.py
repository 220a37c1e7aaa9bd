"""Third-party Platform."""

from enum import Enum


class Platform(str, Enum):
    """외부 identity provider 플랫폼."""

    WECHAT = "wechat"
    ALIPAY = "alipay"
    GITHUB = "github"

    @classmethod
    def parse(cls, value: str) -> "Platform | None":
        """문자열을 Platform으로 변환 (알 수 없으면 None)."""
        try:
            return cls(value.lower())
        except ValueError:
            return None
