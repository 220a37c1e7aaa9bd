"""Grant Type."""

from enum import Enum


class GrantType(str, Enum):
    """토큰 발급 grant 유형."""

    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"
    THIRD_PARTY = "third_party"
