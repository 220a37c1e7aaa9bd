"""Third-party OAuth Providers.

각 외부 플랫폼 프로바이더 구현체입니다.
"""

from apps.sso.infrastructure.oauth.providers.base import (
    OAuthProvider,
    OAuthProviderError,
)
from apps.sso.infrastructure.oauth.providers.github import GitHubOAuthProvider
from apps.sso.infrastructure.oauth.providers.wechat import WeChatOAuthProvider

__all__ = [
    "OAuthProvider",
    "OAuthProviderError",
    "GitHubOAuthProvider",
    "WeChatOAuthProvider",
]
