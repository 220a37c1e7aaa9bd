"""Third-party OAuth Implementations."""

from apps.sso.infrastructure.oauth.client import ThirdPartyOAuthClient
from apps.sso.infrastructure.oauth.providers import (
    GitHubOAuthProvider,
    OAuthProvider,
    OAuthProviderError,
    WeChatOAuthProvider,
)
from apps.sso.infrastructure.oauth.registry import ProviderRegistry

__all__ = [
    "OAuthProvider",
    "OAuthProviderError",
    "GitHubOAuthProvider",
    "WeChatOAuthProvider",
    "ProviderRegistry",
    "ThirdPartyOAuthClient",
]
