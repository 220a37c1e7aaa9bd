"""Provider Registry."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from apps.sso.application.common.exceptions import InvalidRequestError

if TYPE_CHECKING:
    from apps.sso.domain.enums import Platform
    from apps.sso.infrastructure.oauth.providers import OAuthProvider


class ProviderRegistry:
    """플랫폼 → 프로바이더 매핑."""

    def __init__(self, providers: Iterable["OAuthProvider"] = ()) -> None:
        self._providers: dict[Platform, OAuthProvider] = {p.platform: p for p in providers}

    def register(self, provider: "OAuthProvider") -> None:
        self._providers[provider.platform] = provider

    def has(self, platform: "Platform") -> bool:
        return platform in self._providers

    def get(self, platform: "Platform") -> "OAuthProvider":
        try:
            return self._providers[platform]
        except KeyError as e:
            raise InvalidRequestError(f"Unsupported platform: {platform.value}") from e
