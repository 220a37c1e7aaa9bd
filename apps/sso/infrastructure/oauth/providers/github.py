"""GitHub OAuth Provider."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlencode

from apps.sso.application.third_party.dto import ExternalProfile
from apps.sso.domain.enums import Platform
from apps.sso.infrastructure.oauth.providers.base import (
    OAuthProvider,
    OAuthProviderError,
)

if TYPE_CHECKING:
    import httpx

GITHUB_AUTH_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_PROFILE_URL = "https://api.github.com/user"


class GitHubOAuthProvider(OAuthProvider):
    """GitHub OAuth 프로바이더."""

    platform = Platform.GITHUB

    @property
    def default_scopes(self) -> tuple[str, ...]:
        return ("read:user",)

    def build_authorization_url(self, *, state: str, redirect_uri: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "scope": " ".join(self.default_scopes),
            "state": state,
        }
        return f"{GITHUB_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(
        self,
        *,
        client: "httpx.AsyncClient",
        code: str,
        redirect_uri: str,
    ) -> dict:
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret or "",
            "code": code,
            "redirect_uri": redirect_uri,
        }
        response = await client.post(
            GITHUB_TOKEN_URL,
            data=data,
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        payload = response.json()
        # GitHub은 오류도 200으로 응답
        if "error" in payload:
            raise OAuthProviderError(payload.get("error_description") or payload["error"])
        return payload

    async def fetch_profile(
        self,
        *,
        client: "httpx.AsyncClient",
        tokens: dict,
    ) -> ExternalProfile:
        access_token = tokens.get("access_token")
        if not access_token:
            raise OAuthProviderError("Missing GitHub access token")
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/vnd.github+json",
        }
        response = await client.get(GITHUB_PROFILE_URL, headers=headers)
        response.raise_for_status()
        payload = response.json()

        return ExternalProfile(
            platform=self.platform,
            external_id=str(payload.get("id")),
            nickname=payload.get("name") or payload.get("login"),
            avatar_url=payload.get("avatar_url"),
        )
