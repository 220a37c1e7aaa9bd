"""WeChat OAuth Provider.

웹 QR 로그인(snsapi_login) 플로우입니다. 사용자 식별자는 openid입니다.
"""

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

WECHAT_AUTH_URL = "https://open.weixin.qq.com/connect/qrconnect"
WECHAT_TOKEN_URL = "https://api.weixin.qq.com/sns/oauth2/access_token"
WECHAT_PROFILE_URL = "https://api.weixin.qq.com/sns/userinfo"


def _raise_for_errcode(payload: dict) -> None:
    # WeChat은 오류를 200 + errcode로 응답
    if payload.get("errcode"):
        raise OAuthProviderError(f"WeChat error {payload['errcode']}: {payload.get('errmsg')}")


class WeChatOAuthProvider(OAuthProvider):
    """WeChat OAuth 프로바이더."""

    platform = Platform.WECHAT

    @property
    def default_scopes(self) -> tuple[str, ...]:
        return ("snsapi_login",)

    def build_authorization_url(self, *, state: str, redirect_uri: str) -> str:
        params = {
            "appid": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": ",".join(self.default_scopes),
            "state": state,
        }
        return f"{WECHAT_AUTH_URL}?{urlencode(params)}#wechat_redirect"

    async def exchange_code(
        self,
        *,
        client: "httpx.AsyncClient",
        code: str,
        redirect_uri: str,
    ) -> dict:
        params = {
            "appid": self.client_id,
            "secret": self.client_secret or "",
            "code": code,
            "grant_type": "authorization_code",
        }
        response = await client.get(WECHAT_TOKEN_URL, params=params)
        response.raise_for_status()
        payload = response.json()
        _raise_for_errcode(payload)
        return payload

    async def fetch_profile(
        self,
        *,
        client: "httpx.AsyncClient",
        tokens: dict,
    ) -> ExternalProfile:
        access_token = tokens.get("access_token")
        openid = tokens.get("openid")
        if not access_token or not openid:
            raise OAuthProviderError("Missing WeChat access token or openid")

        response = await client.get(
            WECHAT_PROFILE_URL,
            params={"access_token": access_token, "openid": openid},
        )
        response.raise_for_status()
        payload = response.json()
        _raise_for_errcode(payload)

        return ExternalProfile(
            platform=self.platform,
            external_id=str(openid),
            nickname=payload.get("nickname"),
            avatar_url=payload.get("headimgurl"),
        )
