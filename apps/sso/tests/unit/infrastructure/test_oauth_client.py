"""Third-party OAuth Client 단위 테스트.

httpx.MockTransport로 외부 플랫폼 응답을 흉내냅니다.
"""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from apps.sso.application.common.exceptions import InvalidRequestError, ServerError
from apps.sso.domain.enums import Platform
from apps.sso.infrastructure.oauth import (
    GitHubOAuthProvider,
    ProviderRegistry,
    ThirdPartyOAuthClient,
    WeChatOAuthProvider,
)

REDIRECT_URI = "http://localhost:8000/api/v1/oauth2/third/github/callback"


def _registry() -> ProviderRegistry:
    return ProviderRegistry(
        [
            GitHubOAuthProvider(client_id="gh-client", client_secret="gh-secret"),
            WeChatOAuthProvider(client_id="wx-app", client_secret="wx-secret"),
        ]
    )


def _client(handler) -> ThirdPartyOAuthClient:
    return ThirdPartyOAuthClient(
        _registry(),
        timeout_seconds=5.0,
        transport=httpx.MockTransport(handler),
    )


class TestAuthorizationUrl:
    """인증 URL 생성 테스트."""

    def test_github(self) -> None:
        client = ThirdPartyOAuthClient(_registry(), timeout_seconds=5.0)

        url = client.get_authorization_url(Platform.GITHUB, state="st-1", redirect_uri=REDIRECT_URI)

        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert parsed.netloc == "github.com"
        assert query["client_id"] == ["gh-client"]
        assert query["state"] == ["st-1"]
        assert query["redirect_uri"] == [REDIRECT_URI]
        assert query["scope"] == ["read:user"]

    def test_wechat(self) -> None:
        client = ThirdPartyOAuthClient(_registry(), timeout_seconds=5.0)

        url = client.get_authorization_url(Platform.WECHAT, state="st-2", redirect_uri=REDIRECT_URI)

        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert parsed.fragment == "wechat_redirect"
        assert query["appid"] == ["wx-app"]
        assert query["scope"] == ["snsapi_login"]

    def test_unregistered_platform(self) -> None:
        client = ThirdPartyOAuthClient(_registry(), timeout_seconds=5.0)

        assert client.supports(Platform.GITHUB)
        assert not client.supports(Platform.ALIPAY)
        with pytest.raises(InvalidRequestError):
            client.get_authorization_url(Platform.ALIPAY, state="s", redirect_uri=REDIRECT_URI)


class TestFetchProfile:
    """토큰 교환 + 프로필 조회 테스트."""

    @pytest.mark.asyncio
    async def test_github_profile(self) -> None:
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.host == "github.com":
                return httpx.Response(200, json={"access_token": "gho_abc", "token_type": "bearer"})
            return httpx.Response(
                200,
                json={"id": 583231, "login": "octocat", "name": None, "avatar_url": "https://a/u"},
            )

        # Act
        profile = await _client(handler).fetch_profile(
            Platform.GITHUB, code="gh-code", redirect_uri=REDIRECT_URI
        )

        # Assert
        assert profile.external_id == "583231"
        assert profile.nickname == "octocat"
        assert profile.avatar_url == "https://a/u"
        assert b"code=gh-code" in seen[0].content
        assert seen[1].headers["Authorization"] == "Bearer gho_abc"

    @pytest.mark.asyncio
    async def test_github_error_payload(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"error": "bad_verification_code"})

        with pytest.raises(ServerError):
            await _client(handler).fetch_profile(
                Platform.GITHUB, code="expired", redirect_uri=REDIRECT_URI
            )

    @pytest.mark.asyncio
    async def test_wechat_profile(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/access_token"):
                assert request.url.params["appid"] == "wx-app"
                return httpx.Response(200, json={"access_token": "wx-at", "openid": "o-123"})
            return httpx.Response(
                200,
                json={"openid": "o-123", "nickname": "小明", "headimgurl": "https://wx/h.png"},
            )

        profile = await _client(handler).fetch_profile(
            Platform.WECHAT, code="wx-code", redirect_uri=REDIRECT_URI
        )

        assert profile.platform is Platform.WECHAT
        assert profile.external_id == "o-123"
        assert profile.nickname == "小明"

    @pytest.mark.asyncio
    async def test_wechat_errcode(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"errcode": 40029, "errmsg": "invalid code"})

        with pytest.raises(ServerError):
            await _client(handler).fetch_profile(
                Platform.WECHAT, code="bad", redirect_uri=REDIRECT_URI
            )

    @pytest.mark.asyncio
    async def test_http_status_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502)

        with pytest.raises(ServerError) as exc_info:
            await _client(handler).fetch_profile(
                Platform.GITHUB, code="c", redirect_uri=REDIRECT_URI
            )
        assert "502" in exc_info.value.description

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ServerError):
            await _client(handler).fetch_profile(
                Platform.GITHUB, code="c", redirect_uri=REDIRECT_URI
            )
