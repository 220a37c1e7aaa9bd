"""HTTP 엔드투엔드 테스트.

실제 Container(in-memory store)로 앱을 띄우고 외부 플랫폼 Gateway만 Mock합니다.
"""

import json
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from apps.sso.application.common.exceptions import StoreUnavailableError
from apps.sso.application.third_party.dto import ExternalProfile
from apps.sso.domain.enums import Platform
from apps.sso.infrastructure.persistence_memory import InMemoryEphemeralStore
from apps.sso.main import create_app
from apps.sso.setup.config import Settings
from apps.sso.setup.dependencies import build_container

REDIRECT_URI = "http://localhost:3000/callback"
FRONTEND_CALLBACK = "http://localhost:3000/oauth2/third/callback"
CLIENTS = [
    {
        "client_id": "spa-client",
        "scopes": ["openid", "profile"],
        "redirect_uris": [REDIRECT_URI],
    },
    {
        "client_id": "backend-client",
        "client_secret": "backend-secret",
        "scopes": ["openid"],
        "allowed_grant_types": ["authorization_code"],
    },
]


class BrokenStore(InMemoryEphemeralStore):
    """쓰기가 항상 실패하는 저장소."""

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        raise StoreUnavailableError("Ephemeral store unavailable")


def _authorization_url(platform: Platform, *, state: str, redirect_uri: str) -> str:
    return f"https://github.com/login/oauth/authorize?state={state}"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        redis_url=None,
        clients_json=json.dumps(CLIENTS),
        default_client_id="spa-client",
        jwt_secret_key="test-secret-key-for-testing-only",
        jwt_issuer="sso-test",
        frontend_callback_url=FRONTEND_CALLBACK,
    )


@pytest.fixture
def gateway() -> MagicMock:
    """GitHub만 지원하는 Mock Gateway."""
    gateway = MagicMock()
    gateway.supports.side_effect = lambda platform: platform is Platform.GITHUB
    gateway.get_authorization_url.side_effect = _authorization_url
    gateway.fetch_profile = AsyncMock(
        return_value=ExternalProfile(
            platform=Platform.GITHUB,
            external_id="583231",
            nickname="octocat",
            avatar_url="https://avatars.example.com/octocat.png",
        )
    )
    return gateway


@pytest.fixture
def client(settings: Settings, gateway: MagicMock):
    app = create_app(settings, container=build_container(settings, provider_gateway=gateway))
    with TestClient(app) as test_client:
        yield test_client


def _authorize(client: TestClient, user_id: str = "user-1") -> tuple[str, str]:
    """PKCE 발급 → code 발급, (code, code_verifier) 반환."""
    params = client.post("/api/v1/oauth2/pkce").json()
    response = client.post(
        "/api/v1/oauth2/authorize",
        json={
            "client_id": "spa-client",
            "state": params["state"],
            "redirect_uri": REDIRECT_URI,
        },
        headers={"X-User-Id": user_id},
    )
    assert response.status_code == 200
    return response.json()["code"], params["code_verifier"]


class TestHealthController:
    """HealthController 테스트."""

    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "sso-api"}

    def test_ping(self, client: TestClient) -> None:
        assert client.get("/ping").json() == "pong"

    def test_all_routes_registered(self, settings: Settings, gateway: MagicMock) -> None:
        """Response union을 반환하는 라우트까지 앱 생성 시 모두 등록."""
        app = create_app(settings, container=build_container(settings, provider_gateway=gateway))

        paths = {route.path for route in app.routes}

        assert {
            "/api/v1/oauth2/pkce",
            "/api/v1/oauth2/authorize",
            "/api/v1/oauth2/token",
            "/api/v1/oauth2/token/pickup",
            "/api/v1/oauth2/third/{platform}/authorize",
            "/api/v1/oauth2/third/{platform}/callback",
            "/api/v1/oauth2/third/{platform}/bind",
            "/api/v1/oauth2/third/{platform}/create",
        } <= paths


class TestAuthorizationCodeFlow:
    """PKCE → authorize → token 플로우 테스트."""

    def test_pkce_params(self, client: TestClient) -> None:
        response = client.post("/api/v1/oauth2/pkce")

        assert response.status_code == 200
        data = response.json()
        assert data["code_challenge_method"] == "S256"
        assert len(data["code_verifier"]) == 43
        assert data["state"]

    def test_full_flow_and_replay(self, client: TestClient) -> None:
        # Arrange
        code, verifier = _authorize(client)
        form = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": "spa-client",
            "redirect_uri": REDIRECT_URI,
            "code_verifier": verifier,
        }

        # Act
        first = client.post("/api/v1/oauth2/token", data=form)
        replay = client.post("/api/v1/oauth2/token", data=form)

        # Assert
        assert first.status_code == 200
        assert first.headers["Cache-Control"] == "no-store"
        body = first.json()
        assert body["token_type"] == "Bearer"
        assert body["scope"] == "openid profile"
        assert "id_token" not in body
        claims = jwt.get_unverified_claims(body["access_token"])
        assert claims["sub"] == "user-1"
        assert claims["client_id"] == "spa-client"

        assert replay.status_code == 400
        assert replay.json()["error"] == "invalid_grant"

    def test_state_cannot_be_reused(self, client: TestClient) -> None:
        params = client.post("/api/v1/oauth2/pkce").json()
        request = {"client_id": "spa-client", "state": params["state"], "redirect_uri": REDIRECT_URI}

        first = client.post("/api/v1/oauth2/authorize", json=request, headers={"X-User-Id": "u"})
        second = client.post("/api/v1/oauth2/authorize", json=request, headers={"X-User-Id": "u"})

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()["error"] == "invalid_grant"

    def test_authorize_requires_user(self, client: TestClient) -> None:
        params = client.post("/api/v1/oauth2/pkce").json()

        response = client.post(
            "/api/v1/oauth2/authorize",
            json={"client_id": "spa-client", "state": params["state"]},
        )

        assert response.status_code == 401

    def test_wrong_verifier(self, client: TestClient) -> None:
        code, _ = _authorize(client)

        response = client.post(
            "/api/v1/oauth2/token",
            data={
                "grant_type": "authorization_code",
                "code": code,
                "client_id": "spa-client",
                "redirect_uri": REDIRECT_URI,
                "code_verifier": "x" * 43,
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_grant"

    def test_unsupported_grant_type(self, client: TestClient) -> None:
        response = client.post("/api/v1/oauth2/token", data={"grant_type": "password"})

        assert response.status_code == 400
        assert response.json()["error"] == "unsupported_grant_type"

    def test_unknown_client_basic_auth(self, client: TestClient) -> None:
        code, verifier = _authorize(client)

        response = client.post(
            "/api/v1/oauth2/token",
            data={"grant_type": "authorization_code", "code": code, "code_verifier": verifier},
            auth=("ghost-client", "whatever"),
        )

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_client"
        assert response.headers["WWW-Authenticate"].startswith("Basic")

    def test_basic_auth_client_id_mismatch(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/oauth2/token",
            data={"grant_type": "authorization_code", "code": "c", "client_id": "spa-client"},
            auth=("backend-client", "backend-secret"),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"

    def test_missing_grant_type(self, client: TestClient) -> None:
        response = client.post("/api/v1/oauth2/token", data={"code": "c", "client_id": "spa-client"})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"
        assert response.headers["Cache-Control"] == "no-store"

    def test_malformed_pickup_body(self, client: TestClient) -> None:
        response = client.post("/api/v1/oauth2/token/pickup", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"


class TestConfidentialClient:
    """verifier 없이 client_secret으로 교환하는 confidential client 테스트."""

    @staticmethod
    def _authorize_backend(client: TestClient) -> str:
        params = client.post("/api/v1/oauth2/pkce").json()
        response = client.post(
            "/api/v1/oauth2/authorize",
            json={"client_id": "backend-client", "state": params["state"]},
            headers={"X-User-Id": "service-user"},
        )
        assert response.status_code == 200
        return response.json()["code"]

    def test_rejected_under_default_policy(self, client: TestClient) -> None:
        """기본 설정(pkce_required=True)에서는 secret이 맞아도 invalid_grant."""
        code = self._authorize_backend(client)

        response = client.post(
            "/api/v1/oauth2/token",
            data={"grant_type": "authorization_code", "code": code},
            auth=("backend-client", "backend-secret"),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_grant"

    def test_accepted_when_pkce_optional(self, settings: Settings, gateway: MagicMock) -> None:
        """SSO_PKCE_REQUIRED=false면 Basic 인증만으로 교환."""
        relaxed = settings.model_copy(update={"pkce_required": False})
        app = create_app(relaxed, container=build_container(relaxed, provider_gateway=gateway))

        with TestClient(app) as client:
            code = self._authorize_backend(client)
            response = client.post(
                "/api/v1/oauth2/token",
                data={"grant_type": "authorization_code", "code": code},
                auth=("backend-client", "backend-secret"),
            )

        assert response.status_code == 200
        body = response.json()
        assert body["scope"] == "openid"
        assert jwt.get_unverified_claims(body["access_token"])["client_id"] == "backend-client"


class TestStoreFailure:
    """저장소 장애 응답 테스트."""

    def test_retry_after(self, settings: Settings, gateway: MagicMock) -> None:
        container = build_container(settings, store=BrokenStore(), provider_gateway=gateway)

        with TestClient(create_app(settings, container=container)) as client:
            response = client.post("/api/v1/oauth2/pkce")

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert response.headers["Retry-After"] == "1"


class TestThirdPartyFlow:
    """외부 플랫폼 로그인 플로우 테스트."""

    def test_authorize_redirects_to_platform(self, client: TestClient, gateway: MagicMock) -> None:
        response = client.get("/api/v1/oauth2/third/github/authorize", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"].startswith("https://github.com/")
        _, kwargs = gateway.get_authorization_url.call_args
        assert kwargs["redirect_uri"].endswith("/api/v1/oauth2/third/github/callback")

    def test_unsupported_platform(self, client: TestClient) -> None:
        response = client.get("/api/v1/oauth2/third/alipay/authorize", follow_redirects=False)

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"

    def _callback(self, client: TestClient) -> dict[str, list[str]]:
        start = client.get("/api/v1/oauth2/third/github/authorize", follow_redirects=False)
        state = parse_qs(urlparse(start.headers["location"]).query)["state"][0]
        response = client.get(
            "/api/v1/oauth2/third/github/callback",
            params={"code": "gh-code", "state": state},
            follow_redirects=False,
        )
        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert f"{location.scheme}://{location.netloc}{location.path}" == FRONTEND_CALLBACK
        return parse_qs(location.query)

    def test_create_then_login(self, client: TestClient) -> None:
        """미연결 → 계정 생성 → 재로그인 시 token_code → pickup."""
        # 1. 미연결 계정: bind code 전달
        query = self._callback(client)
        assert query["platform"] == ["github"]
        assert query["nickname"] == ["octocat"]
        bind_code = query["code"][0]

        # 2. 신규 계정 생성
        created = client.post(
            "/api/v1/oauth2/third/github/create",
            json={"code": bind_code, "username": "octocat", "password": "password-123"},
        )
        assert created.status_code == 200
        assert created.json()["access_token"]

        # 3. bind code 재사용 불가
        replay = client.post(
            "/api/v1/oauth2/third/github/create",
            json={"code": bind_code, "username": "octocat2", "password": "password-123"},
        )
        assert replay.json()["error"] == "invalid_grant"

        # 4. 재로그인: 연결된 계정 → token_code
        query = self._callback(client)
        token_code = query["token_code"][0]
        assert "code" not in query

        pickup = client.post("/api/v1/oauth2/token/pickup", json={"code": token_code})
        assert pickup.status_code == 200
        claims = jwt.get_unverified_claims(pickup.json()["access_token"])
        assert claims["grant_type"] == "third_party"

        again = client.post("/api/v1/oauth2/token/pickup", json={"code": token_code})
        assert again.status_code == 400

    def test_bind_existing_account(self, client: TestClient, gateway: MagicMock) -> None:
        """두 번째 외부 계정을 기존 사용자에 연결."""
        # Arrange: 첫 외부 계정으로 alice 생성
        first = self._callback(client)
        client.post(
            "/api/v1/oauth2/third/github/create",
            json={"code": first["code"][0], "username": "alice", "password": "password-123"},
        )
        gateway.fetch_profile.return_value = ExternalProfile(
            platform=Platform.GITHUB, external_id="777", nickname="alice-alt"
        )
        second = self._callback(client)

        # Act
        wrong = client.post(
            "/api/v1/oauth2/third/github/bind",
            json={"code": second["code"][0], "username": "alice", "password": "wrong-password"},
        )
        forged = client.post(
            "/api/v1/oauth2/third/github/bind",
            json={"code": "not-a-real-code", "username": "alice", "password": "password-123"},
        )

        # Assert: 잘못된 비밀번호는 bind code도 소모
        assert wrong.status_code == 401
        assert wrong.json()["error"] == "invalid_client"
        assert forged.json()["error"] == "invalid_grant"

    def test_bind_then_login(self, client: TestClient, gateway: MagicMock) -> None:
        first = self._callback(client)
        client.post(
            "/api/v1/oauth2/third/github/create",
            json={"code": first["code"][0], "username": "bob", "password": "password-123"},
        )
        gateway.fetch_profile.return_value = ExternalProfile(
            platform=Platform.GITHUB, external_id="888"
        )
        second = self._callback(client)

        bound = client.post(
            "/api/v1/oauth2/third/github/bind",
            json={"code": second["code"][0], "username": "bob", "password": "password-123"},
        )

        assert bound.status_code == 200
        assert "token_code" in self._callback(client)

    def test_callback_invalid_state_redirects_with_error(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/oauth2/third/github/callback",
            params={"code": "gh-code", "state": "forged"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        query = parse_qs(urlparse(response.headers["location"]).query)
        assert query["error"] == ["invalid_grant"]
        assert query["platform"] == ["github"]
