"""Test Configuration and Fixtures.

pytest 설정 및 공통 픽스처.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from apps.sso.application.authorization.services import AuthorizationCodeIssuer
from apps.sso.application.common.context import RequestContext
from apps.sso.application.common.ports import ClientRecord, TokenPair
from apps.sso.application.pkce.services import PkceChallengeManager
from apps.sso.application.state.services import StateManager
from apps.sso.application.third_party.services import (
    ThirdPartyBindingBridge,
    ThirdPartyTokenService,
)
from apps.sso.application.token.services import TokenExchangeEngine, TokenHandoffService
from apps.sso.infrastructure.persistence_memory import (
    InMemoryClientRegistry,
    InMemoryEphemeralStore,
    InMemoryUserDirectory,
)
from apps.sso.infrastructure.security import FernetExternalIdCipher, JwtTokenMinter

# RFC 7636 Appendix B
RFC_VERIFIER = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
RFC_CHALLENGE = "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

PUBLIC_CLIENT_ID = "spa-client"
CONFIDENTIAL_CLIENT_ID = "backend-client"
CONFIDENTIAL_CLIENT_SECRET = "s3cr3t-value-for-tests"
REDIRECT_URI = "http://localhost:3000/callback"


# ============================================================
# Clients
# ============================================================


@pytest.fixture
def public_client() -> ClientRecord:
    """secret 없는 PKCE client."""
    return ClientRecord(
        client_id=PUBLIC_CLIENT_ID,
        allowed_grant_types=frozenset({"authorization_code", "refresh_token"}),
        scopes=frozenset({"openid", "profile"}),
        redirect_uris=(REDIRECT_URI,),
    )


@pytest.fixture
def confidential_client() -> ClientRecord:
    """secret 등록된 client."""
    return ClientRecord(
        client_id=CONFIDENTIAL_CLIENT_ID,
        client_secret=CONFIDENTIAL_CLIENT_SECRET,
        token_endpoint="http://localhost:8000/api/v1/oauth2/token",
        allowed_grant_types=frozenset({"authorization_code"}),
        scopes=frozenset({"openid", "profile", "admin"}),
        redirect_uris=(REDIRECT_URI,),
    )


@pytest.fixture
def client_registry(
    public_client: ClientRecord,
    confidential_client: ClientRecord,
) -> InMemoryClientRegistry:
    return InMemoryClientRegistry([public_client, confidential_client])


# ============================================================
# Services
# ============================================================


@pytest.fixture
def store() -> InMemoryEphemeralStore:
    return InMemoryEphemeralStore()


@pytest.fixture
def state_manager(store: InMemoryEphemeralStore) -> StateManager:
    return StateManager(store)


@pytest.fixture
def pkce_manager(store: InMemoryEphemeralStore, state_manager: StateManager) -> PkceChallengeManager:
    return PkceChallengeManager(store, state_manager)


@pytest.fixture
def code_issuer(store: InMemoryEphemeralStore) -> AuthorizationCodeIssuer:
    return AuthorizationCodeIssuer(store)


@pytest.fixture
def token_minter() -> JwtTokenMinter:
    return JwtTokenMinter(secret_key="test-secret-key-for-testing-only", issuer="sso-test")


@pytest.fixture
def engine(
    client_registry: InMemoryClientRegistry,
    code_issuer: AuthorizationCodeIssuer,
    pkce_manager: PkceChallengeManager,
    token_minter: JwtTokenMinter,
) -> TokenExchangeEngine:
    """PKCE 필수, downgrade 불허 (기본 정책)."""
    return TokenExchangeEngine(client_registry, code_issuer, pkce_manager, token_minter)


@pytest.fixture
def cipher() -> FernetExternalIdCipher:
    return FernetExternalIdCipher([FernetExternalIdCipher.generate_key()])


@pytest.fixture
def user_directory() -> InMemoryUserDirectory:
    return InMemoryUserDirectory()


@pytest.fixture
def bridge(
    store: InMemoryEphemeralStore,
    cipher: FernetExternalIdCipher,
    user_directory: InMemoryUserDirectory,
) -> ThirdPartyBindingBridge:
    return ThirdPartyBindingBridge(store, cipher, user_directory, user_directory)


@pytest.fixture
def handoff_service(store: InMemoryEphemeralStore) -> TokenHandoffService:
    return TokenHandoffService(store)


@pytest.fixture
def third_party_tokens(
    client_registry: InMemoryClientRegistry,
    token_minter: JwtTokenMinter,
) -> ThirdPartyTokenService:
    return ThirdPartyTokenService(client_registry, token_minter, default_client_id=PUBLIC_CLIENT_ID)


# ============================================================
# Misc
# ============================================================


@pytest.fixture
def ctx() -> RequestContext:
    return RequestContext(client_id=PUBLIC_CLIENT_ID, request_id="req-test", timeout_seconds=2.0)


@pytest.fixture
def token_pair() -> TokenPair:
    return TokenPair(
        access_token="access-token-value",
        refresh_token="refresh-token-value",
        expires_in=3600,
        scope="openid profile",
    )


@pytest.fixture
def failing_minter() -> MagicMock:
    minter = MagicMock()
    minter.mint.side_effect = RuntimeError("signing key unavailable")
    return minter
