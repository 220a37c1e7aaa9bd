"""Dependency Injection Setup.

앱 시작 시 Container를 한 번 조립하고, FastAPI Depends는 Container에서 꺼내기만 합니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fastapi import Header, Request

from apps.sso.application.authorization.commands import IssueAuthorizationCodeInteractor
from apps.sso.application.authorization.services import AuthorizationCodeIssuer
from apps.sso.application.common.context import RequestContext
from apps.sso.application.pkce.commands import GeneratePkceParamsInteractor
from apps.sso.application.pkce.services import PkceChallengeManager
from apps.sso.application.state.services import StateManager
from apps.sso.application.third_party.commands import (
    BindAccountInteractor,
    CreateAccountInteractor,
    ThirdPartyAuthorizeInteractor,
    ThirdPartyCallbackInteractor,
)
from apps.sso.application.third_party.services import (
    ThirdPartyBindingBridge,
    ThirdPartyTokenService,
)
from apps.sso.application.token.commands import TokenExchangeInteractor, TokenPickupInteractor
from apps.sso.application.token.services import TokenExchangeEngine, TokenHandoffService
from apps.sso.infrastructure.oauth import (
    GitHubOAuthProvider,
    ProviderRegistry,
    ThirdPartyOAuthClient,
    WeChatOAuthProvider,
)
from apps.sso.infrastructure.persistence_memory import (
    InMemoryClientRegistry,
    InMemoryEphemeralStore,
    InMemoryUserDirectory,
)
from apps.sso.infrastructure.security import FernetExternalIdCipher, JwtTokenMinter

if TYPE_CHECKING:
    from apps.sso.application.common.ports import ClientRegistry, EphemeralStore, TokenMinter
    from apps.sso.application.third_party.ports import (
        PasswordVerifier,
        ThirdPartyProviderGateway,
        UserRepository,
    )
    from apps.sso.setup.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """조립된 Use Case 묶음 (요청 간 상태 없음)."""

    settings: "Settings"
    store: "EphemeralStore"
    client_registry: "ClientRegistry"
    generate_pkce_params: GeneratePkceParamsInteractor
    issue_authorization_code: IssueAuthorizationCodeInteractor
    token_exchange: TokenExchangeInteractor
    token_pickup: TokenPickupInteractor
    third_party_authorize: ThirdPartyAuthorizeInteractor
    third_party_callback: ThirdPartyCallbackInteractor
    bind_account: BindAccountInteractor
    create_account: CreateAccountInteractor
    redis: Any = None

    async def aclose(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()


# ============================================================
# Infrastructure Builders
# ============================================================


def build_store(settings: "Settings") -> tuple["EphemeralStore", Any]:
    """redis_url이 있으면 Redis, 없으면 in-memory 저장소."""
    if not settings.redis_url:
        logger.warning("SSO_REDIS_URL not set, using in-memory ephemeral store")
        return InMemoryEphemeralStore(), None

    from apps.sso.infrastructure.persistence_redis import RedisEphemeralStore, build_async_client

    redis = build_async_client(settings.redis_url)
    return RedisEphemeralStore(redis), redis


def build_cipher(settings: "Settings") -> FernetExternalIdCipher:
    if settings.external_id_keys.strip():
        return FernetExternalIdCipher.from_csv(settings.external_id_keys)
    # 재시작 시 발급된 bind code는 복호화 불가
    logger.warning("SSO_EXTERNAL_ID_KEYS not set, generated an ephemeral key")
    return FernetExternalIdCipher([FernetExternalIdCipher.generate_key()])


def build_provider_gateway(settings: "Settings") -> ThirdPartyOAuthClient:
    registry = ProviderRegistry()
    if settings.github_client_id:
        registry.register(
            GitHubOAuthProvider(
                client_id=settings.github_client_id,
                client_secret=settings.github_client_secret,
            )
        )
    if settings.wechat_app_id:
        registry.register(
            WeChatOAuthProvider(
                client_id=settings.wechat_app_id,
                client_secret=settings.wechat_app_secret,
            )
        )
    return ThirdPartyOAuthClient(registry, timeout_seconds=settings.oauth_http_timeout_seconds)


def build_token_minter(settings: "Settings") -> JwtTokenMinter:
    return JwtTokenMinter(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        access_token_expire_minutes=settings.access_token_exp_minutes,
        refresh_token_expire_minutes=settings.refresh_token_exp_minutes,
    )


def build_container(
    settings: "Settings",
    *,
    store: "EphemeralStore | None" = None,
    client_registry: "ClientRegistry | None" = None,
    user_repository: "UserRepository | None" = None,
    password_verifier: "PasswordVerifier | None" = None,
    provider_gateway: "ThirdPartyProviderGateway | None" = None,
    token_minter: "TokenMinter | None" = None,
) -> Container:
    """Container 조립 (인자로 받은 구현체가 기본 구현체보다 우선)."""
    redis = None
    if store is None:
        store, redis = build_store(settings)
    if client_registry is None:
        client_registry = InMemoryClientRegistry.from_json(settings.clients_json)
    if user_repository is None or password_verifier is None:
        directory = InMemoryUserDirectory()
        user_repository = user_repository or directory
        password_verifier = password_verifier or directory
    if provider_gateway is None:
        provider_gateway = build_provider_gateway(settings)
    if token_minter is None:
        token_minter = build_token_minter(settings)

    # Services
    state_manager = StateManager(store)
    pkce_manager = PkceChallengeManager(store, state_manager)
    code_issuer = AuthorizationCodeIssuer(store)
    engine = TokenExchangeEngine(
        client_registry,
        code_issuer,
        pkce_manager,
        token_minter,
        pkce_required=settings.pkce_required,
        allow_pkce_downgrade=settings.allow_pkce_downgrade,
    )
    handoff_service = TokenHandoffService(store)
    bridge = ThirdPartyBindingBridge(
        store,
        build_cipher(settings),
        user_repository,
        password_verifier,
    )
    third_party_tokens = ThirdPartyTokenService(
        client_registry,
        token_minter,
        default_client_id=settings.default_client_id,
    )

    return Container(
        settings=settings,
        store=store,
        client_registry=client_registry,
        redis=redis,
        generate_pkce_params=GeneratePkceParamsInteractor(
            pkce_manager, state_ttl_seconds=settings.state_ttl_seconds
        ),
        issue_authorization_code=IssueAuthorizationCodeInteractor(
            client_registry, state_manager, pkce_manager, code_issuer
        ),
        token_exchange=TokenExchangeInteractor(engine),
        token_pickup=TokenPickupInteractor(handoff_service),
        third_party_authorize=ThirdPartyAuthorizeInteractor(
            state_manager, provider_gateway, state_ttl_seconds=settings.state_ttl_seconds
        ),
        third_party_callback=ThirdPartyCallbackInteractor(
            state_manager, provider_gateway, bridge, third_party_tokens, handoff_service
        ),
        bind_account=BindAccountInteractor(bridge, third_party_tokens),
        create_account=CreateAccountInteractor(bridge, third_party_tokens),
    )


# ============================================================
# FastAPI Dependencies
# ============================================================


def get_container(request: Request) -> Container:
    """lifespan에서 조립된 Container 제공자."""
    return request.app.state.container


def get_request_context(
    request: Request,
    x_client_id: str | None = Header(default=None),
    x_request_id: str | None = Header(default=None),
) -> RequestContext:
    """요청 컨텍스트 제공자."""
    container: Container = request.app.state.container
    kwargs: dict[str, Any] = {
        "client_id": x_client_id,
        "timeout_seconds": container.settings.request_timeout_seconds,
    }
    if x_request_id:
        kwargs["request_id"] = x_request_id
    return RequestContext(**kwargs)
