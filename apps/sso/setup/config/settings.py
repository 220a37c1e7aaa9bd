"""Application Settings.

env_prefix="SSO_" 사용으로 SSO_REDIS_URL 등의 환경변수 매핑.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CLIENTS_JSON = (
    '[{"client_id": "sso-web", "scopes": ["openid", "profile"], '
    '"allowed_grant_types": ["authorization_code", "refresh_token"]}]'
)


class Settings(BaseSettings):
    """애플리케이션 설정.

    환경변수에서 자동으로 로드됩니다.

    예시:
        SSO_REDIS_URL → redis_url
        SSO_ALLOW_PKCE_DOWNGRADE → allow_pkce_downgrade

    PKCE 정책:
        기본값(pkce_required=True, allow_pkce_downgrade=False)에서는
        code_verifier 없는 교환이 client_secret이 맞아도 invalid_grant로 거부됩니다.
        verifier 없이 교환하는 confidential client가 있으면
        SSO_PKCE_REQUIRED=false 또는 SSO_ALLOW_PKCE_DOWNGRADE=true로 설정해야 합니다.
    """

    # Service
    app_name: str = "SSO API"
    environment: str = "local"
    api_v1_prefix: str = "/api/v1"
    service_name: str = "sso-api"
    service_version: str = "1.0.0"
    log_level: str = "INFO"

    # Ephemeral store (비어 있으면 in-memory 저장소 사용)
    redis_url: Optional[str] = None

    # OAuth2 / PKCE
    state_ttl_seconds: int = Field(default=600, gt=0)
    # True면 verifier 없는 교환은 confidential client라도 거부 (allow_pkce_downgrade로 완화)
    pkce_required: bool = True
    # pkce_required 상태에서 verifier 없는 요청을 client_secret 경로로 허용할지 여부
    allow_pkce_downgrade: bool = False
    request_timeout_seconds: float = Field(default=5.0, gt=0)

    # Clients (in-memory registry seed, JSON 배열)
    clients_json: str = DEFAULT_CLIENTS_JSON
    default_client_id: str = "sso-web"

    # JWT
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "sso.local"
    jwt_audience: Optional[str] = None
    access_token_exp_minutes: int = 60
    refresh_token_exp_minutes: int = 60 * 24 * 7

    # External id encryption (Fernet 키 목록, 콤마 구분, 첫 번째 키로 암호화)
    external_id_keys: str = ""

    # Frontend
    frontend_callback_url: str = "http://localhost:3000/oauth2/third/callback"

    # Third-party redirect (플랫폼 콜백 URL)
    third_party_redirect_template: str = (
        "http://localhost:8000/api/v1/oauth2/third/{platform}/callback"
    )
    oauth_http_timeout_seconds: float = 5.0

    # Third-party - GitHub
    github_client_id: str = ""
    github_client_secret: Optional[str] = None

    # Third-party - WeChat
    wechat_app_id: str = ""
    wechat_app_secret: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="SSO_",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("redis_url", "github_client_secret", "wechat_app_secret", mode="before")
    @classmethod
    def _empty_string_to_none(cls, value: Optional[str]):
        """빈 문자열을 None으로 변환."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def third_party_redirect_uri(self, platform: str) -> str:
        return self.third_party_redirect_template.format(platform=platform)


@lru_cache
def get_settings() -> Settings:
    """캐시된 Settings 인스턴스 반환."""
    return Settings()
