"""OAuth2 Error Taxonomy.

RFC 6749 §5.2 error 코드와 HTTP 상태 코드를 함께 보관합니다.
"""

from apps.sso.application.common.exceptions.base import ApplicationError


class OAuthError(ApplicationError):
    """OAuth2 오류 기반 클래스.

    Attributes:
        error_code: OAuth2 error 값 (예: invalid_grant)
        status_code: 대응 HTTP 상태 코드
        retryable: 동일 요청 재시도가 안전한지 여부
    """

    error_code: str = "server_error"
    status_code: int = 500
    retryable: bool = False

    def __init__(self, description: str | None = None) -> None:
        super().__init__(description or self.error_code)

    @property
    def description(self) -> str:
        return self.message


class InvalidGrantError(OAuthError):
    """잘못되었거나 만료/재사용된 code, state, verifier."""

    error_code = "invalid_grant"
    status_code = 400


class InvalidClientError(OAuthError):
    """알 수 없는 client 또는 client 인증 실패."""

    error_code = "invalid_client"
    status_code = 401


class InvalidRequestError(OAuthError):
    """필수 파라미터 누락 또는 형식 오류."""

    error_code = "invalid_request"
    status_code = 400


class InvalidScopeError(OAuthError):
    """client에 허용되지 않은 scope 요청."""

    error_code = "invalid_scope"
    status_code = 400


class UnsupportedGrantTypeError(OAuthError):
    """지원하지 않는 grant_type."""

    error_code = "unsupported_grant_type"
    status_code = 400


class StoreUnavailableError(OAuthError):
    """Ephemeral store 일시 장애 (백오프 후 재시도 가능)."""

    error_code = "server_error"
    status_code = 500
    retryable = True


class ServerError(OAuthError):
    """예상하지 못한 서버 오류 (토큰 발급 실패 등)."""

    error_code = "server_error"
    status_code = 500
