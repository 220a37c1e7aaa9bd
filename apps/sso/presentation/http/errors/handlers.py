"""Exception Handlers.

애플리케이션 예외를 RFC 6749 §5.2 형식의 HTTP 응답으로 변환합니다.
"""

from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from apps.sso.application.common.exceptions import ApplicationError, OAuthError

if TYPE_CHECKING:
    from apps.sso.application.common.result import Result

RETRY_AFTER_SECONDS = "1"
NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}


def oauth_error_response(exc: OAuthError) -> JSONResponse:
    """OAuthError → {error, error_description} 응답."""
    headers = dict(NO_STORE_HEADERS)
    if exc.status_code == 401:
        headers["WWW-Authenticate"] = 'Basic realm="oauth2"'
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "error_description": exc.description},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """예외 핸들러 등록."""

    @app.exception_handler(OAuthError)
    async def oauth_error_handler(request: Request, exc: OAuthError):
        return oauth_error_response(exc)

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request: Request, exc: ApplicationError):
        return JSONResponse(
            status_code=400,
            content={"error": "invalid_request", "error_description": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # 요청 형식 오류도 RFC 6749 오류 형식으로 응답
        return JSONResponse(
            status_code=400,
            content={
                "error": "invalid_request",
                "error_description": _describe_validation_error(exc),
            },
            headers=NO_STORE_HEADERS,
        )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Malformed request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg', 'invalid')}" if location else first.get("msg", "invalid")


def failure_response(result: "Result") -> JSONResponse:
    """실패한 Result → 오류 응답 (재시도 가능하면 Retry-After 추가)."""
    response = oauth_error_response(result.error)
    if result.is_retryable:
        response.headers["Retry-After"] = RETRY_AFTER_SECONDS
    return response
