"""HTTP Error Handling."""

from apps.sso.presentation.http.errors.handlers import (
    NO_STORE_HEADERS,
    failure_response,
    oauth_error_response,
    register_exception_handlers,
)

__all__ = [
    "NO_STORE_HEADERS",
    "failure_response",
    "oauth_error_response",
    "register_exception_handlers",
]
