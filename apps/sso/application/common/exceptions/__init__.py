"""Application Exceptions."""

from apps.sso.application.common.exceptions.base import ApplicationError
from apps.sso.application.common.exceptions.oauth import (
    InvalidClientError,
    InvalidGrantError,
    InvalidRequestError,
    InvalidScopeError,
    OAuthError,
    ServerError,
    StoreUnavailableError,
    UnsupportedGrantTypeError,
)

__all__ = [
    "ApplicationError",
    "OAuthError",
    "InvalidGrantError",
    "InvalidClientError",
    "InvalidRequestError",
    "InvalidScopeError",
    "UnsupportedGrantTypeError",
    "StoreUnavailableError",
    "ServerError",
]
