"""HTTP Schemas."""

from apps.sso.presentation.http.schemas.oauth2 import (
    AuthorizeRequest,
    AuthorizeResponse,
    ErrorResponse,
    PkceParamsResponse,
    TokenPickupRequest,
    TokenResponse,
)
from apps.sso.presentation.http.schemas.third_party import (
    BindAccountRequest,
    CreateAccountRequest,
)

__all__ = [
    "AuthorizeRequest",
    "AuthorizeResponse",
    "BindAccountRequest",
    "CreateAccountRequest",
    "ErrorResponse",
    "PkceParamsResponse",
    "TokenPickupRequest",
    "TokenResponse",
]
