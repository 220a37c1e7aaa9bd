"""Authorization DTOs."""

from apps.sso.application.authorization.dto.authorization import (
    AuthorizationCode,
    AuthorizationCodeResponse,
    IssueAuthorizationCodeRequest,
)

__all__ = [
    "AuthorizationCode",
    "AuthorizationCodeResponse",
    "IssueAuthorizationCodeRequest",
]
