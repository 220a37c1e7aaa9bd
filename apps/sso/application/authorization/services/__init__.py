"""Authorization Services."""

from apps.sso.application.authorization.services.authorization_code_issuer import (
    AuthorizationCodeIssuer,
)

__all__ = ["AuthorizationCodeIssuer"]
