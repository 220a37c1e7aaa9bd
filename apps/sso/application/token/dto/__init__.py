"""Token DTOs."""

from apps.sso.application.token.dto.token import TokenExchangeRequest, TokenHandoffCode

__all__ = ["TokenExchangeRequest", "TokenHandoffCode"]
