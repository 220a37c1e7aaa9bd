"""Token Services."""

from apps.sso.application.token.services.token_exchange_engine import TokenExchangeEngine
from apps.sso.application.token.services.token_handoff_service import (
    TokenHandoffService,
    random_alphanumeric,
)

__all__ = ["TokenExchangeEngine", "TokenHandoffService", "random_alphanumeric"]
