"""Token Commands."""

from apps.sso.application.token.commands.exchange import TokenExchangeInteractor
from apps.sso.application.token.commands.pickup import TokenPickupInteractor

__all__ = ["TokenExchangeInteractor", "TokenPickupInteractor"]
