"""Third-party Services."""

from apps.sso.application.third_party.services.binding_bridge import ThirdPartyBindingBridge
from apps.sso.application.third_party.services.third_party_token_service import (
    ThirdPartyTokenService,
)

__all__ = ["ThirdPartyBindingBridge", "ThirdPartyTokenService"]
