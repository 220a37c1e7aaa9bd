"""Third-party Ports."""

from apps.sso.application.third_party.ports.external_id_cipher import ExternalIdCipher
from apps.sso.application.third_party.ports.password_verifier import PasswordVerifier
from apps.sso.application.third_party.ports.provider_gateway import ThirdPartyProviderGateway
from apps.sso.application.third_party.ports.user_repository import (
    DuplicateUsernameError,
    UserRepository,
)

__all__ = [
    "DuplicateUsernameError",
    "ExternalIdCipher",
    "PasswordVerifier",
    "ThirdPartyProviderGateway",
    "UserRepository",
]
