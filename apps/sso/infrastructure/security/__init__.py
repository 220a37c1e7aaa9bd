"""Security Adapters."""

from apps.sso.infrastructure.security.fernet_cipher import FernetExternalIdCipher
from apps.sso.infrastructure.security.jwt_token_minter import JwtTokenMinter

__all__ = ["FernetExternalIdCipher", "JwtTokenMinter"]
