"""PasswordVerifier Port."""

from typing import Protocol


class PasswordVerifier(Protocol):
    """사용자 자격 증명 검증 인터페이스."""

    async def verify_credentials(self, username: str, password: str) -> str | None:
        """자격 증명 검증.

        Returns:
            일치하면 user_id, 아니면 None
        """
        ...
