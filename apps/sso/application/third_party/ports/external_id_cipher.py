"""ExternalIdCipher Port."""

from typing import Protocol


class ExternalIdCipher(Protocol):
    """외부 계정 ID 대칭 암호화 인터페이스.

    구현체:
        - FernetExternalIdCipher (infrastructure/security/)
    """

    def encrypt(self, external_id: str) -> str:
        """평문 external_id → 불투명 토큰."""
        ...

    def decrypt(self, token: str) -> str:
        """불투명 토큰 → 평문 external_id.

        Raises:
            InvalidGrantError: 복호화 실패 (위조/만료/키 불일치)
        """
        ...
