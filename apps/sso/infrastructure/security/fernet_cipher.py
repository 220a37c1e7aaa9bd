"""Fernet External-ID Cipher.

ExternalIdCipher 포트의 구현체입니다.

MultiFernet으로 키 교체를 지원합니다.
    - 첫 번째 키로 암호화
    - 모든 키로 복호화 시도
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cryptography.fernet import Fernet, InvalidToken, MultiFernet

from apps.sso.application.common.exceptions import InvalidGrantError

logger = logging.getLogger(__name__)


class FernetExternalIdCipher:
    """Fernet 기반 외부 계정 ID 암호화."""

    def __init__(self, keys: Sequence[str]) -> None:
        if not keys:
            raise ValueError("At least one external id key is required")
        self._fernet = MultiFernet([Fernet(key.encode("ascii")) for key in keys])

    @classmethod
    def from_csv(cls, raw: str) -> FernetExternalIdCipher:
        """콤마로 구분된 키 문자열로부터 생성."""
        return cls([key.strip() for key in raw.split(",") if key.strip()])

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode("ascii")

    def encrypt(self, external_id: str) -> str:
        return self._fernet.encrypt(external_id.encode("utf-8")).decode("ascii")

    def decrypt(self, token: str) -> str:
        try:
            return self._fernet.decrypt(token.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as e:
            logger.warning("External id decryption failed")
            raise InvalidGrantError("Invalid bind code payload") from e
