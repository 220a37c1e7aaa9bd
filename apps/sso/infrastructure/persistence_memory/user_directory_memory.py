"""In-memory User Directory.

UserRepository + PasswordVerifier 구현체 (로컬 실행 및 테스트용).
비밀번호는 bcrypt 해시로만 보관합니다.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

import bcrypt

from apps.sso.application.third_party.ports import DuplicateUsernameError

logger = logging.getLogger(__name__)

# bcrypt 입력 제한
BCRYPT_MAX_BYTES = 72


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


@dataclass
class StoredUser:
    user_id: str
    username: str
    password_hash: bytes
    nickname: str | None = None
    avatar_url: str | None = None


class InMemoryUserDirectory:
    """사용자 + 외부 계정 연결 저장소."""

    def __init__(self) -> None:
        self._users: dict[str, StoredUser] = {}
        self._by_username: dict[str, str] = {}
        self._external_links: dict[tuple[str, str], str] = {}

    async def create(
        self,
        *,
        username: str,
        password: str,
        nickname: str | None = None,
        avatar_url: str | None = None,
    ) -> str:
        if username in self._by_username:
            raise DuplicateUsernameError(username)

        user_id = str(uuid.uuid4())
        self._users[user_id] = StoredUser(
            user_id=user_id,
            username=username,
            password_hash=bcrypt.hashpw(_encode_password(password), bcrypt.gensalt()),
            nickname=nickname,
            avatar_url=avatar_url,
        )
        self._by_username[username] = user_id
        logger.info("User created", extra={"user_id": user_id})
        return user_id

    async def find_by_external_id(self, platform: str, external_id: str) -> str | None:
        return self._external_links.get((platform, external_id))

    async def link_external_id(self, user_id: str, platform: str, external_id: str) -> None:
        self._external_links[(platform, external_id)] = user_id

    async def verify_credentials(self, username: str, password: str) -> str | None:
        user_id = self._by_username.get(username)
        if user_id is None:
            return None
        user = self._users[user_id]
        if not bcrypt.checkpw(_encode_password(password), user.password_hash):
            return None
        return user_id

    def get(self, user_id: str) -> StoredUser | None:
        return self._users.get(user_id)
