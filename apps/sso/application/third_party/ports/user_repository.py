"""UserRepository Port."""

from typing import Protocol


class DuplicateUsernameError(Exception):
    """이미 존재하는 username으로 생성 시도."""


class UserRepository(Protocol):
    """내부 사용자 저장소 인터페이스.

    구현체:
        - InMemoryUserDirectory (infrastructure/persistence_memory/)
    """

    async def create(
        self,
        *,
        username: str,
        password: str,
        nickname: str | None = None,
        avatar_url: str | None = None,
    ) -> str:
        """사용자 생성.

        Returns:
            생성된 user_id

        Raises:
            DuplicateUsernameError: username 중복
        """
        ...

    async def find_by_external_id(self, platform: str, external_id: str) -> str | None:
        """외부 계정에 연결된 user_id 조회."""
        ...

    async def link_external_id(self, user_id: str, platform: str, external_id: str) -> None:
        """외부 계정을 사용자에 연결 (기존 연결은 덮어씀)."""
        ...
