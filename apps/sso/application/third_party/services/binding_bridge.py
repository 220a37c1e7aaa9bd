"""Third-party Binding Bridge.

외부 플랫폼 콜백을 내부 사용자와 연결합니다.

- 연결된 계정 → LinkedUser (호출자가 토큰 발급 + handoff)
- 연결되지 않은 계정 → UnlinkedIdentity (암호화된 external_id를 담은 bind code 발급)

bind code는 bind/create 중 한 번만 소비됩니다.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from apps.sso.application.common.exceptions import (
    InvalidClientError,
    InvalidGrantError,
    InvalidRequestError,
)
from apps.sso.application.common.keys import BIND_CODE_KEY_PREFIX
from apps.sso.application.common.masking import mask
from apps.sso.application.third_party.dto import (
    BindCode,
    LinkedUser,
    UnlinkedIdentity,
)
from apps.sso.application.third_party.ports import DuplicateUsernameError
from apps.sso.application.token.services import random_alphanumeric

if TYPE_CHECKING:
    from apps.sso.application.common.ports import EphemeralStore
    from apps.sso.application.third_party.dto import (
        BindCredentials,
        CallbackOutcome,
        ExternalProfile,
        NewAccountDetails,
    )
    from apps.sso.application.third_party.ports import (
        ExternalIdCipher,
        PasswordVerifier,
        UserRepository,
    )
    from apps.sso.domain.enums import Platform

logger = logging.getLogger(__name__)

BIND_CODE_LENGTH = 32
BIND_CODE_TTL_SECONDS = 300


class ThirdPartyBindingBridge:
    """외부 계정 연결 서비스."""

    def __init__(
        self,
        store: "EphemeralStore",
        cipher: "ExternalIdCipher",
        user_repository: "UserRepository",
        password_verifier: "PasswordVerifier",
        bind_code_ttl_seconds: int = BIND_CODE_TTL_SECONDS,
    ) -> None:
        self._store = store
        self._cipher = cipher
        self._user_repository = user_repository
        self._password_verifier = password_verifier
        self._bind_code_ttl_seconds = bind_code_ttl_seconds

    async def on_callback(
        self,
        external_id: str,
        platform: "Platform",
        profile: "ExternalProfile | None" = None,
    ) -> "CallbackOutcome":
        """외부 계정 콜백 처리.

        Args:
            external_id: 플랫폼 사용자 ID (openid 등)
            platform: 외부 플랫폼
            profile: 닉네임/아바타 (bind code에 함께 보관)

        Returns:
            LinkedUser 또는 UnlinkedIdentity
        """
        if not external_id:
            raise InvalidRequestError("Missing external id")

        user_id = await self._user_repository.find_by_external_id(platform.value, external_id)
        if user_id is not None:
            logger.info(
                "External identity already linked",
                extra={"platform": platform.value, "user_id": user_id},
            )
            return LinkedUser(user_id=user_id)

        bind_code = BindCode(
            value=random_alphanumeric(BIND_CODE_LENGTH),
            encrypted_external_id=self._cipher.encrypt(external_id),
            platform=platform,
            issued_at=time.time(),
            ttl=self._bind_code_ttl_seconds,
            nickname=profile.nickname if profile else None,
            avatar_url=profile.avatar_url if profile else None,
        )
        await self._store.put(
            f"{BIND_CODE_KEY_PREFIX}{bind_code.value}",
            bind_code.to_json(),
            self._bind_code_ttl_seconds,
        )
        logger.info(
            "Bind code issued for unlinked identity",
            extra={"platform": platform.value, "bind_code": mask(bind_code.value)},
        )
        return UnlinkedIdentity(bind_code=bind_code)

    async def complete_bind(
        self,
        bind_code: str,
        credentials: "BindCredentials",
        platform: "Platform | None" = None,
    ) -> str:
        """기존 계정에 외부 계정 연결.

        Returns:
            연결된 user_id

        Raises:
            InvalidGrantError: bind code 없음/만료/재사용, 플랫폼 불일치, 이미 연결된 외부 계정
            InvalidClientError: 자격 증명 불일치
        """
        code = await self._take_bind_code(bind_code, platform)
        external_id = self._cipher.decrypt(code.encrypted_external_id)
        await self._ensure_unlinked(code.platform, external_id)

        user_id = await self._password_verifier.verify_credentials(
            credentials.username, credentials.password
        )
        if user_id is None:
            logger.info(
                "Bind rejected: invalid credentials",
                extra={"platform": code.platform.value, "username": credentials.username},
            )
            raise InvalidClientError("Invalid username or password")

        await self._user_repository.link_external_id(user_id, code.platform.value, external_id)
        logger.info(
            "External identity bound to existing user",
            extra={"platform": code.platform.value, "user_id": user_id},
        )
        return user_id

    async def complete_create(
        self,
        bind_code: str,
        details: "NewAccountDetails",
        platform: "Platform | None" = None,
    ) -> str:
        """신규 계정 생성 후 외부 계정 연결.

        Returns:
            생성된 user_id

        Raises:
            InvalidGrantError: bind code 없음/만료/재사용, 플랫폼 불일치, 이미 연결된 외부 계정
            InvalidRequestError: username 중복 (bind code는 이미 소진됨)
        """
        code = await self._take_bind_code(bind_code, platform)
        external_id = self._cipher.decrypt(code.encrypted_external_id)
        await self._ensure_unlinked(code.platform, external_id)

        try:
            user_id = await self._user_repository.create(
                username=details.username,
                password=details.password,
                nickname=details.nickname or code.nickname,
                avatar_url=details.avatar_url or code.avatar_url,
            )
        except DuplicateUsernameError as e:
            raise InvalidRequestError("Username already exists") from e

        await self._user_repository.link_external_id(user_id, code.platform.value, external_id)
        logger.info(
            "User created from external identity",
            extra={"platform": code.platform.value, "user_id": user_id},
        )
        return user_id

    async def _take_bind_code(self, value: str | None, platform: "Platform | None") -> BindCode:
        raw = await self._store.take_once(f"{BIND_CODE_KEY_PREFIX}{value}") if value else None
        if raw is None:
            raise InvalidGrantError("Invalid, expired or already used bind code")

        code = BindCode.from_json(raw)
        if platform is not None and code.platform is not platform:
            logger.warning(
                "Bind code presented for another platform",
                extra={"expected": code.platform.value, "actual": platform.value},
            )
            raise InvalidGrantError("Bind code was issued for another platform")
        return code

    async def _ensure_unlinked(self, platform: "Platform", external_id: str) -> None:
        # 외부 계정 하나는 한 사용자에게만 연결
        user_id = await self._user_repository.find_by_external_id(platform.value, external_id)
        if user_id is not None:
            logger.warning(
                "Bind code redeemed for an already linked identity",
                extra={"platform": platform.value, "user_id": user_id},
            )
            raise InvalidGrantError("External identity is already linked")
