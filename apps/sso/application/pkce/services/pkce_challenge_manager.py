"""PKCE Challenge Manager.

RFC 7636 code_verifier/code_challenge 생성, state 단위 저장, verifier 검증을 담당합니다.

Notes:
    - challenge 방식은 S256만 허용 (plain은 거부)
    - verifier 비교는 hmac.compare_digest로 상수 시간 처리
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import re
import secrets
from typing import TYPE_CHECKING

from apps.sso.application.common.exceptions import InvalidRequestError
from apps.sso.application.common.keys import PKCE_STATE_KEY_PREFIX
from apps.sso.application.common.masking import mask
from apps.sso.application.pkce.dto import PkceParams, StateEntry
from apps.sso.domain.enums import ChallengeMethod

if TYPE_CHECKING:
    from apps.sso.application.common.ports import EphemeralStore
    from apps.sso.application.state.services import StateManager

logger = logging.getLogger(__name__)

VERIFIER_BYTES = 32
# RFC 7636 §4.1: unreserved characters, 43~128자
VERIFIER_PATTERN = re.compile(r"^[A-Za-z0-9\-._~]{43,128}$")


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


class PkceChallengeManager:
    """PKCE 서비스."""

    def __init__(self, store: "EphemeralStore", state_manager: "StateManager") -> None:
        self._store = store
        self._state_manager = state_manager

    @staticmethod
    def generate_challenge_pair() -> tuple[str, str]:
        """(code_verifier, code_challenge) 쌍 생성.

        verifier는 32 random bytes의 base64url (padding 없음, 43자).
        """
        verifier = _b64url(secrets.token_bytes(VERIFIER_BYTES))
        challenge = PkceChallengeManager.compute_challenge(verifier, ChallengeMethod.S256)
        return verifier, challenge

    @staticmethod
    def compute_challenge(verifier: str, method: ChallengeMethod | str = ChallengeMethod.S256) -> str:
        """verifier로부터 challenge 계산.

        Raises:
            InvalidRequestError: S256 이외의 방식
        """
        if ChallengeMethod.parse(method) is not ChallengeMethod.S256:
            raise InvalidRequestError(f"Unsupported code_challenge_method: {method}")
        return _b64url(hashlib.sha256(verifier.encode("ascii")).digest())

    @staticmethod
    def is_well_formed_verifier(verifier: str | None) -> bool:
        return bool(verifier) and VERIFIER_PATTERN.match(verifier) is not None

    def validate_verifier(
        self,
        stored_challenge: str,
        stored_method: ChallengeMethod | str | None,
        supplied_verifier: str | None,
    ) -> bool:
        """저장된 challenge와 제출된 verifier 일치 여부."""
        if not self.is_well_formed_verifier(supplied_verifier):
            logger.info("Malformed code_verifier rejected")
            return False
        if ChallengeMethod.parse(stored_method) is not ChallengeMethod.S256:
            logger.warning(
                "Stored challenge uses unsupported method",
                extra={"challenge_method": str(stored_method)},
            )
            return False
        expected = self.compute_challenge(supplied_verifier, ChallengeMethod.S256)  # type: ignore[arg-type]
        return hmac.compare_digest(expected.encode("ascii"), stored_challenge.encode("ascii"))

    async def store_for_state(
        self,
        state: str,
        verifier: str,
        challenge: str,
        method: ChallengeMethod = ChallengeMethod.S256,
        ttl_seconds: int = 600,
    ) -> StateEntry:
        """state에 PKCE 쌍 저장."""
        entry = StateEntry(
            state=state,
            code_verifier=verifier,
            code_challenge=challenge,
            challenge_method=method,
            ttl=ttl_seconds,
        )
        await self._store.put(f"{PKCE_STATE_KEY_PREFIX}{state}", entry.to_json(), ttl_seconds)
        return entry

    async def take_for_state(self, state: str) -> StateEntry | None:
        """state에 저장된 PKCE 쌍 조회 및 소비."""
        raw = await self._store.take_once(f"{PKCE_STATE_KEY_PREFIX}{state}")
        return StateEntry.from_json(raw) if raw else None

    async def peek_for_state(self, state: str) -> StateEntry | None:
        """state에 저장된 PKCE 쌍 조회 (소비하지 않음)."""
        raw = await self._store.peek(f"{PKCE_STATE_KEY_PREFIX}{state}")
        return StateEntry.from_json(raw) if raw else None

    async def generate_params(self, state_ttl: int = 600) -> PkceParams:
        """state 발급 + PKCE 쌍 생성 + 저장."""
        state = await self._state_manager.issue_state(ttl_seconds=state_ttl)
        verifier, challenge = self.generate_challenge_pair()
        await self.store_for_state(state, verifier, challenge, ChallengeMethod.S256, state_ttl)

        logger.info(
            "PKCE params generated",
            extra={"state": mask(state), "code_challenge": mask(challenge)},
        )
        return PkceParams(state=state, code_verifier=verifier, code_challenge=challenge)
