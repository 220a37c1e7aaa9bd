"""ThirdPartyBindingBridge 단위 테스트."""

import pytest

from apps.sso.application.common.exceptions import (
    InvalidClientError,
    InvalidGrantError,
    InvalidRequestError,
)
from apps.sso.application.common.keys import BIND_CODE_KEY_PREFIX
from apps.sso.application.third_party.dto import (
    BindCode,
    BindCredentials,
    ExternalProfile,
    LinkedUser,
    NewAccountDetails,
    UnlinkedIdentity,
)
from apps.sso.application.third_party.services import ThirdPartyBindingBridge
from apps.sso.domain.enums import Platform
from apps.sso.infrastructure.persistence_memory import (
    InMemoryEphemeralStore,
    InMemoryUserDirectory,
)
from apps.sso.infrastructure.security import FernetExternalIdCipher

OPENID = "o6_bmjrPTlm6_2sgVt7hMZOPfL2M"


@pytest.fixture
def profile() -> ExternalProfile:
    return ExternalProfile(
        platform=Platform.WECHAT,
        external_id=OPENID,
        nickname="微信用户",
        avatar_url="https://thirdwx.qlogo.cn/avatar.png",
    )


class TestOnCallback:
    """콜백 분기 테스트."""

    @pytest.mark.asyncio
    async def test_unlinked_identity_issues_encrypted_bind_code(
        self,
        bridge: ThirdPartyBindingBridge,
        store: InMemoryEphemeralStore,
        cipher: FernetExternalIdCipher,
        profile: ExternalProfile,
    ) -> None:
        # Act
        outcome = await bridge.on_callback(OPENID, Platform.WECHAT, profile)

        # Assert
        assert isinstance(outcome, UnlinkedIdentity)
        bind_code = outcome.bind_code
        assert len(bind_code.value) == 32
        assert bind_code.platform is Platform.WECHAT
        assert bind_code.nickname == "微信用户"
        assert OPENID not in bind_code.encrypted_external_id
        assert cipher.decrypt(bind_code.encrypted_external_id) == OPENID

        raw = await store.peek(f"{BIND_CODE_KEY_PREFIX}{bind_code.value}")
        assert OPENID not in raw
        assert BindCode.from_json(raw) == bind_code

    @pytest.mark.asyncio
    async def test_linked_identity(
        self,
        bridge: ThirdPartyBindingBridge,
        user_directory: InMemoryUserDirectory,
    ) -> None:
        await user_directory.link_external_id("user-42", "github", "12345")

        outcome = await bridge.on_callback("12345", Platform.GITHUB)

        assert outcome == LinkedUser(user_id="user-42")

    @pytest.mark.asyncio
    async def test_empty_external_id(self, bridge: ThirdPartyBindingBridge) -> None:
        with pytest.raises(InvalidRequestError):
            await bridge.on_callback("", Platform.GITHUB)


class TestCompleteCreate:
    """신규 계정 생성 테스트."""

    @pytest.mark.asyncio
    async def test_create_then_replay(
        self,
        bridge: ThirdPartyBindingBridge,
        user_directory: InMemoryUserDirectory,
        profile: ExternalProfile,
    ) -> None:
        """생성 성공 후 같은 bind code 재사용은 invalid_grant."""
        # Arrange
        outcome = await bridge.on_callback(OPENID, Platform.WECHAT, profile)
        code = outcome.bind_code.value
        details = NewAccountDetails(username="new-user", password="password-123")

        # Act
        user_id = await bridge.complete_create(code, details, platform=Platform.WECHAT)

        # Assert
        assert user_id
        assert await user_directory.find_by_external_id("wechat", OPENID) == user_id
        # 프로필 닉네임/아바타로 보완
        assert user_directory.get(user_id).nickname == "微信用户"

        with pytest.raises(InvalidGrantError):
            await bridge.complete_create(code, details, platform=Platform.WECHAT)

        # 다음 콜백은 연결된 사용자로 처리
        assert await bridge.on_callback(OPENID, Platform.WECHAT) == LinkedUser(user_id=user_id)

    @pytest.mark.asyncio
    async def test_duplicate_username_burns_code(
        self,
        bridge: ThirdPartyBindingBridge,
        user_directory: InMemoryUserDirectory,
    ) -> None:
        await user_directory.create(username="taken", password="password-123")
        outcome = await bridge.on_callback("gh-1", Platform.GITHUB)
        code = outcome.bind_code.value

        with pytest.raises(InvalidRequestError):
            await bridge.complete_create(
                code, NewAccountDetails(username="taken", password="password-456")
            )
        with pytest.raises(InvalidGrantError):
            await bridge.complete_create(
                code, NewAccountDetails(username="fresh", password="password-456")
            )

    @pytest.mark.asyncio
    async def test_platform_mismatch(self, bridge: ThirdPartyBindingBridge) -> None:
        outcome = await bridge.on_callback("gh-2", Platform.GITHUB)

        with pytest.raises(InvalidGrantError):
            await bridge.complete_create(
                outcome.bind_code.value,
                NewAccountDetails(username="someone", password="password-123"),
                platform=Platform.WECHAT,
            )

    @pytest.mark.asyncio
    async def test_duplicate_callbacks_keep_first_link(
        self,
        bridge: ThirdPartyBindingBridge,
        user_directory: InMemoryUserDirectory,
    ) -> None:
        """같은 외부 계정으로 발급된 두 bind code 중 두 번째는 거부."""
        # Arrange: 브라우저 재시도로 콜백 두 번
        first = await bridge.on_callback("ext-1", Platform.GITHUB)
        second = await bridge.on_callback("ext-1", Platform.GITHUB)

        # Act
        user_id = await bridge.complete_create(
            first.bind_code.value, NewAccountDetails(username="first", password="password-123")
        )
        with pytest.raises(InvalidGrantError):
            await bridge.complete_create(
                second.bind_code.value,
                NewAccountDetails(username="second", password="password-123"),
            )

        # Assert: 첫 연결 유지, 두 번째 계정은 생성되지 않음
        assert await user_directory.find_by_external_id("github", "ext-1") == user_id
        assert await user_directory.verify_credentials("second", "password-123") is None


class TestCompleteBind:
    """기존 계정 연결 테스트."""

    @pytest.mark.asyncio
    async def test_bind_existing_account(
        self,
        bridge: ThirdPartyBindingBridge,
        user_directory: InMemoryUserDirectory,
    ) -> None:
        user_id = await user_directory.create(username="alice", password="correct-horse")
        outcome = await bridge.on_callback("gh-alice", Platform.GITHUB)

        bound = await bridge.complete_bind(
            outcome.bind_code.value,
            BindCredentials(username="alice", password="correct-horse"),
            platform=Platform.GITHUB,
        )

        assert bound == user_id
        assert await user_directory.find_by_external_id("github", "gh-alice") == user_id

    @pytest.mark.asyncio
    async def test_bad_credentials_burn_code(
        self,
        bridge: ThirdPartyBindingBridge,
        user_directory: InMemoryUserDirectory,
    ) -> None:
        await user_directory.create(username="bob", password="correct-horse")
        outcome = await bridge.on_callback("gh-bob", Platform.GITHUB)
        code = outcome.bind_code.value

        with pytest.raises(InvalidClientError):
            await bridge.complete_bind(code, BindCredentials(username="bob", password="wrong"))
        with pytest.raises(InvalidGrantError):
            await bridge.complete_bind(code, BindCredentials(username="bob", password="correct-horse"))
        assert await user_directory.find_by_external_id("github", "gh-bob") is None

    @pytest.mark.asyncio
    async def test_cannot_take_over_linked_identity(
        self,
        bridge: ThirdPartyBindingBridge,
        user_directory: InMemoryUserDirectory,
    ) -> None:
        """bind code 발급 후 다른 사용자에게 연결된 외부 계정은 가져갈 수 없음."""
        # Arrange
        pending = await bridge.on_callback("gh-late", Platform.GITHUB)
        owner_id = await user_directory.create(username="owner", password="password-123")
        await user_directory.link_external_id(owner_id, "github", "gh-late")
        await user_directory.create(username="mallory", password="password-456")

        # Act & Assert
        with pytest.raises(InvalidGrantError):
            await bridge.complete_bind(
                pending.bind_code.value,
                BindCredentials(username="mallory", password="password-456"),
            )
        assert await user_directory.find_by_external_id("github", "gh-late") == owner_id

    @pytest.mark.asyncio
    async def test_tampered_payload(
        self,
        store: InMemoryEphemeralStore,
        user_directory: InMemoryUserDirectory,
    ) -> None:
        """다른 키로 암호화된 bind code는 invalid_grant."""
        issuing = ThirdPartyBindingBridge(
            store,
            FernetExternalIdCipher([FernetExternalIdCipher.generate_key()]),
            user_directory,
            user_directory,
        )
        redeeming = ThirdPartyBindingBridge(
            store,
            FernetExternalIdCipher([FernetExternalIdCipher.generate_key()]),
            user_directory,
            user_directory,
        )
        outcome = await issuing.on_callback("gh-3", Platform.GITHUB)

        with pytest.raises(InvalidGrantError):
            await redeeming.complete_create(
                outcome.bind_code.value,
                NewAccountDetails(username="carol", password="password-123"),
            )
