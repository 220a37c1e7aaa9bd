"""Domain Enum 단위 테스트."""

from apps.sso.domain.enums import ChallengeMethod, GrantType, Platform


class TestPlatform:
    """Platform 테스트."""

    def test_parse_is_case_insensitive(self) -> None:
        assert Platform.parse("WeChat") is Platform.WECHAT
        assert Platform.parse("github") is Platform.GITHUB

    def test_parse_unknown_returns_none(self) -> None:
        assert Platform.parse("myspace") is None


class TestChallengeMethod:
    """ChallengeMethod 테스트."""

    def test_parse_known_methods(self) -> None:
        assert ChallengeMethod.parse("S256") is ChallengeMethod.S256
        assert ChallengeMethod.parse("plain") is ChallengeMethod.PLAIN
        assert ChallengeMethod.parse(ChallengeMethod.S256) is ChallengeMethod.S256

    def test_parse_unknown_or_none(self) -> None:
        assert ChallengeMethod.parse("s256") is None
        assert ChallengeMethod.parse(None) is None


def test_grant_type_values() -> None:
    assert GrantType.AUTHORIZATION_CODE.value == "authorization_code"
    assert GrantType("third_party") is GrantType.THIRD_PARTY
