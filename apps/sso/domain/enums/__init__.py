"""Domain Enums."""

from apps.sso.domain.enums.challenge_method import ChallengeMethod
from apps.sso.domain.enums.grant_type import GrantType
from apps.sso.domain.enums.platform import Platform

__all__ = ["ChallengeMethod", "GrantType", "Platform"]
