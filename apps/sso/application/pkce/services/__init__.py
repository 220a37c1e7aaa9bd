"""PKCE Services."""

from apps.sso.application.pkce.services.pkce_challenge_manager import PkceChallengeManager

__all__ = ["PkceChallengeManager"]
