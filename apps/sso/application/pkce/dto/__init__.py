"""PKCE DTOs."""

from apps.sso.application.pkce.dto.pkce import PkceParams, StateEntry

__all__ = ["PkceParams", "StateEntry"]
