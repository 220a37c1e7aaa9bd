"""PKCE Commands."""

from apps.sso.application.pkce.commands.generate_params import GeneratePkceParamsInteractor

__all__ = ["GeneratePkceParamsInteractor"]
