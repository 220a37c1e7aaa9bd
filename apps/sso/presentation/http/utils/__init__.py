"""HTTP Utilities."""

from apps.sso.presentation.http.utils.redirect import build_frontend_url, frontend_redirect

__all__ = ["build_frontend_url", "frontend_redirect"]
