"""Frontend Redirect Utilities.

외부 플랫폼 콜백 후 프론트엔드로 리다이렉트하기 위한 유틸리티 함수들입니다.
"""

from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from fastapi.responses import RedirectResponse


def build_frontend_url(base_url: str, params: dict[str, str | None]) -> str:
    """기존 query를 유지하면서 None이 아닌 파라미터를 추가."""
    parsed = urlparse(base_url)
    query = dict(parse_qsl(parsed.query))
    query.update({key: value for key, value in params.items() if value is not None})
    return urlunparse(parsed._replace(query=urlencode(query)))


def frontend_redirect(base_url: str, **params: str | None) -> RedirectResponse:
    """프론트엔드로 302 리다이렉트."""
    return RedirectResponse(url=build_frontend_url(base_url, params), status_code=302)
