"""Third-party Authorize Controller.

외부 플랫폼 인증 페이지로 리다이렉트합니다.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, RedirectResponse

from apps.sso.application.common.context import RequestContext
from apps.sso.presentation.http.errors import failure_response
from apps.sso.setup.dependencies import Container, get_container, get_request_context

router = APIRouter()


@router.get(
    "/{platform}/authorize",
    response_model=None,
    summary="외부 플랫폼 로그인 시작",
)
async def authorize(
    platform: str,
    ctx: RequestContext = Depends(get_request_context),
    container: Container = Depends(get_container),
) -> RedirectResponse | JSONResponse:
    """플랫폼별 state를 발급하고 인증 URL로 302 리다이렉트합니다."""
    redirect_uri = container.settings.third_party_redirect_uri(platform.lower())
    result = await container.third_party_authorize.execute(ctx, platform, redirect_uri)
    if not result.is_ok:
        return failure_response(result)
    return RedirectResponse(url=result.value.authorization_url, status_code=302)
