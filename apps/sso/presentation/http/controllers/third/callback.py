"""Third-party Callback Controller.

외부 플랫폼 콜백을 처리하고 프론트엔드로 리다이렉트합니다.

- 연결된 계정: ?token_code=...
- 연결 안 된 계정: ?code=...&platform=...&nickname=...&avatar_url=...
- 실패: ?error=...
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from apps.sso.application.common.context import RequestContext
from apps.sso.application.third_party.dto import ThirdPartyCallbackRequest
from apps.sso.presentation.http.utils import frontend_redirect
from apps.sso.setup.dependencies import Container, get_container, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{platform}/callback",
    response_model=None,
    summary="외부 플랫폼 콜백 처리",
)
async def callback(
    platform: str,
    code: str | None = Query(None, description="플랫폼 인증 코드"),
    state: str | None = Query(None, description="상태 값"),
    ctx: RequestContext = Depends(get_request_context),
    container: Container = Depends(get_container),
) -> RedirectResponse:
    """플랫폼 code를 교환하고 결과를 프론트엔드로 전달합니다."""
    settings = container.settings
    result = await container.third_party_callback.execute(
        ctx,
        ThirdPartyCallbackRequest(
            platform=platform,
            code=code,
            state=state,
            redirect_uri=settings.third_party_redirect_uri(platform.lower()),
        ),
    )

    if not result.is_ok:
        return frontend_redirect(
            settings.frontend_callback_url,
            error=result.error.error_code,
            platform=platform,
        )

    outcome = result.value
    if outcome.is_linked:
        return frontend_redirect(settings.frontend_callback_url, token_code=outcome.token_code)
    return frontend_redirect(
        settings.frontend_callback_url,
        code=outcome.bind_code,
        platform=outcome.platform.value,
        nickname=outcome.nickname,
        avatar_url=outcome.avatar_url,
    )
