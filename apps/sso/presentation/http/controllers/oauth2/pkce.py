"""PKCE Controller.

state + PKCE 파라미터 발급 엔드포인트입니다.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from apps.sso.application.common.context import RequestContext
from apps.sso.presentation.http.errors import failure_response
from apps.sso.presentation.http.schemas import PkceParamsResponse
from apps.sso.setup.dependencies import Container, get_container, get_request_context

router = APIRouter()


@router.post(
    "/pkce",
    response_model=PkceParamsResponse,
    summary="PKCE 파라미터 발급",
)
async def generate_pkce_params(
    ctx: RequestContext = Depends(get_request_context),
    container: Container = Depends(get_container),
) -> PkceParamsResponse | JSONResponse:
    """state, code_verifier, code_challenge(S256)를 발급합니다."""
    result = await container.generate_pkce_params.execute(ctx)
    if not result.is_ok:
        return failure_response(result)

    params = result.value
    return PkceParamsResponse(
        state=params.state,
        code_verifier=params.code_verifier,
        code_challenge=params.code_challenge,
        code_challenge_method=params.code_challenge_method,
    )
