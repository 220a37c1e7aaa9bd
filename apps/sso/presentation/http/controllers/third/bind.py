"""Third-party Bind Controller.

bind code로 기존 계정 연결 또는 신규 계정 생성 후 토큰을 발급합니다.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from apps.sso.application.common.context import RequestContext
from apps.sso.application.third_party.dto import BindCredentials, NewAccountDetails
from apps.sso.presentation.http.errors import NO_STORE_HEADERS, failure_response
from apps.sso.presentation.http.schemas import (
    BindAccountRequest,
    CreateAccountRequest,
    TokenResponse,
)
from apps.sso.setup.dependencies import Container, get_container, get_request_context

router = APIRouter()


@router.post(
    "/{platform}/bind",
    response_model=TokenResponse,
    response_model_exclude_none=True,
    summary="기존 계정 연결",
)
async def bind(
    platform: str,
    body: BindAccountRequest,
    ctx: RequestContext = Depends(get_request_context),
    container: Container = Depends(get_container),
) -> JSONResponse:
    result = await container.bind_account.execute(
        ctx,
        platform,
        body.code,
        BindCredentials(username=body.username, password=body.password),
    )
    if not result.is_ok:
        return failure_response(result)
    return JSONResponse(
        content=TokenResponse.from_pair(result.value).model_dump(exclude_none=True),
        headers=NO_STORE_HEADERS,
    )


@router.post(
    "/{platform}/create",
    response_model=TokenResponse,
    response_model_exclude_none=True,
    summary="신규 계정 생성",
)
async def create(
    platform: str,
    body: CreateAccountRequest,
    ctx: RequestContext = Depends(get_request_context),
    container: Container = Depends(get_container),
) -> JSONResponse:
    result = await container.create_account.execute(
        ctx,
        platform,
        body.code,
        NewAccountDetails(
            username=body.username,
            password=body.password,
            nickname=body.nickname,
            avatar_url=body.avatar_url,
        ),
    )
    if not result.is_ok:
        return failure_response(result)
    return JSONResponse(
        content=TokenResponse.from_pair(result.value).model_dump(exclude_none=True),
        headers=NO_STORE_HEADERS,
    )
