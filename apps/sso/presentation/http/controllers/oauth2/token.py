"""Token Controller.

RFC 6749 token endpoint와 token handoff pickup 엔드포인트입니다.
"""

import logging

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from apps.sso.application.common.context import RequestContext
from apps.sso.application.common.exceptions import InvalidRequestError
from apps.sso.application.token.dto import TokenExchangeRequest
from apps.sso.presentation.http.errors import (
    NO_STORE_HEADERS,
    failure_response,
    oauth_error_response,
)
from apps.sso.presentation.http.schemas import TokenPickupRequest, TokenResponse
from apps.sso.setup.dependencies import Container, get_container, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter()

client_basic_auth = HTTPBasic(auto_error=False)


def _token_json(response: TokenResponse) -> JSONResponse:
    return JSONResponse(
        content=response.model_dump(exclude_none=True),
        headers=NO_STORE_HEADERS,
    )


@router.post(
    "/token",
    response_model=TokenResponse,
    response_model_exclude_none=True,
    summary="Authorization code → 토큰 교환",
)
async def token(
    grant_type: str | None = Form(None),
    code: str | None = Form(None),
    redirect_uri: str | None = Form(None),
    client_id: str | None = Form(None),
    client_secret: str | None = Form(None),
    code_verifier: str | None = Form(None),
    state: str | None = Form(None),
    basic: HTTPBasicCredentials | None = Depends(client_basic_auth),
    ctx: RequestContext = Depends(get_request_context),
    container: Container = Depends(get_container),
) -> JSONResponse:
    """authorization code를 토큰으로 교환합니다.

    client 인증은 form(client_id/client_secret) 또는 HTTP Basic으로 받습니다.
    """
    if basic is not None:
        if client_id and client_id != basic.username:
            return oauth_error_response(InvalidRequestError("client_id mismatch"))
        client_id = basic.username
        client_secret = basic.password or client_secret

    result = await container.token_exchange.execute(
        ctx,
        TokenExchangeRequest(
            grant_type=grant_type,
            code=code,
            redirect_uri=redirect_uri,
            client_id=client_id,
            client_secret=client_secret,
            code_verifier=code_verifier,
            state=state,
        ),
    )
    if not result.is_ok:
        return failure_response(result)
    return _token_json(TokenResponse.from_pair(result.value))


@router.post(
    "/token/pickup",
    response_model=TokenResponse,
    response_model_exclude_none=True,
    summary="Token handoff code pickup",
)
async def pickup(
    body: TokenPickupRequest,
    ctx: RequestContext = Depends(get_request_context),
    container: Container = Depends(get_container),
) -> JSONResponse:
    """콜백 리다이렉트로 받은 token_code를 토큰으로 교환합니다 (일회용)."""
    result = await container.token_pickup.execute(ctx, body.code)
    if not result.is_ok:
        return failure_response(result)
    return _token_json(TokenResponse.from_pair(result.value))
