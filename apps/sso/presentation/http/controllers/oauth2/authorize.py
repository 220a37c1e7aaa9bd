"""Authorize Controller.

인증된 사용자(ext-authz X-User-Id)에게 authorization code를 발급합니다.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.responses import JSONResponse

from apps.sso.application.authorization.dto import IssueAuthorizationCodeRequest
from apps.sso.application.common.context import RequestContext
from apps.sso.presentation.http.errors import failure_response
from apps.sso.presentation.http.schemas import AuthorizeRequest, AuthorizeResponse
from apps.sso.setup.dependencies import Container, get_container, get_request_context

router = APIRouter()


def get_auth_user_id(
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
) -> str:
    """ext-authz에서 전달된 사용자 ID를 추출합니다."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user ID",
        )
    return x_user_id.strip()


@router.post(
    "/authorize",
    response_model=AuthorizeResponse,
    summary="Authorization code 발급",
)
async def authorize(
    body: AuthorizeRequest,
    user_id: str = Depends(get_auth_user_id),
    ctx: RequestContext = Depends(get_request_context),
    container: Container = Depends(get_container),
) -> AuthorizeResponse | JSONResponse:
    """state를 소비하고 PKCE challenge에 묶인 authorization code를 발급합니다."""
    result = await container.issue_authorization_code.execute(
        ctx,
        IssueAuthorizationCodeRequest(
            client_id=body.client_id,
            principal_id=user_id,
            state=body.state,
            redirect_uri=body.redirect_uri,
            scopes=body.scope_set(),
        ),
    )
    if not result.is_ok:
        return failure_response(result)

    response = result.value
    return AuthorizeResponse(
        code=response.code,
        state=response.state,
        redirect_uri=response.redirect_uri,
    )
