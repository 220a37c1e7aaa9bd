"""OAuth2 Router."""

from fastapi import APIRouter

from apps.sso.presentation.http.controllers.oauth2.authorize import router as authorize_router
from apps.sso.presentation.http.controllers.oauth2.pkce import router as pkce_router
from apps.sso.presentation.http.controllers.oauth2.token import router as token_router

router = APIRouter()

router.include_router(pkce_router)
router.include_router(authorize_router)
router.include_router(token_router)
