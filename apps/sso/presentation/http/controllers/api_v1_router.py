"""API v1 Router."""

from fastapi import APIRouter

from apps.sso.presentation.http.controllers.oauth2.router import router as oauth2_router
from apps.sso.presentation.http.controllers.third.router import router as third_router

router = APIRouter()

# OAuth2 endpoints
router.include_router(oauth2_router, prefix="/oauth2", tags=["oauth2"])

# Third-party login endpoints
router.include_router(third_router, prefix="/oauth2/third", tags=["third-party"])
