"""Third-party Router."""

from fastapi import APIRouter

from apps.sso.presentation.http.controllers.third.authorize import router as authorize_router
from apps.sso.presentation.http.controllers.third.bind import router as bind_router
from apps.sso.presentation.http.controllers.third.callback import router as callback_router

router = APIRouter()

router.include_router(authorize_router)
router.include_router(callback_router)
router.include_router(bind_router)
