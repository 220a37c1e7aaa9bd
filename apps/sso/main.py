"""SSO API Application Entry Point.

OAuth2 authorization code + PKCE 교환 서비스입니다.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from apps.sso.presentation.http.controllers import root_router
from apps.sso.presentation.http.errors import register_exception_handlers
from apps.sso.setup.config import Settings, get_settings
from apps.sso.setup.dependencies import Container, build_container
from apps.sso.setup.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, container: Container | None = None) -> FastAPI:
    """FastAPI 애플리케이션 팩토리.

    Args:
        settings: 설정 (생략 시 환경변수에서 로드)
        container: 미리 조립된 Container (테스트용, 생략 시 lifespan에서 조립)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """애플리케이션 생명주기 관리."""
        # Startup
        logger.info("Starting SSO API", extra={"environment": settings.environment})
        app.state.container = container or build_container(settings)

        yield

        # Shutdown
        logger.info("Shutting down SSO API")
        await app.state.container.aclose()

    app = FastAPI(
        title=settings.app_name,
        description="OAuth2 Authorization Code + PKCE 교환 서비스",
        version=settings.service_version,
        lifespan=lifespan,
    )

    # 예외 핸들러 등록
    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(root_router)

    return app


def run() -> None:
    """로컬 실행 진입점."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
