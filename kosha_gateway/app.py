"""FastAPI 앱 팩토리"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kosha_gateway.api import function_router, health_router
from kosha_gateway.clients.http_client import shutdown_shared_http_client
from kosha_gateway.core.config import settings
from kosha_gateway.core.exceptions import ErrorKind
from kosha_gateway.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기"""
    logger.info("Starting application...")
    if not settings.kosha_service_key:
        logger.warning("KOSHA_SERVICE_KEY is not set; search_safety_law will fail")
    logger.info("Application started")
    yield
    logger.info("Shutting down application...")
    await shutdown_shared_http_client()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 본문 검증 실패 → 400 (입력값은 응답에 포함하지 않음)"""
    logger.warning(f"[API] Invalid request body: {len(exc.errors())} error(s)")
    return JSONResponse(
        status_code=ErrorKind.BAD_REQUEST.status_code,
        content={"error": "요청 본문 형식이 올바르지 않습니다.", "error_code": ErrorKind.BAD_REQUEST.value},
    )


def create_app() -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Returns:
        FastAPI 앱 인스턴스
    """
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health_router)
    app.include_router(function_router)

    return app

# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
