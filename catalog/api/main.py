"""
API 서버 메인 애플리케이션
"""

import math
from contextlib import asynccontextmanager
from typing import Optional

from argon2 import PasswordHasher
from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog import __version__
from catalog.config import Settings, get_settings
from catalog.exceptions import CatalogError
from catalog.monitoring import get_logger, global_metrics, setup_logging
from catalog.storage import BaseStorage, create_storage

from .dependencies import get_storage
from .middleware import TimingMiddleware
from .responses import failure
from .routers import auth, categories, inventory, pricing, products, variants

logger = get_logger(__name__)


def _encode_errors(errors: list) -> list:
    """검증 오류를 JSON으로 직렬화 가능한 형태로 변환 (inf/nan 입력은 문자열로)"""
    encoded = []
    for error in errors:
        value = error.get("input")
        if isinstance(value, float) and not math.isfinite(value):
            error = {**error, "input": str(value)}
        encoded.append(error)
    return jsonable_encoder(encoded)


def _validation_message(errors: list) -> str:
    """첫 번째 검증 오류로 메시지 생성"""
    if not errors:
        return "Validation Error"
    first = errors[0]
    field = first.get("loc", ["request"])[-1]
    return f"Invalid {field} value: {first.get('msg', 'invalid')}"


def register_exception_handlers(app: FastAPI, settings: Settings):
    """예외 처리기 등록"""

    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(request: Request, exc: CatalogError):
        """도메인 예외 처리"""
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None

        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {type(exc).__name__}: {exc.message}")
            error = exc.message if settings.show_error_details else None
            content = failure(exc.status_code, "Internal Server Error", error=error)
        else:
            logger.warning(f"{request.method} {request.url.path} - {exc.status_code} {exc.message}")
            content = failure(exc.status_code, exc.message, **({"details": exc.details} if exc.details else {}))

        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """HTTP 예외 처리"""
        return JSONResponse(
            status_code=exc.status_code,
            content=failure(exc.status_code, str(exc.detail), path=str(request.url.path)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """요청 검증 오류는 400으로 응답"""
        errors = _encode_errors(exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=failure(400, _validation_message(errors), errors=errors),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """처리되지 않은 예외 처리"""
        logger.exception(f"처리되지 않은 예외: {exc}")

        error = str(exc) if settings.show_error_details else None
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure(500, "Internal Server Error", error=error),
        )


def create_app(settings: Optional[Settings] = None, storage: Optional[BaseStorage] = None) -> FastAPI:
    """
    FastAPI 앱 생성

    Args:
        settings: 설정 (기본값은 전역 설정)
        storage: 저장소 (기본값은 설정의 storage_backend)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """애플리케이션 생명주기 관리"""
        setup_logging(
            log_level=settings.log_level,
            log_file=settings.log_file,
            json_logs=settings.is_production(),
        )
        logger.info(f"API 서버 시작 (env={settings.env}, storage={settings.storage_backend})")

        yield

        await app.state.storage.close()
        logger.info("API 서버 종료")

    app = FastAPI(
        title="Catalog Management API",
        description="상품, 변형, 카테고리, 재고, 할인 가격 관리 API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = storage or create_storage(settings)
    app.state.password_hasher = PasswordHasher()

    # 미들웨어 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(TimingMiddleware)

    # 라우터 등록
    prefix = settings.api_prefix
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(products.router, prefix=f"{prefix}/products", tags=["products"])
    app.include_router(variants.router, prefix=f"{prefix}/variants", tags=["variants"])
    app.include_router(categories.router, prefix=f"{prefix}/categories", tags=["categories"])
    app.include_router(inventory.router, prefix=f"{prefix}/inventory", tags=["inventory"])
    app.include_router(pricing.router, prefix=f"{prefix}/pricing", tags=["pricing"])

    register_exception_handlers(app, settings)

    @app.get("/")
    async def root():
        """API 상태 확인"""
        return {
            "name": "Catalog Management API",
            "version": __version__,
            "status": "running",
            "environment": settings.env,
            "docs": "/docs",
            "health": "/health",
        }

    @app.get("/health")
    async def health_check(storage: BaseStorage = Depends(get_storage)):
        """헬스 체크"""
        try:
            products_count = await storage.count("products")
            db_status = "healthy"
        except Exception as e:
            logger.error(f"저장소 헬스 체크 실패: {e}")
            products_count = None
            db_status = "unhealthy"

        return {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "checks": {"storage": db_status},
            "products": products_count,
            "metrics": global_metrics.get_summary(),
        }

    return app


app = create_app()


def run(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False):
    """API 서버 실행"""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    logger.info(f"API 서버 시작: http://{host}:{port}")

    uvicorn.run(
        "catalog.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
