from contextlib import asynccontextmanager
from datetime import datetime, timezone
from inspect import isawaitable
from typing import cast

from fastapi import FastAPI, APIRouter, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ferrecloud.core.settings import settings
from ferrecloud.core.logger import logger
from ferrecloud.core.errors import AppError
from ferrecloud.v1_0.v1_router import v1_router
from ferrecloud.app_containers import ApplicationContainer
from ferrecloud.storage.database import async_session, dispose_engine
from ferrecloud.v1_0.routers import realtime_router
API_PREFIX = settings.API_PREFIX


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = cast(ApplicationContainer, app.state.container)
    ret = container.init_resources()
    if isawaitable(ret):
        await ret
    logger.info("%s %s starting env=%s", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)
    try:
        yield
    finally:
        logger.info("%s shutdown", settings.APP_NAME)
        ret = container.shutdown_resources()
        if isawaitable(ret):
            await ret
        await dispose_engine()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("[%s] %s %s -> %s", exc.code, request.method, request.url.path, exc.message)
    else:
        logger.info("[%s] %s %s -> %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "[unhandled] %s %s -> %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": {"error": str(exc)} if settings.DEBUG else {},
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        },
    )


def create_app() -> FastAPI:
    container = ApplicationContainer()
    container.db_session.override(async_session)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        openapi_url=f"{API_PREFIX}/openapi.json",
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
        lifespan=lifespan,
    )

    app.state.container = container
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    origins = settings.CORS_ORIGINS_LIST
    # wildcard + credenciales no legal en CORS
    allow_credentials = "*" not in origins
    logger.info("CORS origins=%s allow_credentials=%s", origins, allow_credentials)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    base_router = APIRouter(prefix=API_PREFIX)
    base_router.include_router(v1_router)

    @base_router.get("/", tags=["health"])
    async def root():
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": f"{API_PREFIX}/docs",
            "endpoints": {
                "suppliers": f"{API_PREFIX}/suppliers",
                "products": f"{API_PREFIX}/products",
                "import_templates": f"{API_PREFIX}/supplier-import-templates",
                "price_updates": f"{API_PREFIX}/price-updates",
                "realtime": f"{API_PREFIX}/v1/ws/realtime",
            },
        }

    @base_router.get("/ready", tags=["health"])
    async def ready():
        return {"message": "ready", "env": settings.APP_ENV}

    app.include_router(base_router)
    app.include_router(realtime_router.router, prefix=API_PREFIX)

    return app


app = create_app()
