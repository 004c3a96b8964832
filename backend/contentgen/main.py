import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contentgen.api.main import api_router
from contentgen.core.config import settings
from contentgen.core.db import init_db
from contentgen.errors import AppError, BadRequest
from contentgen.generation.llm_client import LLMClient
from contentgen.storage import Storage

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "detail": exc.detail},
        headers=exc.headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=BadRequest.status_code,
        content={"code": BadRequest.code, "detail": jsonable_encoder(exc.errors())},
    )


def create_app(storage: Storage | None = None, llm: LLMClient | None = None) -> FastAPI:
    """
    Build the application. Storage and the completion client are created here unless
    passed in, and live for as long as the app does.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Injected storage is initialised and disposed by whoever built it
        app_storage = storage
        if app_storage is None:
            app_storage = Storage.from_settings()
            if app_storage.engine is not None:
                init_db(app_storage.engine)
            else:
                logger.warning("DATABASE_URL is not set; running without storage")
        app.state.storage = app_storage
        app.state.llm = llm or LLMClient()
        yield
        if storage is None:
            app_storage.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan,
    )

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
