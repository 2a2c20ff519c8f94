# vidtube/main.py

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from vidtube.api import auth, users
from vidtube.config import Settings
from vidtube.core.log import configure_logging
from vidtube.core.media import MediaStore
from vidtube.database import Database
from vidtube.errors import ServiceError


logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status_code": status_code, "message": message, "success": False},
    )


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, "Something went wrong")
    return _error(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Builds the application with its own database and media store.
    Serve with `uvicorn vidtube.main:create_app --factory`.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    database = Database(settings)
    database.init_db()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        database.dispose()

    app = FastAPI(title="vidtube", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.media_store = MediaStore(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(auth.router)
    app.include_router(users.router)

    if settings.media_base_url.startswith("/"):
        Path(settings.media_dir).mkdir(parents=True, exist_ok=True)
        app.mount(settings.media_base_url, StaticFiles(directory=settings.media_dir), name="media")

    logger.info("vidtube app created (database=%s)", database.engine.url.render_as_string(hide_password=True))
    return app
