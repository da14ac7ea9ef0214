import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard.app.config import Settings, get_settings
from taskboard.app.core.errors import StoreError, TaskError
from taskboard.app.core.logging_config import configure_logging, task_extra
from taskboard.app.deps import build_store
from taskboard.app.routers import health, tasks
from taskboard.ports.task_store import ITaskStore

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskError)
    async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
        if isinstance(exc, StoreError):
            logger.error(
                "store error on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
                extra=task_extra("request"),
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "detail": _validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def _validation_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.state.task_store
    try:
        store.init_schema()
    except StoreError as exc:
        logger.error("Database connection failed: %s", exc.message, extra=task_extra("startup"))
        raise
    logger.info("Database connected successfully", extra=task_extra("startup"))
    yield
    store.close()


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ITaskStore] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.app_log_level)

    app = FastAPI(
        title="Taskboard API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_store = store if store is not None else build_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(tasks.router)
    _register_error_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
