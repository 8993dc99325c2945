import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from contextlib import asynccontextmanager

from filmorate_api.core.logger import setup_json_logging, shutdown_logging
from filmorate_api.core.sentry import init_sentry
from filmorate_api.core.config import settings
from filmorate_api.core.middleware import RequestContextMiddleware
from filmorate_api.dependencies import build_storage
from filmorate_api.services.reference_service import ReferenceData

from filmorate_api.api.v1.films import router as films_router
from filmorate_api.api.v1.users import router as users_router
from filmorate_api.api.v1.reference import router as reference_router
from filmorate_api.api.v1.debug import include_debug_routes

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1) логи до всего
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    # 2) хранилище и справочники — на всё время жизни приложения
    app.state.storage = await build_storage()
    app.state.reference = ReferenceData()
    log.info("storage_ready", extra={"backend": settings.storage_backend})

    try:
        yield
    finally:
        app.state.storage.close()
        shutdown_logging()


app = FastAPI(title="Filmorate", lifespan=lifespan)

# наш trace_id + access JSON
app.add_middleware(RequestContextMiddleware)

# приглушим штатный uvicorn-access, чтобы не было дублей
logging.getLogger("uvicorn.access").setLevel("WARNING")

include_debug_routes(app)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.error("unhandled_error", exc_info=exc,
              extra={"path": request.url.path})
    return JSONResponse(status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                        content={"detail": "internal_error"})


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(films_router)
app.include_router(users_router)
app.include_router(reference_router)
