
import asyncio
import logging
import os
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from design_agent.config import Settings, settings as default_settings
from design_agent.db.session import make_engine, make_session_factory, init_db, backend_name
from design_agent.db.store import DocumentStore
from design_agent.generation.providers import GenerationService, Provider
from design_agent.middleware.ratelimit import RateLimitMiddleware, client_ip_key
from design_agent.middleware.security import SecurityHeadersMiddleware, BodySizeLimitMiddleware, SECURITY_HEADERS
from design_agent.schemas.generation import HealthOut
from design_agent.uploads.images import ensure_upload_dirs
from design_agent.utils.security import CredentialService
from design_agent.auth.routes import router as auth_router
from design_agent.projects.routes import router as projects_router
from design_agent.designs.routes import router as designs_router
from design_agent.generation.routes import router as ai_router
from design_agent.admin.routes import router as admin_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def make_fatal_handler(exit=os._exit):
    """Loop exception handler that logs the error and terminates the process."""

    def _handler(loop: asyncio.AbstractEventLoop, context: dict):
        logger.critical(
            "Unhandled asynchronous error: %s", context.get("message"),
            exc_info=context.get("exception"),
        )
        for handler in logging.getLogger().handlers:
            handler.flush()
        exit(1)

    return _handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    # failures here abort startup
    ensure_upload_dirs(app.state.settings.upload_path)
    init_db(app.state.engine)
    if app.state.settings.fatal_async_errors:
        asyncio.get_running_loop().set_exception_handler(make_fatal_handler())
    logger.info("Database: %s", app.state.database)
    yield
    app.state.engine.dispose()


def error_headers(request: Request, allowed_origins: list[str]) -> dict[str, str]:
    # 500s are rendered outside the middleware stack, so repeat its headers here
    headers = dict(SECURITY_HEADERS)
    origin = request.headers.get("origin")
    if origin and ("*" in allowed_origins or origin in allowed_origins):
        headers["Access-Control-Allow-Origin"] = origin
        headers["Access-Control-Allow-Credentials"] = "true"
        headers["Vary"] = "Origin"
    return headers


def create_app(settings: Settings | None = None, generation: GenerationService | None = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    engine = make_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.database = backend_name(engine)
    app.state.store = DocumentStore(make_session_factory(engine))
    app.state.credentials = CredentialService(settings.secret_key, settings.access_token_expire_minutes)
    app.state.generation = generation or GenerationService.from_settings(settings)

    app.add_middleware(
        RateLimitMiddleware,
        window_seconds=settings.rate_limit_window_seconds,
        max_calls=settings.rate_limit_max_calls,
        key_func=client_ip_key,
        include_path_prefixes=("/api",),
    )
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_size)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(designs_router)
    app.include_router(ai_router)
    app.include_router(admin_router)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Something went wrong!"},
            headers=error_headers(request, settings.cors_origin_list),
        )

    @app.get("/api/health", response_model=HealthOut, tags=["health"])
    def health():
        return HealthOut(
            message="Design Agent API is running",
            database=app.state.database,
            ai_providers=[p.value for p in Provider],
            status="healthy",
        )

    return app


app = create_app()


def main() -> None:
    import uvicorn

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    logger.info("Server running on port %s", default_settings.port)
    try:
        uvicorn.run("design_agent.main:app", host=default_settings.host, port=default_settings.port)
    except Exception:
        logger.critical("Failed to start server", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
