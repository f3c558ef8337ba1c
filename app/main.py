from contextlib import asynccontextmanager
from typing import Optional, Tuple
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

# Load environment variables as early as possible
load_dotenv()

from .core.config import Settings, get_settings
from .application.ports.ai_provider import AIProvider
from .application.ports.analysis_repo import AnalysisStore
from .application.ports.rate_limiter import RateLimiter
from .application.ports.user_repo import UserRepository
from .application.services.ai_response_service import AIResponseService
from .application.services.analysis_service import AnalysisService
from .application.services.fallback import FallbackGenerator
from .application.services.profile_service import ProfileService
from .exceptions import http_exception_handler, validation_exception_handler
from .middleware import (
    ErrorHandlingMiddleware,
    LoggingMiddleware,
    RateLimitMiddleware,
    RequestSizeLimitMiddleware,
    SecurityMiddleware,
)
from .routers import chat_router, design_router, startup_router, users_router
from .schemas.common.common import HealthResponse

logger = logging.getLogger(__name__)

_DEFAULT = object()


def build_ai_provider(settings: Settings) -> Optional[AIProvider]:
    if settings.simulation_mode:
        logger.warning("GEMINI_API_KEY not set. Using simulation mode for AI responses.")
        return None
    from .infrastructure.ai.gemini_provider import GeminiProvider
    return GeminiProvider(settings)


def build_persistence(settings: Settings) -> Tuple[Optional[AnalysisStore], Optional[UserRepository], object]:
    """Return (analysis store, user repository, SQL engine or None)."""
    backend = settings.PERSISTENCE_BACKEND.lower()
    if backend == "none":
        logger.info("Persistence disabled")
        return None, None, None
    if backend == "firestore":
        from .infrastructure.persistence.firestore.firebase_app import firestore_client
        from .infrastructure.persistence.firestore.analysis_repository_firestore import FirestoreAnalysisStore
        from .infrastructure.persistence.firestore.user_repository_firestore import FirestoreUserRepository
        client = firestore_client(settings)
        if client is None:
            logger.warning("Firestore unavailable; persistence disabled")
            return None, None, None
        return FirestoreAnalysisStore(client), FirestoreUserRepository(client), None
    if backend == "sql":
        from .db.session import build_engine
        from .infrastructure.persistence.sqlalchemy.repositories.analysis_repository_sql import SqlAnalysisStore
        from .infrastructure.persistence.sqlalchemy.repositories.user_repository_sql import SqlUserRepository
        engine = build_engine(settings)
        return SqlAnalysisStore(engine), SqlUserRepository(engine), engine
    raise ValueError(f"Unknown PERSISTENCE_BACKEND: {settings.PERSISTENCE_BACKEND!r}")


def build_rate_limiter(settings: Settings) -> RateLimiter:
    if settings.REDIS_URL:
        from .infrastructure.rate_limit.redis_rate_limiter import RedisRateLimiter
        logger.info("Using Redis rate limiting")
        return RedisRateLimiter(url=settings.REDIS_URL)
    from .infrastructure.rate_limit.memory_rate_limiter import InMemoryRateLimiter
    return InMemoryRateLimiter()


def create_app(
    settings: Optional[Settings] = None,
    ai_provider=_DEFAULT,
    store=_DEFAULT,
    user_repo=_DEFAULT,
    rate_limiter: Optional[RateLimiter] = None,
    fallback: Optional[FallbackGenerator] = None,
) -> FastAPI:
    """Build the API with every collaborator wired explicitly.

    Collaborators left at their default are built from ``settings``; pass
    ``None`` for ``ai_provider`` to force simulation mode or for ``store`` /
    ``user_repo`` to disable persistence.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
    )

    engine = None
    if store is _DEFAULT or user_repo is _DEFAULT:
        built_store, built_users, engine = build_persistence(settings)
        store = built_store if store is _DEFAULT else store
        user_repo = built_users if user_repo is _DEFAULT else user_repo
    if ai_provider is _DEFAULT:
        ai_provider = build_ai_provider(settings)

    ai_service = AIResponseService(
        ai_provider=ai_provider,
        fallback=fallback or FallbackGenerator.seeded(settings.FALLBACK_SEED),
        allowed_image_types=list(settings.ALLOWED_IMAGE_TYPES),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME}...")
        app.state.db_init_ok = True
        app.state.db_init_error = None
        if engine is not None:
            try:
                from .db.session import create_db_and_tables
                create_db_and_tables(engine)
                logger.info("Database initialized successfully")
            except Exception as e:
                # Do not crash the app; report via health endpoint
                app.state.db_init_ok = False
                app.state.db_init_error = str(e)
                logger.exception("Database initialization failed")
        yield
        logger.info(f"Shutting down {settings.APP_NAME}...")
        if engine is not None:
            engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=("/docs" if settings.DOCS_ENABLED else None),
        redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
        openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None),
    )

    app.state.analysis_service = AnalysisService(ai=ai_service, store=store)
    app.state.profile_service = ProfileService(user_repo=user_repo)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Add middleware (last added runs first)
    if settings.RATE_LIMIT_PER_MINUTE > 0:
        app.add_middleware(
            RateLimitMiddleware,
            limiter=rate_limiter or build_rate_limiter(settings),
            per_minute=settings.RATE_LIMIT_PER_MINUTE,
        )
    app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)
    app.add_middleware(SecurityMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlingMiddleware, debug=settings.DEBUG)

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)

    # Add CORS middleware
    origins = settings.allowed_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(startup_router.router)
    app.include_router(design_router.router)
    app.include_router(chat_router.router)
    app.include_router(users_router.router)

    @app.get("/api/health", response_model=HealthResponse)
    def health_check():
        return {"status": "ok"}

    @app.get("/api/health/detailed")
    def health_detailed():
        return {
            "status": "ok" if getattr(app.state, "db_init_ok", True) else "degraded",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "ai": "simulation" if ai_service.simulation_mode else "gemini",
            "persistence": settings.PERSISTENCE_BACKEND if store is not None else "disabled",
            "database": {
                "ok": getattr(app.state, "db_init_ok", True),
                "error": getattr(app.state, "db_init_error", None),
            },
        }

    return app


app = create_app()


def run(settings: Optional[Settings] = None) -> None:
    import uvicorn
    settings = settings or get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        workers=1,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
