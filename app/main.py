import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from .config import ALLOWED_ORIGINS, API_PREFIX, LOG_LEVEL, SEED_ON_STARTUP
from .database import create_db_engine, create_session_factory, init_db
from .domain.activities import router as activities_router
from .domain.schedules import router as schedules_router
from .domain.tasks import router as tasks_router
from .domain.visits import router as visits_router
from .errors import register_exception_handlers
from .middleware import RequestContextMiddleware

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def create_app(engine: Optional[Engine] = None, seed: Optional[bool] = None) -> FastAPI:
    """
    Build the API application.

    The engine (and the session factory built from it) is owned by the app and
    reached by request handlers through ``get_db``; tests pass their own.
    """
    engine = engine or create_db_engine()
    seed_on_startup = SEED_ON_STARTUP if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application starting up...")
        try:
            init_db(engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            # Ignore "already exists" errors from race conditions between workers
            error_msg = str(e)
            if "already exists" in error_msg or "duplicate key" in error_msg:
                logger.info("Database tables already exist (created by another worker)")
            else:
                logger.error(f"Failed to create database tables: {e}")
                raise

        if seed_on_startup:
            from .seed import seed_database

            seed_database(app.state.session_factory)

        yield
        logger.info("Application shutting down...")
        engine.dispose()

    app = FastAPI(title="Visit Tracker API", version="1.0.0", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    register_exception_handlers(app)

    app.add_middleware(RequestContextMiddleware, exclude_paths=["/health"])

    # Log CORS configuration for debugging
    logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Routes
    app.include_router(schedules_router, prefix=API_PREFIX)
    app.include_router(visits_router, prefix=API_PREFIX)
    app.include_router(tasks_router, prefix=API_PREFIX)
    app.include_router(activities_router, prefix=API_PREFIX)

    @app.get("/")
    def root():
        return {"message": "Visit Tracker API is running"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app
