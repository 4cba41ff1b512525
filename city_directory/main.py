import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from city_directory.api.errors import register_exception_handlers
from city_directory.api.v1.routes.cities import router as cities_router
from city_directory.api.v1.routes.health import router as health_router
from city_directory.config import get_settings
from city_directory.core.database_init import initialize_database
from city_directory.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    logger.info("Starting up application...")

    if get_settings().USE_DB_STORE:
        # Keep serving even without a database; requests report 502 until it is back
        initialize_database()

    yield

    # Shutdown
    logger.info("Shutting down application...")


def hello():
    """Smoke-test endpoint."""
    logger.info("Hello logs!")
    return "Hello from the city directory!"


def create_app() -> FastAPI:
    """Create FastAPI application and include routers."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_TITLE,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(cities_router, prefix="/api/v1")
    app.include_router(health_router, prefix="/api/v1")
    app.add_api_route("/hello", hello, methods=["GET"], response_class=PlainTextResponse)
    return app


app = create_app()
