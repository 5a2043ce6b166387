# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional
import asyncio
import logging

# External package imports
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

# Local application imports
from .api.middleware import RateLimitMiddleware
from .api.v1 import health_router, users_router
from .core.config import Settings, get_settings
from .core.exceptions import CredentialError, DatabaseConnectionError
from .di.container import DIContainer, configure_container, reset_container
from .infrastructure.db.mongo_connection import close_with_timeout, connect_with_retries
from .infrastructure.secrets.vault_credentials import VaultCredentialProvider

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Root logger: DEBUG in debug mode, INFO in release mode"""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
    )
    # Driver heartbeats are noisy at DEBUG
    logging.getLogger("pymongo").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Startup is sequential: credentials from Vault, MongoDB connection with
    retries, then dependency wiring. Requests are only served once the
    connection has been verified. Any startup failure aborts the process.
    """
    settings: Settings = app.state.settings

    try:
        credential_provider = VaultCredentialProvider.from_settings(settings)

        async def fetch_credentials():
            # hvac is blocking
            return await asyncio.to_thread(credential_provider.fetch_database_credentials)

        connection = await connect_with_retries(fetch_credentials, settings)
    except (CredentialError, DatabaseConnectionError) as e:
        logger.critical(f"Startup failed: {e.message}")
        raise

    configure_container(DIContainer(connection, settings))
    logger.info("Users API ready")

    yield

    # Shutdown: stop resolving dependencies, then close the client
    reset_container()
    await close_with_timeout(connection, timeout=settings.db_shutdown_timeout)
    logger.info("Application shutdown complete")


def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTPException as {"error": <detail>}"""
    return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def request_validation_error_handler(
    _request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed JSON or wrongly typed fields are client errors (400)"""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()) if part != 'body')}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.debug(f"Invalid request body: {problems}")
    return _error_response(status.HTTP_400_BAD_REQUEST, f"Invalid request body. {problems}")


async def unhandled_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error: {exc}", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error. Something went wrong. Please try again.",
    )


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging and run mode
    - CORS and rate limiting middleware
    - Error handlers rendering {"error": ...} bodies
    - API route registration

    Args:
        settings: Settings to use (defaults to get_settings())

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = settings or get_settings()
    configure_logging(settings)

    # Create FastAPI app
    application = FastAPI(
        title="Users API",
        version="1.0.0",
        description="User CRUD service backed by MongoDB",
        debug=settings.debug,
        lifespan=lifespan
    )
    application.state.settings = settings

    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(
        RateLimitMiddleware,
        requests_per_second=settings.rate_limit_per_second,
    )

    application.add_exception_handler(HTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, request_validation_error_handler)
    application.add_exception_handler(Exception, unhandled_exception_handler)

    # Register API routers
    application.include_router(health_router)
    application.include_router(users_router, prefix="/users")

    return application


def run() -> None:
    """Serve the application with uvicorn on PORT"""
    settings = get_settings()
    uvicorn.run(
        "users_api.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


# Create application instance
app = create_application()
