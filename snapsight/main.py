# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional
import errno
import logging
import socket

# External package imports
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

# Local application imports
from .api.v1 import photo_router, uploads_router
from .api.v1.errors import error_response
from .core.config import get_settings
from .di.container import reset_container
from .infrastructure.db.mongo_connection import connect_to_database, close_database_connection

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    
    Connects to MongoDB at startup. A failed connection is logged and the
    app keeps serving; database-backed endpoints then answer 500 until the
    server is reachable.
    """
    try:
        await connect_to_database()
    except Exception as e:
        logger.error(f"Error connecting to MongoDB: {e}")
    
    yield
    
    try:
        close_database_connection()
    except Exception as e:
        logger.error(f"Error closing MongoDB connection: {e}", exc_info=True)
    reset_container()
    
    logger.info("Application shutdown complete")


async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Malformed requests get the same JSON error shape as everything else"""
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")


async def handle_unexpected_error(request: Request, exc: Exception):
    """Unhandled exceptions become a 500 with the standard error body"""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.
    
    This function sets up the FastAPI application with:
    - Environment variable loading
    - CORS middleware configuration
    - API route registration
    - Gallery page (static files) at "/"
    
    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path.cwd() / ".env"
    load_dotenv(env_path)
    
    settings = get_settings()
    
    # Create FastAPI app
    application = FastAPI(
        title="SnapSight API",
        version="1.0.0",
        description="Photo capture, AI object detection and gallery",
        lifespan=lifespan
    )
    
    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    application.add_exception_handler(RequestValidationError, handle_validation_error)
    application.add_exception_handler(Exception, handle_unexpected_error)
    
    # Register API routers
    application.include_router(photo_router, prefix="/api")
    application.include_router(uploads_router)
    
    # Gallery client; mounted last so API routes take precedence
    public_dir = Path(settings.public_dir)
    if public_dir.is_dir():
        application.mount("/", StaticFiles(directory=str(public_dir), html=True), name="public")
    else:
        logger.warning(f"Public directory {public_dir} not found; gallery page disabled")
    
    return application


def find_available_port(host: str, start_port: int, attempts: int) -> int:
    """
    Find the first port at or above start_port that can be bound.
    
    Raises:
        RuntimeError: If no port in the searched range is free
        OSError: For bind errors other than "address in use"
    """
    for port in range(start_port, start_port + max(1, attempts)):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
            try:
                probe.bind((host, port))
            except OSError as e:
                if e.errno != errno.EADDRINUSE:
                    raise
                logger.info(f"Port {port} is busy, trying port {port + 1}...")
                continue
        return port
    raise RuntimeError(
        f"No available port in range {start_port}-{start_port + max(1, attempts) - 1}"
    )


def run(port: Optional[int] = None) -> None:
    """Console entry point: serve the app on the first free port"""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    
    available_port = find_available_port(
        settings.host,
        port or settings.port,
        settings.port_search_limit,
    )
    logger.info(f"Server running on http://localhost:{available_port}")
    uvicorn.run(app, host=settings.host, port=available_port)


# Create application instance
app = create_application()


if __name__ == "__main__":
    run()
