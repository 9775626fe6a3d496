"""
Snapshot service entry point.

Run with `python -m mapbox_static.main` (host and port from BACKEND_HOST /
BACKEND_PORT) or point any ASGI server at `mapbox_static.main:app`. Startup
refuses to continue without a complete ServerConfig.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.routes import router, set_client
from .clients.snapshot import SnapshotClient
from .config import ConfigurationError, ServerConfig, load_server_config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def _exit_with_configuration_error(error: ConfigurationError):
    logger.error("-" * 60)
    logger.error(f"Cannot start the snapshot service: {error}")
    logger.error("Copy .env.example to .env and fill in every variable.")
    logger.error("-" * 60)
    sys.exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared SnapshotClient on startup and close it on shutdown."""
    try:
        config = load_server_config()
    except ConfigurationError as e:
        _exit_with_configuration_error(e)

    client = SnapshotClient(config=config.client)
    set_client(client)
    logger.info(
        f"Snapshot service {__version__} listening on {config.backend_host}:{config.backend_port}, "
        f"proxying {client.api_endpoint}"
    )

    try:
        yield
    finally:
        set_client(None)
        await client.aclose()
        logger.info("Snapshot client closed")


def _cors_origins() -> list[str]:
    # Before startup a broken config is tolerated; lifespan reports it
    try:
        return load_server_config().cors_origins
    except ConfigurationError:
        return ["*"]


def create_app(cors_origins: Optional[list[str]] = None) -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title="Static Map Snapshot API",
        description="Builds and proxies Mapbox Static API snapshots",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if cors_origins is not None else _cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix="/api")
    return app


app = create_app()


def run(config: Optional[ServerConfig] = None):
    """Serve the app with uvicorn."""
    import uvicorn

    if config is None:
        try:
            config = load_server_config()
        except ConfigurationError as e:
            _exit_with_configuration_error(e)

    uvicorn.run(
        "mapbox_static.main:app",
        host=config.backend_host,
        port=config.backend_port,
    )


if __name__ == "__main__":
    run()
