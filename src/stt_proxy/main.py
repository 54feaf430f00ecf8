"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from ddtrace import patch_all
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from stt_proxy.config import AppConfig, load_config
from stt_proxy.errors import register_error_handlers
from stt_proxy.handlers import ProxyHandler
from stt_proxy.infrastructure import HttpUpstreamClient, LocalArtifactStore
from stt_proxy.interfaces import ArtifactStore, UpstreamClient
from stt_proxy.logging import setup_logging
from stt_proxy.routes import recordings_router, service_router, speech_router

logger = logging.getLogger(__name__)


def build_store(config: AppConfig) -> LocalArtifactStore:
    """Creates the local artifact store, creating its directory when saving is enabled."""
    store = LocalArtifactStore(
        storage_dir=config.audio.storage_dir,
        save_audio_files=config.audio.save_audio_files,
        default_base_url=config.server.public_base_url,
    )
    if store.enabled:
        store.ensure_storage_dir()
    return store


def build_upstream(config: AppConfig) -> HttpUpstreamClient:
    return HttpUpstreamClient(
        base_url=config.upstream.url,
        timeout_seconds=config.upstream.timeout_seconds,
    )


def create_app(
    config: AppConfig | None = None,
    store: ArtifactStore | None = None,
    upstream: UpstreamClient | None = None,
) -> FastAPI:
    """
    Builds the application with explicitly constructed dependencies.

    Args:
        config: Settings; loaded from the environment when omitted.
        store: Artifact store; a LocalArtifactStore when omitted.
        upstream: Backend client; an HttpUpstreamClient when omitted.

    Raises:
        OSError: If saving is enabled and the storage directory cannot be created.
    """
    config = config or load_config()
    setup_logging(config.logging.level, service=config.app.name, env=config.app.env)

    store = store or build_store(config)
    upstream = upstream or build_upstream(config)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info(
            "Server started",
            extra={
                "app_name": config.app.name,
                "version": config.app.version,
                "host": config.server.host,
                "port": config.server.port,
                "backend_url": config.upstream.url,
                "env": config.app.env,
            },
        )
        yield
        await upstream.aclose()
        logger.info("Server closed")

    app = FastAPI(title=config.app.name, version=config.app.version, lifespan=lifespan)
    app.state.config = config
    app.state.store = store
    app.state.upstream = upstream
    app.state.handler = ProxyHandler(store, upstream)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    register_error_handlers(app)

    app.include_router(service_router)
    app.include_router(speech_router)
    app.include_router(recordings_router)

    if config.audio.save_audio_files:
        app.mount(
            "/audio",
            StaticFiles(directory=config.audio.storage_dir, check_dir=False),
            name="audio",
        )
        logger.info(
            "Serving audio files",
            extra={"storage_dir": config.audio.storage_dir},
        )

    return app


def run() -> None:
    """Starts the server; in-flight requests get a grace period on shutdown."""
    patch_all()

    config = load_config()
    uvicorn.run(
        "stt_proxy.main:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        timeout_graceful_shutdown=config.server.shutdown_grace_seconds,
        log_config=None,
    )


if __name__ == "__main__":
    run()
