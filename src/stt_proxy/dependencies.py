"""FastAPI dependency injection configuration.

Instances are built once in ``create_app`` and stored on ``app.state``; the
providers below only look them up, so tests can construct an app around
fake stores and backends.
"""

from fastapi import Request

from stt_proxy.config import AppConfig
from stt_proxy.handlers import ProxyHandler
from stt_proxy.interfaces import ArtifactStore


def get_config(request: Request) -> AppConfig:
    """Returns the application configuration."""
    return request.app.state.config


def get_store(request: Request) -> ArtifactStore:
    """Returns the configured artifact store."""
    return request.app.state.store


def get_handler(request: Request) -> ProxyHandler:
    """Returns the request handler."""
    return request.app.state.handler
