"""Concrete implementations of infrastructure interfaces."""

from .http_upstream import HttpUpstreamClient
from .local_storage import LocalArtifactStore

__all__ = ["HttpUpstreamClient", "LocalArtifactStore"]
