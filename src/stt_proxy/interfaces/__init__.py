"""Abstract interfaces for infrastructure dependencies."""

from .artifact_store import ArtifactStore
from .upstream_client import UpstreamClient

__all__ = ["ArtifactStore", "UpstreamClient"]
