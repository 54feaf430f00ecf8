"""Domain layer exports."""

from .models import StoredArtifact, TranscribeParams, format_file_size

__all__ = ["StoredArtifact", "TranscribeParams", "format_file_size"]
