"""Domain models for the STT proxy service."""

from datetime import datetime

from pydantic import BaseModel, computed_field

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size: int) -> str:
    """Formats a byte count for display, e.g. ``1536 -> "1.5 KB"``."""
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(_SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {_SIZE_UNITS[exponent]}"


class StoredArtifact(BaseModel, frozen=True):
    """Metadata of an audio file persisted in the storage directory."""

    filename: str
    size: int
    created_at: datetime
    modified_at: datetime

    @computed_field
    @property
    def size_formatted(self) -> str:
        return format_file_size(self.size)


class TranscribeParams(BaseModel, frozen=True):
    """Optional parameters forwarded with a transcription request.

    ``None`` means the parameter is omitted from the backend call.
    """

    language: str | None = None
    enable_word_timestamps: bool | None = None
    enable_diarization: bool | None = None
