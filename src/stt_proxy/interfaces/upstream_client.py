"""Abstract interface for the speech backend."""

from abc import ABC, abstractmethod
from typing import Any

from stt_proxy.domain import TranscribeParams


class UpstreamClient(ABC):
    """Abstract base class for speech backend clients.

    Every operation returns the backend's JSON body unchanged and raises an
    ``UpstreamError`` subclass on failure.
    """

    @abstractmethod
    async def check_health(self) -> Any:
        """Returns the backend health document."""

    @abstractmethod
    async def transcribe(
        self,
        buffer: bytes,
        filename: str,
        content_type: str | None,
        params: TranscribeParams,
    ) -> Any:
        """
        Sends audio for transcription.

        Args:
            buffer: Raw audio bytes.
            filename: Original filename sent with the multipart part.
            content_type: MIME type of the audio part.
            params: Optional query parameters; None values are omitted.
        """

    @abstractmethod
    async def translate(
        self,
        text: str,
        source_language: str | None,
        target_language: str,
    ) -> Any:
        """Translates text into every language the backend supports."""

    @abstractmethod
    async def detect_language(self, text: str) -> Any:
        """Detects the language of a text."""

    async def aclose(self) -> None:
        """Releases network resources."""
