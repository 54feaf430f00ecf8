"""Orchestrates validation, audio persistence and backend forwarding."""

import logging
from typing import Any

from stt_proxy.domain import TranscribeParams
from stt_proxy.exceptions import RequestValidationFailed, StorageError
from stt_proxy.interfaces import ArtifactStore, UpstreamClient

logger = logging.getLogger(__name__)

AUDIO_FILE_REQUIRED = "Audio file is required"
TEXT_REQUIRED = "Text field is required and cannot be empty"
DEFAULT_LANGUAGE = "auto"
DEFAULT_TARGET_LANGUAGE = "en"


def parse_flag(value: str | None, default: bool) -> bool:
    """Parses a query flag: absent uses the default, present is ``value == "true"``."""
    if value is None:
        return default
    return value == "true"


def _require_text(text: Any) -> str:
    if not isinstance(text, str) or not text.strip():
        raise RequestValidationFailed(TEXT_REQUIRED)
    return text


class ProxyHandler:
    """
    Runs each operation as Validate -> (Persist) -> Forward -> Shape.

    Input validation failures are raised as ``RequestValidationFailed``
    before any I/O. Every other failure propagates unchanged to the error
    normalizer, except storage failures during transcription, which only
    drop the resource URL.
    """

    def __init__(self, store: ArtifactStore, upstream: UpstreamClient):
        self._store = store
        self._upstream = upstream

    async def health(self) -> Any:
        return await self._upstream.check_health()

    async def transcribe(
        self,
        buffer: bytes | None,
        filename: str | None,
        content_type: str | None,
        language: str | None = None,
        enable_word_timestamps: str | None = None,
        enable_diarization: str | None = None,
        base_url: str | None = None,
    ) -> dict[str, Any]:
        """
        Persists the uploaded audio (best effort) and forwards it for transcription.

        Args:
            buffer: Uploaded audio bytes.
            filename: Original upload filename.
            content_type: Declared MIME type of the upload.
            language: Language hint, ``"auto"`` when absent.
            enable_word_timestamps: Raw query flag, defaults to true.
            enable_diarization: Raw query flag, defaults to false.
            base_url: Public base URL of this service for the resource URL.

        Returns:
            The backend response fields plus ``resource_url``.

        Raises:
            RequestValidationFailed: If no audio was uploaded.
            UpstreamError: If the backend call fails.
        """
        if not buffer:
            raise RequestValidationFailed(AUDIO_FILE_REQUIRED)

        original_filename = filename or "audio"
        params = TranscribeParams(
            language=language or DEFAULT_LANGUAGE,
            enable_word_timestamps=parse_flag(enable_word_timestamps, True),
            enable_diarization=parse_flag(enable_diarization, False),
        )

        logger.info(
            "Received transcription request",
            extra={
                "file_name": original_filename,
                "content_type": content_type,
                "size": len(buffer),
                "language": params.language,
            },
        )

        saved_filename = None
        try:
            saved_filename = await self._store.persist(buffer, original_filename, content_type)
        except StorageError as e:
            logger.warning(
                "Failed to save audio file, continuing with transcription",
                extra={"error": str(e), "cause": repr(getattr(e, "cause", None))},
            )

        result = await self._upstream.transcribe(buffer, original_filename, content_type, params)

        # Non-object backend bodies are nested under "result".
        response = dict(result) if isinstance(result, dict) else {"result": result}
        response["resource_url"] = self._store.resolve_url(saved_filename, base_url)
        return response

    async def translate(
        self,
        text: Any,
        source_language: str | None = None,
        target_language: str | None = None,
    ) -> Any:
        """Forwards text for translation into all supported languages.

        ``target_language`` is deprecated: the backend always returns every
        language, the value is still forwarded for older backends.
        """
        text = _require_text(text)
        return await self._upstream.translate(
            text,
            source_language or None,
            target_language or DEFAULT_TARGET_LANGUAGE,
        )

    async def detect_language(self, text: Any) -> Any:
        text = _require_text(text)
        return await self._upstream.detect_language(text)
