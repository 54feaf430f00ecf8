"""Transcription, translation and language detection endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Request, UploadFile

from stt_proxy.config import AppConfig
from stt_proxy.dependencies import get_config, get_handler
from stt_proxy.exceptions import RequestValidationFailed
from stt_proxy.handlers import ProxyHandler
from stt_proxy.request_models import DetectLanguageRequest, TranslateRequest

router = APIRouter(prefix="/v1", tags=["speech"])

ConfigDep = Annotated[AppConfig, Depends(get_config)]
HandlerDep = Annotated[ProxyHandler, Depends(get_handler)]

ALLOWED_MIME_TYPES = (
    "audio/wav",
    "audio/wave",
    "audio/x-wav",
    "audio/mpeg",
    "audio/mp3",
    "audio/mp4",
    "audio/m4a",
    "audio/aac",
    "audio/flac",
    "audio/ogg",
    "audio/vorbis",
    "audio/opus",
    "audio/webm",
    "video/webm",
    "video/mp4",
    "audio/aiff",
    "audio/x-aiff",
    "audio/amr",
    "application/octet-stream",
)


def is_allowed_content_type(content_type: str | None) -> bool:
    """Accepts the allow-list, any ``audio/*`` type, or a missing type."""
    if not content_type:
        return True
    mime = content_type.split(";")[0].strip().lower()
    return mime in ALLOWED_MIME_TYPES or mime.startswith("audio/")


async def _read_upload(upload: UploadFile | None, config: AppConfig) -> bytes | None:
    """Validates the upload's type and size and returns its bytes."""
    if upload is None:
        return None

    if not is_allowed_content_type(upload.content_type):
        raise RequestValidationFailed(
            f"Unsupported file type: {upload.content_type}. "
            f"Supported types: {', '.join(ALLOWED_MIME_TYPES)}"
        )

    max_bytes = config.audio.max_file_size_bytes
    too_large = RequestValidationFailed(
        "File size exceeds maximum allowed size of "
        f"{config.audio.max_file_size_mb} MB"
    )
    if upload.size is not None and upload.size > max_bytes:
        raise too_large

    buffer = await upload.read()
    if len(buffer) > max_bytes:
        raise too_large
    return buffer


@router.post("/transcribe")
async def transcribe(
    request: Request,
    handler: HandlerDep,
    config: ConfigDep,
    audio_file: Annotated[UploadFile | None, File()] = None,
    language: str | None = None,
    enable_word_timestamps: str | None = None,
    enable_diarization: str | None = None,
) -> dict[str, Any]:
    """
    Transcribes an uploaded audio file.

    Saves the upload locally when enabled and returns the backend's
    transcription fields plus ``resource_url``.
    """
    buffer = await _read_upload(audio_file, config)
    return await handler.transcribe(
        buffer,
        audio_file.filename if audio_file else None,
        audio_file.content_type if audio_file else None,
        language=language,
        enable_word_timestamps=enable_word_timestamps,
        enable_diarization=enable_diarization,
        base_url=str(request.base_url),
    )


@router.post("/translate")
async def translate(handler: HandlerDep, body: TranslateRequest | None = None) -> Any:
    """Translates text into every language the backend supports."""
    body = body or TranslateRequest()
    return await handler.translate(body.text, body.source_language, body.target_language)


@router.post("/detect-language")
async def detect_language(
    handler: HandlerDep, body: DetectLanguageRequest | None = None
) -> Any:
    """Detects the language of a text."""
    return await handler.detect_language(body.text if body else None)
