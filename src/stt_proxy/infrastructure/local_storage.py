"""Filesystem implementation of the ArtifactStore interface."""

import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from stt_proxy.domain import StoredArtifact
from stt_proxy.exceptions import StorageListError, StorageWriteError
from stt_proxy.interfaces import ArtifactStore

logger = logging.getLogger(__name__)

AUDIO_EXTENSIONS = frozenset(
    {".mp3", ".m4a", ".wav", ".aac", ".flac", ".ogg", ".opus", ".webm", ".aiff", ".amr", ".mp4"}
)

CONTENT_TYPE_EXTENSIONS = {
    "audio/wav": ".wav",
    "audio/wave": ".wav",
    "audio/x-wav": ".wav",
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/mp4": ".m4a",
    "audio/m4a": ".m4a",
    "audio/aac": ".aac",
    "audio/flac": ".flac",
    "audio/ogg": ".ogg",
    "audio/vorbis": ".ogg",
    "audio/opus": ".opus",
    "audio/webm": ".webm",
    "video/webm": ".webm",
    "video/mp4": ".mp4",
    "audio/aiff": ".aiff",
    "audio/x-aiff": ".aiff",
    "audio/amr": ".amr",
}

DEFAULT_EXTENSION = ".mp3"
RANDOM_ID_LENGTH = 8


def generate_filename(original_filename: str, content_type: str | None = None) -> str:
    """
    Generates a unique storage filename: ``<YYYY-MM-DD_HH-MM-SS>_<8 hex>.<ext>``.

    The extension is the original file's when it is a known audio extension,
    otherwise the one implied by the content type, otherwise ``.mp3``.
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H-%M-%S")
    unique_id = uuid.uuid4().hex[:RANDOM_ID_LENGTH]
    return f"{timestamp}_{unique_id}{_choose_extension(original_filename, content_type)}"


def _choose_extension(original_filename: str, content_type: str | None) -> str:
    extension = os.path.splitext(original_filename or "")[1].lower()
    if extension in AUDIO_EXTENSIONS:
        return extension
    if content_type:
        mime = content_type.split(";")[0].strip().lower()
        if mime in CONTENT_TYPE_EXTENSIONS:
            return CONTENT_TYPE_EXTENSIONS[mime]
    return DEFAULT_EXTENSION


class LocalArtifactStore(ArtifactStore):
    """Stores uploaded audio files in a flat local directory."""

    def __init__(
        self,
        storage_dir: str | Path,
        save_audio_files: bool,
        default_base_url: str,
    ):
        self._storage_dir = Path(storage_dir).resolve()
        self._save_audio_files = save_audio_files
        self._default_base_url = default_base_url

    @property
    def storage_dir(self) -> Path:
        return self._storage_dir

    @property
    def enabled(self) -> bool:
        return self._save_audio_files

    def ensure_storage_dir(self) -> None:
        """Creates the storage directory. Raises OSError if it cannot be created."""
        try:
            self._storage_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.exception(
                "Failed to create audio storage directory",
                extra={"storage_dir": str(self._storage_dir)},
            )
            raise
        logger.info(
            "Audio storage directory ready",
            extra={"storage_dir": str(self._storage_dir)},
        )

    async def persist(
        self,
        buffer: bytes,
        original_filename: str,
        content_type: str | None = None,
    ) -> str | None:
        if not self._save_audio_files:
            return None

        filename = generate_filename(original_filename, content_type)
        path = self._storage_dir / filename
        try:
            await run_in_threadpool(_write_new_file, path, buffer)
        except OSError as e:
            logger.exception(
                "Audio file save failed",
                extra={"file_name": filename, "storage_dir": str(self._storage_dir)},
            )
            raise StorageWriteError(filename, e) from e

        logger.info(
            "Audio file saved",
            extra={
                "file_name": filename,
                "original_file_name": original_filename,
                "size": len(buffer),
            },
        )
        return filename

    def resolve_url(self, filename: str | None, base_url: str | None = None) -> str | None:
        if not filename:
            return None
        base = (base_url or self._default_base_url).rstrip("/")
        return f"{base}/audio/{filename}"

    def list_artifacts(self) -> list[StoredArtifact]:
        try:
            with os.scandir(self._storage_dir) as it:
                entries = list(it)
        except FileNotFoundError:
            logger.info(
                "Audio storage directory does not exist, no recordings",
                extra={"storage_dir": str(self._storage_dir)},
            )
            return []
        except OSError as e:
            logger.exception(
                "Failed to list recordings",
                extra={"storage_dir": str(self._storage_dir)},
            )
            raise StorageListError(str(self._storage_dir), e) from e

        artifacts = []
        for entry in entries:
            if os.path.splitext(entry.name)[1].lower() not in AUDIO_EXTENSIONS:
                continue
            try:
                if not entry.is_file():
                    continue
                artifacts.append(_to_artifact(entry.name, entry.stat()))
            except OSError as e:
                logger.warning(
                    "Failed to get stats for file",
                    extra={"file_name": entry.name, "error": str(e)},
                )

        artifacts.sort(key=lambda a: a.created_at, reverse=True)
        return artifacts

    def get_metadata(self, filename: str) -> StoredArtifact | None:
        path = self._resolve_path(filename)
        if path is None:
            return None
        try:
            if not path.is_file():
                return None
            return _to_artifact(filename, path.stat())
        except OSError as e:
            logger.warning(
                "Failed to get metadata for file",
                extra={"file_name": filename, "error": str(e)},
            )
            return None

    def delete(self, filename: str) -> None:
        path = self._resolve_path(filename)
        if path is None:
            logger.warning("Refusing to delete file outside storage", extra={"file_name": filename})
            return
        try:
            path.unlink()
            logger.info("Audio file deleted", extra={"file_name": filename})
        except OSError as e:
            logger.warning(
                "Failed to delete audio file",
                extra={"file_name": filename, "error": str(e)},
            )

    def _resolve_path(self, filename: str) -> Path | None:
        """Returns the path of a file directly inside the storage dir, else None."""
        if not filename or filename in (".", ".."):
            return None
        path = self._storage_dir / filename
        if path.parent != self._storage_dir:
            return None
        return path


def _write_new_file(path: Path, buffer: bytes) -> None:
    with open(path, "xb") as f:
        f.write(buffer)


def _to_artifact(filename: str, stat: os.stat_result) -> StoredArtifact:
    created = getattr(stat, "st_birthtime", None) or stat.st_ctime
    return StoredArtifact(
        filename=filename,
        size=stat.st_size,
        created_at=datetime.fromtimestamp(created, tz=timezone.utc),
        modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
    )
