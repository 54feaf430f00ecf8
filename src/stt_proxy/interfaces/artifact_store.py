"""Abstract interface for local audio artifact storage."""

from abc import ABC, abstractmethod

from stt_proxy.domain import StoredArtifact


class ArtifactStore(ABC):
    """Abstract base class for audio artifact storage backends."""

    @abstractmethod
    async def persist(
        self,
        buffer: bytes,
        original_filename: str,
        content_type: str | None = None,
    ) -> str | None:
        """
        Persists an uploaded audio buffer under a newly generated filename.

        Args:
            buffer: Raw uploaded bytes.
            original_filename: Client-supplied filename, used for the extension.
            content_type: Declared MIME type of the upload.

        Returns:
            The generated filename, or None when saving is disabled.

        Raises:
            StorageWriteError: If the write fails.
        """

    @abstractmethod
    def resolve_url(self, filename: str | None, base_url: str | None = None) -> str | None:
        """
        Builds the public URL of a stored artifact.

        Returns:
            ``<base_url>/audio/<filename>``, or None for an empty filename.
        """

    @abstractmethod
    def list_artifacts(self) -> list[StoredArtifact]:
        """
        Lists stored audio files, newest first.

        Raises:
            StorageListError: If the storage directory cannot be read.
        """

    @abstractmethod
    def get_metadata(self, filename: str) -> StoredArtifact | None:
        """Returns metadata for a stored file, or None if it does not exist."""

    @abstractmethod
    def delete(self, filename: str) -> None:
        """Deletes a stored file. Best effort: failures are logged, never raised."""
