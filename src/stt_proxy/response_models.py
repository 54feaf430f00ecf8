"""Response models for the STT proxy API."""

from pydantic import BaseModel

from stt_proxy.domain import StoredArtifact


class ServiceInfoResponse(BaseModel):
    """Service descriptor returned by the root endpoint."""

    service: str
    version: str
    status: str
    endpoints: dict[str, str]


class RecordingResponse(StoredArtifact, frozen=True):
    """Stored recording metadata with its public URLs."""

    url: str | None
    download_url: str | None


class RecordingListResponse(BaseModel):
    count: int
    recordings: list[RecordingResponse]
