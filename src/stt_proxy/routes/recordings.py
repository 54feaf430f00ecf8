"""Stored recording listing endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from stt_proxy.dependencies import get_store
from stt_proxy.domain import StoredArtifact
from stt_proxy.exceptions import RecordingNotFoundError
from stt_proxy.interfaces import ArtifactStore
from stt_proxy.response_models import RecordingListResponse, RecordingResponse

router = APIRouter(prefix="/api/recordings", tags=["recordings"])

StoreDep = Annotated[ArtifactStore, Depends(get_store)]


def _with_urls(
    artifact: StoredArtifact, store: ArtifactStore, base_url: str
) -> RecordingResponse:
    url = store.resolve_url(artifact.filename, base_url)
    return RecordingResponse(**artifact.model_dump(), url=url, download_url=url)


@router.get("", response_model=RecordingListResponse)
def list_recordings(request: Request, store: StoreDep) -> RecordingListResponse:
    """Returns every stored recording, newest first."""
    base_url = str(request.base_url)
    recordings = [
        _with_urls(artifact, store, base_url) for artifact in store.list_artifacts()
    ]
    return RecordingListResponse(count=len(recordings), recordings=recordings)


@router.get("/{filename}", response_model=RecordingResponse)
def get_recording(filename: str, request: Request, store: StoreDep) -> RecordingResponse:
    """Returns metadata for one stored recording."""
    artifact = store.get_metadata(filename)
    if artifact is None:
        raise RecordingNotFoundError(filename)
    return _with_urls(artifact, store, str(request.base_url))
