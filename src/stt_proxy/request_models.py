"""Request bodies for the JSON endpoints."""

from pydantic import BaseModel


class TranslateRequest(BaseModel):
    """Text translation request.

    ``target_language`` is deprecated; the backend returns every supported
    language regardless of its value.
    """

    text: str | None = None
    source_language: str | None = None
    target_language: str | None = None


class DetectLanguageRequest(BaseModel):
    text: str | None = None
