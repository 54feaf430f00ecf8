"""httpx implementation of the UpstreamClient interface."""

import logging
from typing import Any

import httpx

from stt_proxy.domain import TranscribeParams
from stt_proxy.exceptions import (
    UpstreamRequestError,
    UpstreamResponseError,
    UpstreamUnreachableError,
)
from stt_proxy.interfaces import UpstreamClient

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 300.0


class HttpUpstreamClient(UpstreamClient):
    """Forwards requests to the speech backend over HTTP.

    One call per operation, no retries. Failures are translated into
    ``UpstreamResponseError`` (backend answered non-2xx),
    ``UpstreamUnreachableError`` (no response) or ``UpstreamRequestError``
    (the request failed locally before or while being sent).
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def check_health(self) -> Any:
        return await self._send("health", "GET", "/health")

    async def transcribe(
        self,
        buffer: bytes,
        filename: str,
        content_type: str | None,
        params: TranscribeParams,
    ) -> Any:
        files = {
            "audio_file": (
                filename or "audio",
                buffer,
                content_type or "application/octet-stream",
            )
        }
        return await self._send(
            "transcribe",
            "POST",
            "/v1/transcribe",
            files=files,
            params=_query_params(params),
        )

    async def translate(
        self,
        text: str,
        source_language: str | None,
        target_language: str,
    ) -> Any:
        payload = {
            "text": text,
            "source_language": source_language or None,
            "target_language": target_language,
        }
        return await self._send("translate", "POST", "/v1/translate", json=payload)

    async def detect_language(self, text: str) -> Any:
        return await self._send(
            "detect-language", "POST", "/v1/detect-language", json={"text": text}
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, operation: str, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.UnsupportedProtocol as e:
            logger.error(
                "Backend request could not be sent",
                extra={"operation": operation, "error": str(e)},
            )
            raise UpstreamRequestError(operation, e) from e
        except httpx.TransportError as e:
            logger.error(
                "Backend not reachable",
                extra={
                    "operation": operation,
                    "backend_url": self._base_url,
                    "error": repr(e),
                },
            )
            raise UpstreamUnreachableError(operation, e) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(
                "Backend request could not be sent",
                extra={"operation": operation, "error": str(e)},
            )
            raise UpstreamRequestError(operation, e) from e

        if response.is_error:
            raise self._response_error(operation, response)

        try:
            return response.json()
        except ValueError as e:
            logger.error(
                "Backend returned invalid JSON",
                extra={"operation": operation, "status_code": response.status_code},
            )
            raise UpstreamRequestError(
                operation, e, message="Python backend returned an invalid response"
            ) from e

    def _response_error(
        self, operation: str, response: httpx.Response
    ) -> UpstreamResponseError:
        try:
            body = response.json()
        except ValueError:
            body = None

        payload = body if isinstance(body, dict) else None
        message = None
        if payload is not None:
            message = _first_text(payload.get("detail"), payload.get("error"))
        if message is None:
            message = f"Python backend request failed with status {response.status_code}"

        logger.error(
            "Backend returned an error",
            extra={
                "operation": operation,
                "status_code": response.status_code,
                "detail": message,
            },
        )
        return UpstreamResponseError(
            operation,
            message,
            status_code=response.status_code,
            payload=payload,
        )


def _query_params(params: TranscribeParams) -> dict[str, str]:
    query = {}
    if params.language:
        query["language"] = params.language
    if params.enable_word_timestamps is not None:
        query["enable_word_timestamps"] = str(params.enable_word_timestamps).lower()
    if params.enable_diarization is not None:
        query["enable_diarization"] = str(params.enable_diarization).lower()
    return query


def _first_text(*values: Any) -> str | None:
    for value in values:
        if isinstance(value, str) and value:
            return value
    return None
