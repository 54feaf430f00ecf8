import json

import httpx
import pytest

from stt_proxy.domain import TranscribeParams
from stt_proxy.exceptions import (
    UpstreamRequestError,
    UpstreamResponseError,
    UpstreamUnreachableError,
)
from stt_proxy.infrastructure import HttpUpstreamClient

BACKEND_URL = "http://backend.test"


def _client(handler) -> HttpUpstreamClient:
    return HttpUpstreamClient(BACKEND_URL, transport=httpx.MockTransport(handler))


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


class TestPassthrough:
    @pytest.mark.asyncio
    async def test_health_returns_body_unchanged(self) -> None:
        body = {"status": "ok", "models": {"whisper": "loaded"}, "gpu": None}

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/health"
            return httpx.Response(200, json=body)

        assert await _client(handler).check_health() == body

    @pytest.mark.asyncio
    async def test_translate_sends_json_body(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"translations": {"en": "hello"}})

        result = await _client(handler).translate("hola", None, "en")

        assert result == {"translations": {"en": "hello"}}
        assert seen["path"] == "/v1/translate"
        assert seen["body"] == {"text": "hola", "source_language": None, "target_language": "en"}

    @pytest.mark.asyncio
    async def test_detect_language_sends_text_only(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"language": "en", "confidence": 0.99})

        result = await _client(handler).detect_language("hello")

        assert result["language"] == "en"
        assert seen["body"] == {"text": "hello"}


class TestTranscribe:
    @pytest.mark.asyncio
    async def test_sends_multipart_with_present_params(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            seen["content_type"] = request.headers["content-type"]
            seen["content"] = request.content
            return httpx.Response(200, json={"text": "hi"})

        params = TranscribeParams(
            language="auto", enable_word_timestamps=True, enable_diarization=False
        )
        result = await _client(handler).transcribe(b"WAVDATA", "clip.wav", "audio/wav", params)

        assert result == {"text": "hi"}
        assert seen["params"] == {
            "language": "auto",
            "enable_word_timestamps": "true",
            "enable_diarization": "false",
        }
        assert seen["content_type"].startswith("multipart/form-data")
        assert b'name="audio_file"; filename="clip.wav"' in seen["content"]
        assert b"Content-Type: audio/wav" in seen["content"]
        assert b"WAVDATA" in seen["content"]

    @pytest.mark.asyncio
    async def test_omits_absent_params_and_defaults_part_metadata(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            seen["content"] = request.content
            return httpx.Response(200, json={})

        await _client(handler).transcribe(b"X", "", None, TranscribeParams())

        assert seen["params"] == {}
        assert b'filename="audio"' in seen["content"]
        assert b"Content-Type: application/octet-stream" in seen["content"]


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_non_2xx_uses_detail_and_keeps_payload(self) -> None:
        body = {"detail": "Audio too long", "max_seconds": 60}

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json=body)

        with pytest.raises(UpstreamResponseError) as exc_info:
            await _client(handler).transcribe(b"X", "a.wav", "audio/wav", TranscribeParams())

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Audio too long"
        assert exc_info.value.payload == body
        assert exc_info.value.operation == "transcribe"

    @pytest.mark.asyncio
    async def test_non_2xx_falls_back_to_error_field(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, json={"error": "model crashed"})

        with pytest.raises(UpstreamResponseError) as exc_info:
            await _client(handler).check_health()

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "model crashed"

    @pytest.mark.asyncio
    async def test_non_2xx_with_structured_detail_uses_generic_message(self) -> None:
        body = {"detail": [{"loc": ["body", "text"], "msg": "field required"}]}

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, json=body)

        with pytest.raises(UpstreamResponseError) as exc_info:
            await _client(handler).translate("x", None, "en")

        assert exc_info.value.status_code == 422
        assert "422" in exc_info.value.message
        assert exc_info.value.payload == body

    @pytest.mark.asyncio
    async def test_non_2xx_plain_text_has_no_payload(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="Internal Server Error")

        with pytest.raises(UpstreamResponseError) as exc_info:
            await _client(handler).detect_language("x")

        assert exc_info.value.status_code == 500
        assert exc_info.value.payload is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.check_health(),
            lambda c: c.transcribe(b"X", "a.wav", "audio/wav", TranscribeParams()),
            lambda c: c.translate("hello", None, "en"),
            lambda c: c.detect_language("hello"),
        ],
    )
    async def test_connection_refused_is_unreachable_for_every_operation(self, call) -> None:
        with pytest.raises(UpstreamUnreachableError) as exc_info:
            await call(_client(_refuse))

        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "Python backend is not reachable"

    @pytest.mark.asyncio
    async def test_timeout_is_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamUnreachableError):
            await _client(handler).check_health()

    @pytest.mark.asyncio
    async def test_invalid_json_on_success_is_request_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(UpstreamRequestError) as exc_info:
            await _client(handler).check_health()

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_unsupported_scheme_is_request_error(self) -> None:
        client = HttpUpstreamClient("ftp://backend.test")

        with pytest.raises(UpstreamRequestError) as exc_info:
            await client.check_health()

        assert exc_info.value.status_code == 500
        await client.aclose()
