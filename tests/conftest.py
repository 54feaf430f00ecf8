import io
import wave
from pathlib import Path

import pytest

from stt_proxy.config import (
    AppConfig,
    AppInfo,
    AudioConfig,
    CorsConfig,
    LoggingConfig,
    ServerConfig,
    UpstreamConfig,
)

BACKEND_URL = "http://backend.test"


def make_config(
    storage_dir: Path,
    save_audio_files: bool = True,
    max_file_size_mb: int = 500,
) -> AppConfig:
    return AppConfig(
        server=ServerConfig(),
        upstream=UpstreamConfig(url=BACKEND_URL, timeout_seconds=5),
        audio=AudioConfig(
            storage_dir=str(storage_dir),
            save_audio_files=save_audio_files,
            max_file_size_mb=max_file_size_mb,
        ),
        logging=LoggingConfig(),
        cors=CorsConfig(),
        app=AppInfo(),
    )


@pytest.fixture()
def storage_dir(tmp_path: Path) -> Path:
    path = tmp_path / "audio_recordings"
    path.mkdir()
    return path


@pytest.fixture()
def wav_bytes() -> bytes:
    """Ten seconds of 8 kHz mono 16-bit silence."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wav_file:
        wav_file.setnchannels(1)
        wav_file.setsampwidth(2)
        wav_file.setframerate(8000)
        wav_file.writeframes(b"\x00\x00" * 8000 * 10)
    return buf.getvalue()


@pytest.fixture()
def config_factory():
    """Returns ``make_config`` so tests can build configs with overrides."""
    return make_config
