"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel


class ServerConfig(BaseModel, frozen=True):
    """HTTP server bind configuration."""

    host: str = "0.0.0.0"
    port: int = 3000
    shutdown_grace_seconds: int = 10

    @property
    def public_base_url(self) -> str:
        """Base URL used for links when no request URL is available."""
        host = "localhost" if self.host == "0.0.0.0" else self.host
        return f"http://{host}:{self.port}"


class UpstreamConfig(BaseModel, frozen=True):
    """Speech backend connection configuration."""

    url: str = "http://localhost:8000"
    timeout_seconds: float = 300.0


class AudioConfig(BaseModel, frozen=True):
    """Uploaded audio handling configuration."""

    storage_dir: str = "./audio_recordings"
    save_audio_files: bool = True
    max_file_size_mb: int = 500
    max_duration_seconds: int = 60

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


class LoggingConfig(BaseModel, frozen=True):
    level: str = "INFO"


class CorsConfig(BaseModel, frozen=True):
    """Cross-origin configuration."""

    origin: str = "*"

    @property
    def origins(self) -> list[str]:
        if self.origin == "*":
            return ["*"]
        return [o.strip() for o in self.origin.split(",") if o.strip()]


class AppInfo(BaseModel, frozen=True):
    name: str = "STT Proxy Server"
    version: str = "1.0.0"
    env: str = "development"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    server: ServerConfig
    upstream: UpstreamConfig
    audio: AudioConfig
    logging: LoggingConfig
    cors: CorsConfig
    app: AppInfo


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        server=ServerConfig(
            host=os.getenv("SERVER_HOST", "0.0.0.0"),
            port=os.getenv("SERVER_PORT", "3000"),
            shutdown_grace_seconds=os.getenv("SHUTDOWN_GRACE_SECONDS", "10"),
        ),
        upstream=UpstreamConfig(
            url=os.getenv("PYTHON_BACKEND_URL", "http://localhost:8000"),
            timeout_seconds=os.getenv("UPSTREAM_TIMEOUT_SECONDS", "300"),
        ),
        audio=AudioConfig(
            storage_dir=os.getenv("AUDIO_STORAGE_DIR", "./audio_recordings"),
            save_audio_files=os.getenv("SAVE_AUDIO_FILES") != "false",
            max_file_size_mb=os.getenv("MAX_FILE_SIZE_MB", "500"),
            max_duration_seconds=os.getenv("MAX_AUDIO_DURATION_SECONDS", "60"),
        ),
        logging=LoggingConfig(level=os.getenv("LOG_LEVEL", "INFO")),
        cors=CorsConfig(origin=os.getenv("CORS_ORIGIN", "*")),
        app=AppInfo(env=os.getenv("APP_ENV", "development")),
    )
