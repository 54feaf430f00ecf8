from stt_proxy.config import AppConfig, load_config
from stt_proxy.exceptions import (
    ProxyError,
    RecordingNotFoundError,
    RequestValidationFailed,
    StorageError,
    StorageListError,
    StorageWriteError,
    UpstreamError,
    UpstreamRequestError,
    UpstreamResponseError,
    UpstreamUnreachableError,
)
from stt_proxy.logging import setup_logging

__all__ = [
    "setup_logging",
    "AppConfig",
    "load_config",
    "ProxyError",
    "RequestValidationFailed",
    "RecordingNotFoundError",
    "StorageError",
    "StorageWriteError",
    "StorageListError",
    "UpstreamError",
    "UpstreamResponseError",
    "UpstreamUnreachableError",
    "UpstreamRequestError",
]
