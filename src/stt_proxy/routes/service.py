"""Service descriptor and health endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from stt_proxy.config import AppConfig
from stt_proxy.dependencies import get_config, get_handler
from stt_proxy.handlers import ProxyHandler
from stt_proxy.response_models import ServiceInfoResponse

router = APIRouter(tags=["service"])

ConfigDep = Annotated[AppConfig, Depends(get_config)]
HandlerDep = Annotated[ProxyHandler, Depends(get_handler)]

ENDPOINTS = {
    "health": "/health",
    "transcribe": "/v1/transcribe",
    "translate": "/v1/translate",
    "detect_language": "/v1/detect-language",
    "recordings_api": "/api/recordings",
    "docs": "/docs",
}


@router.get("/", response_model=ServiceInfoResponse)
def get_root(config: ConfigDep) -> ServiceInfoResponse:
    """Returns the service name, version, status and endpoint map."""
    return ServiceInfoResponse(
        service=config.app.name,
        version=config.app.version,
        status="online",
        endpoints=ENDPOINTS,
    )


@router.get("/health")
async def get_health(handler: HandlerDep) -> Any:
    """Returns the backend health document unchanged."""
    return await handler.health()
