"""API routers."""

from .recordings import router as recordings_router
from .service import router as service_router
from .speech import router as speech_router

__all__ = ["service_router", "speech_router", "recordings_router"]
