from .rounds import router as rounds_router
from .websocket_router import router as websocket_router

__all__ = ["rounds_router", "websocket_router"]
