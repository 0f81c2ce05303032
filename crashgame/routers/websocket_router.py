import logging

from fastapi import APIRouter, WebSocket

from ..dependencies import EngineDep, HubDep
from .websocket_handler import WebSocketHandler

log = logging.getLogger(__name__)
router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, hub: HubDep, engine: EngineDep) -> None:
    """Single room endpoint: round events out, chat relayed both ways"""
    await websocket.accept()
    log.info("Viewer connected")

    try:
        await WebSocketHandler.handle_connection(websocket=websocket, hub=hub, engine=engine)
    except Exception as e:
        log.error(f"WebSocket error: {e}")
        raise
