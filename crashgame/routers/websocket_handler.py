import logging

from fastapi import WebSocket

from ..game import RoundEngine
from ..services import BroadcastHub

log = logging.getLogger(__name__)


class WebSocketHandler:
    """Handles one viewer connection for its whole lifetime"""

    @staticmethod
    async def handle_connection(
            websocket: WebSocket,
            hub: BroadcastHub,
            engine: RoundEngine,
    ) -> None:
        """Register the socket, send the current round state, then relay chat until it closes"""
        hub.register(websocket)
        try:
            await websocket.send_json(
                {"type": "round_state", **engine.snapshot().model_dump(mode="json")}
            )

            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                text = message.get("text")
                if text is None:
                    log.warning("Dropping binary frame, chat is text only")
                    continue
                await hub.on_message(websocket, text)

        finally:
            hub.unregister(websocket)
            log.info("Viewer disconnected")
