import asyncio
import json
import logging

from broadcaster import Broadcast
from pydantic import ValidationError

from ..config import BROADCAST_CHANNEL
from ..models import ChatMessage

log = logging.getLogger(__name__)


class BroadcastHub:
    """Live connections of the room and the fan-out to all of them.

    Outbound payloads go through the ``broadcaster`` channel when a backend
    is given; a single pump task subscribed to that channel delivers them to
    the local sessions. Without a backend payloads are delivered directly.
    A session is anything with an async ``send_text``.
    """

    def __init__(self, broadcast: Broadcast | None = None, channel: str = BROADCAST_CHANNEL):
        self.broadcast = broadcast
        self.channel = channel
        self._sessions: set = set()
        self._pump: asyncio.Task | None = None
        self._subscribed = asyncio.Event()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session) -> bool:
        return session in self._sessions

    @property
    def sessions(self) -> list:
        return list(self._sessions)

    def register(self, session) -> None:
        self._sessions.add(session)
        log.info(f"Session registered, {len(self._sessions)} connected")

    def unregister(self, session) -> None:
        if session not in self._sessions:
            return
        self._sessions.discard(session)
        log.info(f"Session unregistered, {len(self._sessions)} connected")

    async def start(self) -> None:
        if self.broadcast is None or self._pump is not None:
            return
        self._subscribed.clear()
        self._pump = asyncio.create_task(self._run_pump())
        waiter = asyncio.create_task(self._subscribed.wait())
        done, _ = await asyncio.wait({self._pump, waiter}, return_when=asyncio.FIRST_COMPLETED)
        if self._pump in done:
            waiter.cancel()
            pump, self._pump = self._pump, None
            # surfaces the subscription failure
            pump.result()
            return
        log.info(f"Hub subscribed to channel {self.channel}")

    async def stop(self) -> None:
        if self._pump is None:
            return
        self._pump.cancel()
        try:
            await self._pump
        except asyncio.CancelledError:
            pass
        self._pump = None
        log.info("Hub stopped")

    async def _run_pump(self) -> None:
        async with self.broadcast.subscribe(channel=self.channel) as subscriber:
            self._subscribed.set()
            async for event in subscriber:
                await self.deliver(event.message)

    async def on_message(self, from_session, raw: str) -> None:
        """Relay a chat frame verbatim to every session, the sender included."""
        try:
            ChatMessage.model_validate_json(raw)
        except ValidationError as e:
            log.warning(f"Dropping malformed chat message: {e}")
            return
        await self.publish(raw)

    async def publish(self, text: str) -> None:
        if self.broadcast is None:
            await self.deliver(text)
        else:
            await self.broadcast.publish(channel=self.channel, message=text)

    async def publish_event(self, event: dict) -> None:
        await self.publish(json.dumps(event))

    async def deliver(self, text: str) -> int:
        """Send ``text`` to every registered session; return how many got it."""
        delivered = 0
        for session in list(self._sessions):
            # may have been unregistered by an earlier send in this loop
            if session not in self._sessions:
                continue
            try:
                await session.send_text(text)
                delivered += 1
            except Exception as e:
                log.warning(f"Send failed, dropping session: {e!r}")
                self.unregister(session)
        return delivered
