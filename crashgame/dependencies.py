from typing import Annotated

from broadcaster import Broadcast
from fastapi import Depends

from .game import RoundEngine
from .services import BroadcastHub

# singletons, created by the app lifespan
_engine: RoundEngine | None = None
_hub: BroadcastHub | None = None


async def init_services(broadcast: Broadcast | None = None, engine: RoundEngine | None = None) -> None:
    """Create the hub and the engine, and wire round events into the hub."""
    global _engine, _hub
    _hub = BroadcastHub(broadcast)
    await _hub.start()
    _engine = engine or RoundEngine()
    _engine.subscribe(_hub.publish_event)


async def close_services() -> None:
    global _engine, _hub
    if _engine is not None:
        await _engine.shutdown()
    if _hub is not None:
        await _hub.stop()
    _engine = None
    _hub = None


def get_engine() -> RoundEngine:
    if _engine is None:
        raise RuntimeError("Round engine not initialized")
    return _engine


def get_hub() -> BroadcastHub:
    if _hub is None:
        raise RuntimeError("Broadcast hub not initialized")
    return _hub


# convenience type aliases for dependency injection
EngineDep = Annotated[RoundEngine, Depends(get_engine)]
HubDep = Annotated[BroadcastHub, Depends(get_hub)]
