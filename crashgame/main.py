import logging
from contextlib import asynccontextmanager

import uvicorn
from broadcaster import Broadcast
from fastapi import FastAPI

from crashgame.config import BROADCAST_URL, HOST, LOG_LEVEL, PORT
from crashgame.dependencies import close_services, init_services
from crashgame.middleware import add_cors_middleware, add_logging_middleware
from crashgame.routers import rounds_router, websocket_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)

broadcast = Broadcast(BROADCAST_URL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await broadcast.connect()
    await init_services(broadcast)
    log.info(f"Crash round server ready, fan-out via {BROADCAST_URL}")
    yield
    await close_services()
    await broadcast.disconnect()
    log.info("shutting down")


app = FastAPI(lifespan=lifespan)
app.add_middleware(add_cors_middleware)
app.add_middleware(add_logging_middleware)

app.include_router(rounds_router)
app.include_router(websocket_router)


def run() -> None:
    uvicorn.run("crashgame.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
