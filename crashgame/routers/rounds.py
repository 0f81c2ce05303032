from fastapi import APIRouter, HTTPException, status

from ..dependencies import EngineDep, HubDep
from ..models import Participant, RoundSnapshot, RoundStartRequest, SpeedRequest, TransitionResult

router = APIRouter()


def _accepted(result: TransitionResult) -> TransitionResult:
    if not result.accepted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.detail)
    return result


@router.get("/round", response_model=RoundSnapshot)
async def get_round(engine: EngineDep):
    return engine.snapshot()


@router.post("/round/start", response_model=TransitionResult)
async def start_round(request: RoundStartRequest, engine: EngineDep):
    return _accepted(engine.start(request.wager, request.cash_out_target))


@router.post("/round/reset", response_model=TransitionResult)
async def reset_round(engine: EngineDep, hub: HubDep):
    result = _accepted(engine.reset())
    await engine.drain()
    await hub.publish_event({"type": "round_reset", **engine.snapshot().model_dump(mode="json")})
    return result


@router.put("/round/speed", response_model=TransitionResult)
async def set_speed(request: SpeedRequest, engine: EngineDep):
    return _accepted(engine.set_speed(request.speed))


@router.get("/round/ranking", response_model=list[Participant])
async def get_ranking(engine: EngineDep):
    """Participants by score, unscored last."""
    return engine.participants.ranking()


@router.get("/health")
async def health(hub: HubDep):
    return {"status": "ok", "connections": len(hub)}
