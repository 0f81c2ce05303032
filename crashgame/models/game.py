from enum import Enum

from pydantic import BaseModel, computed_field


class Phase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class Outcome(str, Enum):
    CASHED_OUT = "cashed_out"
    CRASHED = "crashed"


class Participant(BaseModel):
    id: int
    display_name: str
    is_primary: bool = False
    wager: float | None = None
    cash_out_target: float | None = None
    score: int | None = None
    settled: bool = False

    @computed_field
    @property
    def outcome(self) -> Outcome | None:
        if not self.settled:
            return None
        return Outcome.CASHED_OUT if self.score is not None else Outcome.CRASHED

    def clear(self):
        self.wager = None
        self.cash_out_target = None
        self.score = None
        self.settled = False


class Round(BaseModel):
    crash_point: float | None = None
    phase: Phase = Phase.IDLE
    current_multiplier: float = 0.0
    elapsed: float = 0.0
    tick: int = 0
    tick_interval_ms: float


class RoundSnapshot(BaseModel):
    phase: Phase
    current_multiplier: float
    elapsed: float
    tick: int
    speed: float
    tick_interval_ms: float
    balance: float
    crash_point: float | None = None
    participants: list[Participant] = []


class TransitionResult(BaseModel):
    accepted: bool
    phase: Phase
    detail: str | None = None
