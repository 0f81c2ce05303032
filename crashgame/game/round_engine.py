import asyncio
import logging
from typing import Awaitable, Callable

from ..config import (
    BASE_TICK_INTERVAL_MS,
    DEFAULT_SPEED,
    MIN_TICK_INTERVAL_MS,
    STARTING_POINTS,
    TICK_STEP,
)
from ..models import Phase, Round, RoundSnapshot, TransitionResult
from .crash_generator import RandomCrashGenerator
from .curve import sample, sample_count
from .participants import ParticipantRegistry

log = logging.getLogger(__name__)

RoundObserver = Callable[[dict], Awaitable[None]]


class RoundEngine:
    """Owns the round and its participants, and drives the tick timer.

    State only changes through ``start``, ``reset`` and the timer. Each tick
    mutates state and, when the curve runs out, settles scores before any
    observer is awaited, so a concurrent ``start`` never sees a torn round.
    """

    def __init__(
        self,
        generator=None,
        participants: ParticipantRegistry | None = None,
        base_interval_ms: float = BASE_TICK_INTERVAL_MS,
        min_interval_ms: float = MIN_TICK_INTERVAL_MS,
        step: float = TICK_STEP,
        speed: float = DEFAULT_SPEED,
        starting_points: float = STARTING_POINTS,
    ):
        self.generator = generator or RandomCrashGenerator()
        self.participants = participants if participants is not None else ParticipantRegistry()
        self.base_interval_ms = base_interval_ms
        self.min_interval_ms = min_interval_ms
        self.step = step
        self.speed = speed
        self.balance = starting_points

        self.round = Round(tick_interval_ms=self._interval_for(speed))
        self._last_tick = 0
        self._timer: asyncio.Task | None = None
        # delivery of a finished round's last tick and round_ended event
        self._closing: asyncio.Task | None = None
        self._observers: list[RoundObserver] = []

    @property
    def phase(self) -> Phase:
        return self.round.phase

    @property
    def running(self) -> bool:
        return self.round.phase == Phase.RUNNING

    def _interval_for(self, speed: float) -> float:
        return max(self.base_interval_ms / speed, self.min_interval_ms)

    def _rejected(self, detail: str) -> TransitionResult:
        log.info(f"Rejected: {detail}")
        return TransitionResult(accepted=False, phase=self.phase, detail=detail)

    def subscribe(self, observer: RoundObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: RoundObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    async def _emit(self, event: dict) -> None:
        for observer in list(self._observers):
            try:
                await observer(event)
            except Exception:
                log.exception(f"Round observer failed on {event.get('type')} event")

    def start(self, primary_wager: float, primary_target: float) -> TransitionResult:
        if self.running:
            return self._rejected("A round is already running")

        self._cancel_timer()

        crash_point = self.generator.next()
        self.participants.initialize(primary_wager, primary_target)
        self.balance -= primary_wager
        self.round = Round(
            crash_point=crash_point,
            phase=Phase.RUNNING,
            tick_interval_ms=self._interval_for(self.speed),
        )
        self._last_tick = sample_count(crash_point, self.step)

        log.info(
            f"Round started: wager={primary_wager} target={primary_target} "
            f"interval={self.round.tick_interval_ms:.1f}ms ticks={self._last_tick + 1}"
        )
        self._timer = asyncio.get_running_loop().create_task(self._run(self._pending_closing()))
        return TransitionResult(accepted=True, phase=self.phase)

    def reset(self) -> TransitionResult:
        if self.running:
            return self._rejected("Cannot reset while a round is running")

        self._cancel_timer()
        self.participants.reset()
        self.round = Round(tick_interval_ms=self._interval_for(self.speed))
        self._last_tick = 0
        log.info("Round reset")
        return TransitionResult(accepted=True, phase=self.phase)

    def set_speed(self, speed: float) -> TransitionResult:
        if self.running:
            return self._rejected("Speed cannot change while a round is running")

        self.speed = speed
        self.round.tick_interval_ms = self._interval_for(speed)
        return TransitionResult(accepted=True, phase=self.phase)

    def _advance(self) -> dict:
        """Apply one tick and return the event(s) it produced.

        Returns the tick event, plus ``ended`` holding the end-of-round event
        when this tick was the last sample of the curve.
        """
        index = self.round.tick
        elapsed, multiplier = sample(index, self.round.crash_point, self.step)
        self.round.elapsed = elapsed
        self.round.current_multiplier = multiplier
        self.round.tick = index + 1

        tick = {"type": "tick", "tick": index, "elapsed": elapsed, "multiplier": multiplier}
        if index < self._last_tick:
            return {"tick": tick}
        return {"tick": tick, "ended": self._finish()}

    def _finish(self) -> dict:
        crash_point = self.round.crash_point
        self.participants.settle(crash_point)
        primary = self.participants.primary
        if primary.score is not None:
            self.balance += primary.score
        self.round.phase = Phase.ENDED
        log.info(f"Round ended at {crash_point:.2f}x, balance {self.balance}")
        return {
            "type": "round_ended",
            "crash_point": crash_point,
            "participants": self.participants.dump(),
            "ranking": [p.id for p in self.participants.ranking()],
            "balance": self.balance,
        }

    def _pending_closing(self) -> asyncio.Task | None:
        if self._closing is not None and not self._closing.done():
            return self._closing
        return None

    async def _close_round(self, tick: dict, ended: dict) -> None:
        await self._emit(tick)
        await self._emit(ended)

    async def _run(self, previous: asyncio.Task | None = None) -> None:
        if previous is not None:
            # the last round's results go out before this one starts
            await asyncio.shield(previous)
        await self._emit({"type": "round_started", **self.snapshot().model_dump(mode="json")})
        while True:
            events = self._advance()
            if "ended" in events:
                # phase is already Ended; start/reset may cancel this task but not the closing one
                self._closing = asyncio.get_running_loop().create_task(
                    self._close_round(events["tick"], events["ended"])
                )
                await asyncio.shield(self._closing)
                return
            await self._emit(events["tick"])
            await asyncio.sleep(self.round.tick_interval_ms / 1000)

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def join(self) -> None:
        """Wait for the pending round timer, if any, to finish."""
        if self._timer is not None:
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
        await self.drain()

    async def drain(self) -> None:
        """Wait until the results of the last finished round have been emitted."""
        closing = self._pending_closing()
        if closing is not None:
            await asyncio.shield(closing)

    async def shutdown(self) -> None:
        timer, closing = self._timer, self._closing
        self._cancel_timer()
        self._closing = None
        for task in (timer, closing):
            if task is None:
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._observers.clear()

    def snapshot(self) -> RoundSnapshot:
        revealed = self.phase == Phase.ENDED
        return RoundSnapshot(
            phase=self.phase,
            current_multiplier=self.round.current_multiplier,
            elapsed=self.round.elapsed,
            tick=self.round.tick,
            speed=self.speed,
            tick_interval_ms=self.round.tick_interval_ms,
            balance=self.balance,
            crash_point=self.round.crash_point if revealed else None,
            participants=[p.model_copy() for p in self.participants],
        )
