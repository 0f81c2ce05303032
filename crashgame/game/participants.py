import random
import logging

from ..config import SYNTHETIC_PARTICIPANTS
from ..models import Participant

log = logging.getLogger(__name__)

PRIMARY_NAME = "me"
MIN_SYNTHETIC_WAGER = 1
MAX_SYNTHETIC_WAGER = 100
MAX_SYNTHETIC_TARGET = 10.0


class ParticipantRegistry:
    """Participants of the single room, in display order.

    Id 1 is always the primary (human) participant, the rest are synthetic
    and get fresh random stakes every round.
    """

    def __init__(self, synthetic_count: int = SYNTHETIC_PARTICIPANTS, rng=None):
        self._rng = rng or random
        self._participants: list[Participant] = [
            Participant(id=1, display_name=PRIMARY_NAME, is_primary=True)
        ]
        for i in range(1, synthetic_count + 1):
            self._participants.append(Participant(id=i + 1, display_name=f"CPU {i}"))

    def __len__(self) -> int:
        return len(self._participants)

    def __iter__(self):
        return iter(self._participants)

    @property
    def primary(self) -> Participant:
        return self._participants[0]

    @property
    def synthetic(self) -> list[Participant]:
        return self._participants[1:]

    def initialize(self, primary_wager: float, primary_target: float) -> None:
        """Seed stakes for a new round and wipe every previous score."""
        for participant in self._participants:
            participant.clear()
            if participant.is_primary:
                participant.wager = primary_wager
                participant.cash_out_target = primary_target
            else:
                participant.wager = float(self._rng.randint(MIN_SYNTHETIC_WAGER, MAX_SYNTHETIC_WAGER))
                participant.cash_out_target = round(self._rng.uniform(0, MAX_SYNTHETIC_TARGET), 2)

    def reset(self) -> None:
        for participant in self._participants:
            participant.clear()

    def settle(self, crash_point: float) -> None:
        # identical rule for everyone, primary included
        for participant in self._participants:
            participant.score = score_for(participant, crash_point)
            participant.settled = True
        log.info(
            f"Settled {len(self._participants)} participants at crash {crash_point:.2f}x, "
            f"{sum(p.score is not None for p in self._participants)} cashed out"
        )

    def ranking(self) -> list[Participant]:
        """Highest score first; unscored participants keep display order at the end."""
        scored = [p for p in self._participants if p.score is not None]
        unscored = [p for p in self._participants if p.score is None]
        return sorted(scored, key=lambda p: p.score, reverse=True) + unscored

    def dump(self) -> list[dict]:
        return [p.model_dump(mode="json") for p in self._participants]


def score_for(participant: Participant, crash_point: float) -> int | None:
    """Payout if the crash happened strictly after the participant's target."""
    if participant.wager is None or participant.cash_out_target is None:
        return None
    if crash_point > participant.cash_out_target:
        return round(participant.cash_out_target * participant.wager)
    return None
