from .game import Outcome, Participant, Phase, Round, RoundSnapshot, TransitionResult
from .schemas import ChatMessage, RoundStartRequest, SpeedRequest

__all__ = [
    "Outcome",
    "Participant",
    "Phase",
    "Round",
    "RoundSnapshot",
    "TransitionResult",
    "ChatMessage",
    "RoundStartRequest",
    "SpeedRequest",
]
