from .crash_generator import RandomCrashGenerator, FixedCrashGenerator
from .participants import ParticipantRegistry
from .round_engine import RoundEngine
__all__ = ["RandomCrashGenerator", "FixedCrashGenerator", "ParticipantRegistry", "RoundEngine"]
