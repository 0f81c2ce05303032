import math
import logging

from pydantic import BaseModel, Field, field_validator

from ..config import (
    MAX_CASH_OUT_TARGET,
    MAX_SPEED,
    MIN_CASH_OUT_TARGET,
    MIN_SPEED,
    MIN_WAGER,
)

log = logging.getLogger(__name__)


def clamp(value, low: float, high: float | None = None) -> float:
    """Parse ``value`` as a float and pull it into ``[low, high]``.

    Anything that does not parse (or is NaN) becomes ``low``.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        log.warning(f"Invalid numeric input {value!r}, using {low}")
        return low
    if math.isnan(number):
        log.warning(f"Invalid numeric input {value!r}, using {low}")
        return low
    if number < low:
        return low
    if high is not None and number > high:
        return high
    if math.isinf(number):
        log.warning(f"Unbounded numeric input {value!r}, using {low}")
        return low
    return number


class RoundStartRequest(BaseModel):
    wager: float = MIN_WAGER
    cash_out_target: float = MIN_CASH_OUT_TARGET

    @field_validator("wager", mode="before")
    @classmethod
    def clamp_wager(cls, value):
        return clamp(value, MIN_WAGER)

    @field_validator("cash_out_target", mode="before")
    @classmethod
    def clamp_cash_out_target(cls, value):
        return clamp(value, MIN_CASH_OUT_TARGET, MAX_CASH_OUT_TARGET)


class SpeedRequest(BaseModel):
    speed: float = MIN_SPEED

    @field_validator("speed", mode="before")
    @classmethod
    def clamp_speed(cls, value):
        return clamp(value, MIN_SPEED, MAX_SPEED)


class ChatMessage(BaseModel):
    """Chat frame as it travels on the wire: ``{"sender": ..., "message": ...}``."""

    sender: str
    body: str = Field(alias="message")
