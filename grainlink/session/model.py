from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SessionState(str, Enum):
    """Fine-grained progress of an automated brewing session."""
    IDLE = "idle"
    RECIPE_RECEIVED = "recipe_received"
    DELAYED_HEATING = "delayed_heating"
    MASH_RAMP = "mash_ramp"
    MASH = "mash"
    ADD_GRAIN = "add_grain"
    START_SPARGE = "start_sparge"
    FINISH_SPARGE = "finish_sparge"
    BOIL_RAMP = "boil_ramp"
    START_BOIL = "start_boil"
    BOIL = "boil"
    HOP_STAND_ADD = "hop_stand_add"
    HOP_STAND = "hop_stand"
    FINISHED = "finished"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PendingAddition:
    name: str
    time: int


@dataclass(frozen=True)
class SessionSnapshot:
    """
    The session state derived from one ``AutoStatus`` record.

    Attributes:
        state: The derived session state.
        brewing: Whether the controller runs an automated session.
        minutes_left: Minutes left on the step timer, only set in timed states.
        seconds_left: Seconds left on the step timer, only set in timed states.
        pending_addition: A boil addition that is due now, reported once.
    """
    state: SessionState = SessionState.IDLE
    brewing: bool = False
    minutes_left: int = 0
    seconds_left: int = 0
    pending_addition: Optional[PendingAddition] = None

    def as_dict(self) -> dict:
        return {
            "state": self.state.value,
            "brewing": self.brewing,
            "minutes_left": self.minutes_left,
            "seconds_left": self.seconds_left,
            "pending_addition": (
                {"name": self.pending_addition.name, "time": self.pending_addition.time}
                if self.pending_addition
                else None
            ),
        }
