"""
Recipe details for an automated brewing session.

Only the minimal information needed to program the controller and to follow
the session is kept. Keys are accepted in both snake_case and the camelCase
used by recipe exports (``mashWaterAmount``, ``stepTemperature``...).
"""
from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _RecipeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class MashStep(_RecipeModel):
    """
    A single mash step.

    Attributes:
        name: Step name, only used for display.
        step_time: Time to hold the step in minutes.
        step_temperature: Step temperature in the controller's units.
    """
    name: str = ""
    step_time: int
    step_temperature: float


class BoilStep(_RecipeModel):
    """
    A boil addition.

    Attributes:
        name: Name of the ingredient to add.
        time: Minutes left in the boil at which the addition is due.
        sent: Whether the addition has been signalled during the current session.
    """
    name: str = ""
    time: int
    sent: bool = False


class RecipeDetails(_RecipeModel):
    name: str
    boil_time: int
    mash_water_amount: float
    sparge_water_amount: float
    hop_stand_time: int = 0
    delay_minutes: int = 0
    delay_seconds: int = 0
    mash_steps: list[MashStep] = Field(default_factory=list)
    boil_steps: list[BoilStep] = Field(default_factory=list)

    @property
    def has_delay(self) -> bool:
        return self.delay_minutes > 0 or self.delay_seconds > 0

    def mark_sent(self, indices: Iterable[int]) -> None:
        """Flag the boil additions at the given indices as signalled."""
        for index in indices:
            self.boil_steps[index].sent = True

    def reset_sent(self) -> None:
        for step in self.boil_steps:
            step.sent = False
