from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from grainlink.domain.recipe import RecipeDetails
from grainlink.parsing.notifications.model import BoilTemperature, StatusRecord, Temperature, Timer


@dataclass(frozen=True)
class SessionContext:
    """
    Running state needed to interpret ``AutoStatus`` records.

    The ``AutoStatus`` line alone does not carry the timer or the
    temperatures, so the latest values of those notifications are kept here.
    A context is never changed in place; ``observe`` and ``with_recipe``
    return a new one.
    """
    recipe: Optional[RecipeDetails] = None
    timer: Optional[Timer] = None
    boil_temperature: Optional[float] = None
    current_temperature: Optional[float] = None

    def observe(self, record: StatusRecord) -> "SessionContext":
        if isinstance(record, Timer):
            return replace(self, timer=record)
        if isinstance(record, BoilTemperature):
            return replace(self, boil_temperature=record.value)
        if isinstance(record, Temperature):
            return replace(self, current_temperature=record.current)
        return self

    def with_recipe(self, recipe: Optional[RecipeDetails]) -> "SessionContext":
        return replace(self, recipe=recipe)
