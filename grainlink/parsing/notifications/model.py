from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union


class InteractionCode(IntEnum):
    """User acknowledgements the controller can wait for during a session."""
    START_BREW = 1
    ADD_GRAIN = 2
    START_SPARGE = 3
    FINISH_SPARGE = 4
    START_BOIL = 5
    START_HOP_STAND = 6
    FINISH_BREW = 7


class Voltage(IntEnum):
    V230 = 0
    V110 = 1


class Units(IntEnum):
    FAHRENHEIT = 0
    CELSIUS = 1


@dataclass(frozen=True)
class AlertDismissed:
    """``A``: an alert was dismissed on the controller."""


@dataclass(frozen=True)
class BoilTemperature:
    """``C``: the configured boil temperature."""
    value: float


@dataclass(frozen=True)
class FirmwareVersion:
    value: str


@dataclass(frozen=True)
class InteractionAck:
    code: str


@dataclass(frozen=True)
class Timer:
    """
    ``T``: the running timer.

    Attributes:
        active: Whether a timer is running.
        minutes_left: Remaining minutes, rounded up by the controller.
        total_start_minutes: The minutes the timer was started with.
        seconds_left: Remaining seconds within the current minute.
    """
    active: bool
    minutes_left: int
    total_start_minutes: int
    seconds_left: int


@dataclass(frozen=True)
class VoltageUnits:
    voltage: Voltage
    units: Units


@dataclass(frozen=True)
class PowerState:
    """``W``: heating output and display modes."""
    heat_output_percent: int
    timer_paused: bool
    step_mash_mode: bool
    recipe_interrupted: bool
    manual_power_mode: bool
    sparge_alert_shown: bool


@dataclass(frozen=True)
class Temperature:
    """``X``: target and current temperature."""
    target: float
    current: float


@dataclass(frozen=True)
class AutoStatus:
    """
    ``Y``: the status of an automated session.

    Attributes:
        heat_on: Heating element is on.
        pump_on: Pump is running.
        auto_mode_on: The controller is running a recipe.
        ramping_to_target: Heating towards the next target temperature.
        waiting_for_interaction: Waiting for a user acknowledgement.
        interaction_code: Raw interaction code, see ``InteractionCode``.
        stage_number: Current recipe stage, counted from the mash steps.
        delayed_heat_active: The delayed heating timer is running.
    """
    heat_on: bool
    pump_on: bool
    auto_mode_on: bool
    ramping_to_target: bool
    waiting_for_interaction: bool
    interaction_code: int
    stage_number: int
    delayed_heat_active: bool

    @property
    def interaction(self) -> Optional[InteractionCode]:
        try:
            return InteractionCode(self.interaction_code)
        except ValueError:
            return None


@dataclass(frozen=True)
class UnknownNotification:
    """A line with an unrecognized type character."""
    tag: str
    raw: str


StatusRecord = Union[
    AlertDismissed,
    BoilTemperature,
    FirmwareVersion,
    InteractionAck,
    Timer,
    VoltageUnits,
    PowerState,
    Temperature,
    AutoStatus,
    UnknownNotification,
]
