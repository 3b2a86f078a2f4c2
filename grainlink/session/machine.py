"""
Session state derivation.

The controller only reports a coarse stage number and interaction code. The
stage number counts the mash steps first, so the sparge, boil and hop stand
stages are located relative to the number of mash steps in the recipe:

    0           recipe received / delayed heating
    1..M        mash steps
    M+1         sparge
    M+2         boil
    M+3, M+4    hop stand and finish

Nothing else from the recipe is used except the boil additions, which are
matched against the boil timer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from grainlink.core.lines import from_device_minutes
from grainlink.domain.recipe import RecipeDetails
from grainlink.parsing.commands.builder import Command, build_press_set
from grainlink.parsing.notifications.model import AutoStatus, InteractionCode, Timer
from grainlink.session.context import SessionContext
from grainlink.session.model import PendingAddition, SessionSnapshot, SessionState


@dataclass(frozen=True)
class SessionUpdate:
    """
    Result of deriving the session from one ``AutoStatus`` record.

    Attributes:
        snapshot: The new session snapshot.
        commands: Commands to send to move the controller along.
        fired_additions: Indices of boil steps signalled by this update; the
            owner of the recipe marks them as sent.
    """
    snapshot: SessionSnapshot
    commands: tuple[Command, ...] = field(default_factory=tuple)
    fired_additions: tuple[int, ...] = field(default_factory=tuple)


def _timer_fields(timer: Optional[Timer], corrected: bool = True) -> dict[str, int]:
    if timer is None:
        return {"minutes_left": 0, "seconds_left": 0}
    minutes = from_device_minutes(timer.minutes_left) if corrected else timer.minutes_left
    return {"minutes_left": minutes, "seconds_left": timer.seconds_left}


def _due_additions(recipe: RecipeDetails, timer: Optional[Timer]) -> tuple[int, ...]:
    if timer is None:
        return ()
    return tuple(
        index
        for index, step in enumerate(recipe.boil_steps)
        if step.time == timer.minutes_left and not step.sent
    )


def _derive_boil(context: SessionContext, status: AutoStatus) -> SessionUpdate:
    recipe = context.recipe
    if status.interaction_code == InteractionCode.START_BOIL:
        return SessionUpdate(SessionSnapshot(SessionState.START_BOIL, brewing=True))

    if status.ramping_to_target:
        commands: tuple[Command, ...] = ()
        if (
            context.current_temperature is not None
            and context.boil_temperature is not None
            and context.current_temperature >= context.boil_temperature
        ):
            commands = (build_press_set(),)
        return SessionUpdate(SessionSnapshot(SessionState.BOIL_RAMP, brewing=True), commands=commands)

    timer = context.timer
    commands = ()
    if timer is not None and timer.minutes_left == 0:
        commands = (build_press_set(),)

    pending = None
    fired = _due_additions(recipe, timer)
    if fired:
        step = recipe.boil_steps[fired[0]]
        pending = PendingAddition(name=step.name, time=step.time)

    snapshot = SessionSnapshot(
        SessionState.BOIL,
        brewing=True,
        pending_addition=pending,
        **_timer_fields(timer),
    )
    return SessionUpdate(snapshot, commands=commands, fired_additions=fired)


def _derive_state(context: SessionContext, status: AutoStatus) -> SessionUpdate:
    stage = status.stage_number
    code = status.interaction_code
    mash_steps = len(context.recipe.mash_steps)

    if stage == 0:
        if status.delayed_heat_active:
            return SessionUpdate(
                SessionSnapshot(
                    SessionState.DELAYED_HEATING,
                    brewing=True,
                    **_timer_fields(context.timer, corrected=False),
                )
            )
        if code == InteractionCode.START_BREW:
            return SessionUpdate(SessionSnapshot(SessionState.RECIPE_RECEIVED, brewing=True))

    elif 0 < stage <= mash_steps:
        if code == InteractionCode.ADD_GRAIN:
            return SessionUpdate(SessionSnapshot(SessionState.ADD_GRAIN, brewing=True))
        if status.ramping_to_target:
            return SessionUpdate(SessionSnapshot(SessionState.MASH_RAMP, brewing=True))
        return SessionUpdate(SessionSnapshot(SessionState.MASH, brewing=True, **_timer_fields(context.timer)))

    elif stage == mash_steps + 1:
        if code == InteractionCode.START_SPARGE:
            # Nothing to decide here, skip straight to the sparge counter.
            return SessionUpdate(
                SessionSnapshot(SessionState.START_SPARGE, brewing=True),
                commands=(build_press_set(),),
            )
        if code == InteractionCode.FINISH_SPARGE:
            return SessionUpdate(SessionSnapshot(SessionState.FINISH_SPARGE, brewing=True))

    elif stage == mash_steps + 2:
        return _derive_boil(context, status)

    elif stage in (mash_steps + 3, mash_steps + 4):
        if code == InteractionCode.FINISH_BREW:
            return SessionUpdate(SessionSnapshot(SessionState.FINISHED, brewing=True))
        if code == InteractionCode.START_HOP_STAND:
            return SessionUpdate(SessionSnapshot(SessionState.HOP_STAND_ADD, brewing=True))
        return SessionUpdate(
            SessionSnapshot(SessionState.HOP_STAND, brewing=True, **_timer_fields(context.timer))
        )

    return SessionUpdate(SessionSnapshot(SessionState.IDLE, brewing=True))


def derive_session(context: SessionContext, status: AutoStatus) -> SessionUpdate:
    """
    Derive the session snapshot for an ``AutoStatus`` record.

    Neither the context nor the recipe is modified. Boil additions that became
    due are reported through ``SessionUpdate.fired_additions``; every unsent
    match is reported and the first one in recipe order becomes the pending
    addition.

    Args:
        context: Latest timer, temperatures and the active recipe.
        status: The ``AutoStatus`` record to interpret.

    Returns:
        A ``SessionUpdate``. ``IDLE`` when no automated session runs,
        ``UNKNOWN`` when a session runs but no recipe is set.
    """
    if not status.auto_mode_on:
        return SessionUpdate(SessionSnapshot(SessionState.IDLE, brewing=False))
    if context.recipe is None:
        return SessionUpdate(SessionSnapshot(SessionState.UNKNOWN, brewing=True))
    return _derive_state(context, status)
