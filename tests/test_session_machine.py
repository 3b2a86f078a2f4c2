"""Tests for session state derivation."""
import pytest

from grainlink.core.lines import from_device_minutes, to_device_minutes
from grainlink.domain.recipe import BoilStep, MashStep, RecipeDetails
from grainlink.parsing.commands import build_set_new_timer
from grainlink.parsing.notifications import AutoStatus, InteractionCode, Temperature, Timer, decode_notification
from grainlink.session import PendingAddition, SessionContext, SessionSnapshot, SessionState, derive_session


def _build_recipe(boil_steps=None) -> RecipeDetails:
    """Helper: two mash steps, so sparge is stage 3, boil stage 4 and hop stand stage 5/6."""
    return RecipeDetails(
        name="WEIZEN",
        boil_time=60,
        mash_water_amount=18.3,
        sparge_water_amount=17.7,
        mash_steps=[
            MashStep(name="Protein rest", step_time=15, step_temperature=52),
            MashStep(name="Saccharification", step_time=60, step_temperature=66),
        ],
        boil_steps=boil_steps if boil_steps is not None else [],
    )


def _status(stage: int, code: int = 0, ramping: bool = False, delayed: bool = False, auto: bool = True) -> AutoStatus:
    return AutoStatus(
        heat_on=True,
        pump_on=False,
        auto_mode_on=auto,
        ramping_to_target=ramping,
        waiting_for_interaction=code != 0,
        interaction_code=code,
        stage_number=stage,
        delayed_heat_active=delayed,
    )


def _timer(minutes: int, seconds: int = 0) -> Timer:
    return Timer(active=True, minutes_left=minutes, total_start_minutes=60, seconds_left=seconds)


def _context(recipe=None, timer=None, boil=None, current=None) -> SessionContext:
    return SessionContext(recipe=recipe, timer=timer, boil_temperature=boil, current_temperature=current)


def test_auto_mode_off_is_idle():
    update = derive_session(_context(_build_recipe()), _status(1, auto=False))
    assert update.snapshot == SessionSnapshot(SessionState.IDLE, brewing=False)
    assert update.commands == ()


def test_no_recipe_is_unknown():
    update = derive_session(_context(), _status(1))
    assert update.snapshot.state == SessionState.UNKNOWN
    assert update.snapshot.brewing is True


def test_recipe_received():
    update = derive_session(_context(_build_recipe()), _status(0, InteractionCode.START_BREW))
    assert update.snapshot.state == SessionState.RECIPE_RECEIVED
    assert update.commands == ()


def test_delayed_heating_reports_raw_timer():
    context = _context(_build_recipe(), timer=_timer(11, 40))
    update = derive_session(context, _status(0, delayed=True))
    assert update.snapshot.state == SessionState.DELAYED_HEATING
    assert update.snapshot.minutes_left == 11
    assert update.snapshot.seconds_left == 40


def test_delayed_heating_wins_over_start_brew():
    context = _context(_build_recipe(), timer=_timer(5))
    update = derive_session(context, _status(0, InteractionCode.START_BREW, delayed=True))
    assert update.snapshot.state == SessionState.DELAYED_HEATING


def test_stage_zero_without_interaction_is_idle():
    update = derive_session(_context(_build_recipe()), _status(0))
    assert update.snapshot.state == SessionState.IDLE


@pytest.mark.parametrize("stage", [1, 2])
def test_mash_states(stage):
    context = _context(_build_recipe(), timer=_timer(30, 15))
    assert derive_session(context, _status(stage, InteractionCode.ADD_GRAIN)).snapshot.state == SessionState.ADD_GRAIN
    assert derive_session(context, _status(stage, ramping=True)).snapshot.state == SessionState.MASH_RAMP
    mash = derive_session(context, _status(stage)).snapshot
    assert mash.state == SessionState.MASH
    assert mash.minutes_left == 29
    assert mash.seconds_left == 15


def test_mash_timer_at_zero_stays_zero():
    context = _context(_build_recipe(), timer=_timer(0, 20))
    snapshot = derive_session(context, _status(1)).snapshot
    assert snapshot.minutes_left == 0
    assert snapshot.seconds_left == 20


def test_mash_without_timer():
    snapshot = derive_session(_context(_build_recipe()), _status(1)).snapshot
    assert snapshot.state == SessionState.MASH
    assert (snapshot.minutes_left, snapshot.seconds_left) == (0, 0)


def test_last_mash_stage_boundary():
    # Stage 2 equals the number of mash steps: still mashing, even with the sparge code.
    record = decode_notification("Y1,0,1,0,0,3,2,0,").record
    update = derive_session(_context(_build_recipe(), timer=_timer(10)), record)
    assert update.snapshot.state == SessionState.MASH
    assert update.commands == ()


def test_start_sparge_presses_set():
    update = derive_session(_context(_build_recipe()), _status(3, InteractionCode.START_SPARGE))
    assert update.snapshot.state == SessionState.START_SPARGE
    assert [c.lines for c in update.commands] == [("T",)]


def test_finish_sparge():
    update = derive_session(_context(_build_recipe()), _status(3, InteractionCode.FINISH_SPARGE))
    assert update.snapshot.state == SessionState.FINISH_SPARGE
    assert update.commands == ()


def test_sparge_stage_without_known_code_is_idle():
    update = derive_session(_context(_build_recipe()), _status(3))
    assert update.snapshot.state == SessionState.IDLE
    assert update.snapshot.brewing is True


def test_start_boil():
    update = derive_session(_context(_build_recipe()), _status(4, InteractionCode.START_BOIL))
    assert update.snapshot.state == SessionState.START_BOIL


def test_boil_ramp_at_boil_temperature_presses_set():
    context = _context(_build_recipe(), boil=100.0, current=100.0)
    update = derive_session(context, _status(4, ramping=True))
    assert update.snapshot.state == SessionState.BOIL_RAMP
    assert [c.lines for c in update.commands] == [("T",)]


def test_boil_ramp_below_boil_temperature():
    context = _context(_build_recipe(), boil=100.0, current=97.5)
    update = derive_session(context, _status(4, ramping=True))
    assert update.snapshot.state == SessionState.BOIL_RAMP
    assert update.commands == ()


def test_boil_ramp_without_temperatures():
    update = derive_session(_context(_build_recipe(), boil=100.0), _status(4, ramping=True))
    assert update.commands == ()


def test_boil_addition_fires_once():
    recipe = _build_recipe([BoilStep(name="Perle", time=10)])
    context = _context(recipe, timer=_timer(10, 0))

    update = derive_session(context, _status(4))
    assert update.snapshot.state == SessionState.BOIL
    assert update.snapshot.minutes_left == 9
    assert update.snapshot.pending_addition == PendingAddition(name="Perle", time=10)
    assert update.fired_additions == (0,)
    # The recipe is only changed by its owner.
    assert recipe.boil_steps[0].sent is False

    recipe.mark_sent(update.fired_additions)
    assert recipe.boil_steps[0].sent is True

    for _ in range(3):
        again = derive_session(context, _status(4))
        assert again.snapshot.state == SessionState.BOIL
        assert again.snapshot.pending_addition is None
        assert again.fired_additions == ()


def test_boil_additions_with_same_time_fire_together():
    recipe = _build_recipe([BoilStep(name="Irish moss", time=5), BoilStep(name="Saaz", time=5)])
    context = _context(recipe, timer=_timer(5))

    first = derive_session(context, _status(4))
    assert first.fired_additions == (0, 1)
    assert first.snapshot.pending_addition.name == "Irish moss"
    recipe.mark_sent(first.fired_additions)

    again = derive_session(context, _status(4))
    assert again.fired_additions == ()
    assert again.snapshot.pending_addition is None


def test_boil_addition_at_zero_only_when_timer_reaches_zero():
    recipe = _build_recipe([BoilStep(name="Flameout", time=0)])
    running = derive_session(_context(recipe, timer=_timer(1, 30)), _status(4))
    assert running.fired_additions == ()
    assert running.commands == ()

    done = derive_session(_context(recipe, timer=_timer(0)), _status(4))
    assert done.fired_additions == (0,)
    assert [c.lines for c in done.commands] == [("T",)]


def test_boil_without_timer():
    recipe = _build_recipe([BoilStep(name="Flameout", time=0)])
    update = derive_session(_context(recipe), _status(4))
    assert update.snapshot.state == SessionState.BOIL
    assert update.commands == ()
    assert update.fired_additions == ()


@pytest.mark.parametrize("stage", [5, 6])
def test_hop_stand_and_finish(stage):
    context = _context(_build_recipe(), timer=_timer(15, 5))
    assert derive_session(context, _status(stage, InteractionCode.FINISH_BREW)).snapshot.state == SessionState.FINISHED
    assert (
        derive_session(context, _status(stage, InteractionCode.START_HOP_STAND)).snapshot.state
        == SessionState.HOP_STAND_ADD
    )
    hop_stand = derive_session(context, _status(stage)).snapshot
    assert hop_stand.state == SessionState.HOP_STAND
    assert hop_stand.minutes_left == 14


def test_stage_beyond_session_is_idle():
    assert derive_session(_context(_build_recipe()), _status(7)).snapshot.state == SessionState.IDLE


def test_only_mash_step_count_matters():
    recipe = _build_recipe()
    other = recipe.model_copy(update={"boil_time": 90, "hop_stand_time": 30, "name": "OTHER"})
    status = _status(3, InteractionCode.START_SPARGE)
    assert derive_session(_context(recipe), status).snapshot == derive_session(_context(other), status).snapshot


@pytest.mark.parametrize("minutes", [1, 2, 10, 59])
def test_minute_conventions_agree(minutes):
    sent = build_set_new_timer(minutes).lines[0]
    reported = int(sent[1:-1])
    assert reported == to_device_minutes(minutes)
    assert from_device_minutes(reported) == minutes

    context = _context(_build_recipe(), timer=_timer(reported))
    assert derive_session(context, _status(1)).snapshot.minutes_left == minutes


def test_context_observe_keeps_running_values():
    context = SessionContext()
    context = context.observe(decode_notification("C100.0,").record)
    context = context.observe(Temperature(target=100.0, current=99.0))
    context = context.observe(_timer(10))
    context = context.observe(decode_notification("F1.0,").record)
    assert context.boil_temperature == 100.0
    assert context.current_temperature == 99.0
    assert context.timer == _timer(10)


def test_context_is_not_changed_in_place():
    context = SessionContext()
    updated = context.observe(_timer(3))
    assert context.timer is None
    assert updated.timer == _timer(3)
    assert updated.with_recipe(_build_recipe()).recipe is not None
    assert updated.recipe is None


def test_snapshot_as_dict():
    snapshot = SessionSnapshot(
        SessionState.BOIL, brewing=True, minutes_left=9, seconds_left=5,
        pending_addition=PendingAddition(name="Perle", time=10),
    )
    assert snapshot.as_dict() == {
        "state": "boil",
        "brewing": True,
        "minutes_left": 9,
        "seconds_left": 5,
        "pending_addition": {"name": "Perle", "time": 10},
    }
