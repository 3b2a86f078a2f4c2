"""
Command line builder for the brewing controller.

A command is one or more ASCII lines, each padded with spaces to
``LINE_WIDTH`` bytes. Lines of a multi-line command must reach the controller
in order with a pause between them; pacing is left to the transport.
"""
from __future__ import annotations

from dataclasses import dataclass

from grainlink.core.lines import LINE_WIDTH, format_flag, format_number, pad_line, to_device_minutes
from grainlink.domain.recipe import RecipeDetails

PRESS_SET = "T"

# Single line commands without parameters: name -> payload.
SIMPLE_COMMANDS: dict[str, str] = {
    "dismiss_boil_addition_alert": "A",
    "cancel_timer": "C",
    "decrement_target_temperature": "D",
    "finish_session": "F",
    "pause_or_resume_timer": "G",
    "toggle_heat": "H",
    "interaction_complete": "I",
    "turn_off_heat": "K0",
    "turn_on_heat": "K1",
    "turn_off_pump": "L0",
    "turn_on_pump": "L1",
    "get_current_boil_temperature": "M",
    "toggle_pump": "P",
    "disconnect_manual_mode": "Q0",
    "disconnect_and_cancel": "Q1",
    "disconnect_auto_mode": "Q2",
    "press_set": PRESS_SET,
    "increment_target_temperature": "U",
    "disable_sparge_water_alert": "V",
    "get_firmware_version": "X",
    "reset_controller": "Z",
    "reset_recipe_interrupted": "!",
    "turn_off_sparge_counter_mode": "d0",
    "turn_on_sparge_counter_mode": "d1",
    "turn_off_boil_control_mode": "e0",
    # Same payload as turn_off in the published protocol notes; unconfirmed on hardware.
    "turn_on_boil_control_mode": "e0",
    "exit_manual_power_control_mode": "f0",
    "enter_manual_power_control_mode": "f1",
    "get_controller_voltage_and_units": "g",
    "turn_off_sparge_alert_mode": "h0",
    "turn_on_sparge_alert_mode": "h1",
}


@dataclass(frozen=True)
class Command:
    """
    An outgoing command.

    Attributes:
        name: Machine-readable command name, used for logging.
        lines: The unpadded payload of each line, in transmission order.
    """
    name: str
    lines: tuple[str, ...]

    def with_lines(self, *lines: str) -> "Command":
        return Command(name=self.name, lines=self.lines + tuple(lines))

    def encode(self, width: int = LINE_WIDTH, warn: bool = True) -> list[bytes]:
        """
        Encode every line for the wire.

        Returns:
            One ``width`` byte ASCII buffer per line. Over-long lines are not
            truncated.
        """
        return [pad_line(line, width=width, warn=warn) for line in self.lines]

    def __len__(self) -> int:
        return len(self.lines)


def build_simple_command(name: str) -> Command:
    """
    Build a parameterless single line command by name.

    Raises:
        ValueError: If ``name`` is not a known simple command.
    """
    try:
        payload = SIMPLE_COMMANDS[name]
    except KeyError as exc:
        raise ValueError(f"Unknown command '{name}'. Available: {sorted(SIMPLE_COMMANDS)}") from exc
    return Command(name=name, lines=(payload,))


def build_press_set() -> Command:
    return build_simple_command("press_set")


def build_set_delayed_heat(minutes: int, seconds: int) -> Command:
    return Command(
        name="set_delayed_heat",
        lines=(f"B{to_device_minutes(minutes)},{seconds}",),
    )


def build_set_local_boil_temperature(temperature: float) -> Command:
    return Command(name="set_local_boil_temperature", lines=(f"E{format_number(temperature)},",))


def build_set_boil_time(time: int) -> Command:
    return Command(name="set_boil_time", lines=(f"J{time},",))


def build_skip_to_step(
    step: int,
    time_editable: bool,
    minutes_left: int,
    seconds_left: int,
    skip_ramp: bool,
    disable_add_grain: bool,
) -> Command:
    """
    Build the command to jump to a recipe step.

    Args:
        step: The step number to skip to.
        time_editable: Whether the step time can be adjusted on the controller.
        minutes_left: Minutes left on the step timer.
        seconds_left: Seconds left on the step timer.
        skip_ramp: Skip ramping to the step temperature.
        disable_add_grain: Do not show the add grain alert.
    """
    payload = ",".join(
        [
            f"N{step}",
            format_flag(time_editable),
            str(to_device_minutes(minutes_left)),
            str(seconds_left),
            format_flag(skip_ramp),
            format_flag(disable_add_grain),
        ]
    )
    return Command(name="skip_to_step", lines=(payload + ",",))


def build_set_new_timer(minutes: int) -> Command:
    return Command(name="set_new_timer", lines=(f"S{to_device_minutes(minutes)},",))


def build_set_new_timer_with_seconds(minutes: int, seconds: int) -> Command:
    return Command(
        name="set_new_timer_with_seconds",
        lines=(f"W{to_device_minutes(minutes)},{seconds},",),
    )


def build_set_target_temperature(temperature: float) -> Command:
    return Command(name="set_target_temperature", lines=(f"${format_number(temperature)},",))


def build_edit_stage(stage: int, time: int, temperature: float) -> Command:
    return Command(
        name="edit_stage",
        lines=(f"a{stage},{time},{format_number(temperature)},",),
    )


def build_set_sparge_progress(progress: int) -> Command:
    return Command(name="set_sparge_progress", lines=(f"b{progress},",))


def build_skip_to_interaction(interaction: int) -> Command:
    return Command(name="skip_to_interaction", lines=(f"c{int(interaction)},",))


def build_custom_command(payload: str) -> Command:
    return Command(name="custom", lines=(payload,))


def build_recipe_command(
    recipe: RecipeDetails,
    show_water_treatment_alert: bool = False,
    show_sparge_counter: bool = True,
    show_sparge_alert: bool = False,
    skip_start: bool = False,
    boil_power_mode: bool = False,
    strike_temp_mode: bool = False,
) -> Command:
    """
    Build the multi-line recipe command.

    Example for a 75 minute boil with two mash steps and four additions::

        R75,2,15.7,16.7,   boil time, mash steps, mash water, sparge water
        0,1,0,0,0,         water treatment alert, sparge counter, sparge alert, delay, skip start
        SAISON             recipe name
        0,4,0,0            hop stand time, boil additions, boil power mode, strike temp mode
        75,                one line per boil addition (minutes left in the boil)
        45,
        30,
        10,
        65:60,             one line per mash step (temperature:minutes)
        75:10,
        11,40,             only with a delayed start (minutes + 1, seconds)

    The recipe itself is left untouched.
    """
    command = Command(
        name="recipe",
        lines=(
            ",".join(
                [
                    f"R{recipe.boil_time}",
                    str(len(recipe.mash_steps)),
                    format_number(recipe.mash_water_amount),
                    format_number(recipe.sparge_water_amount),
                ]
            )
            + ",",
            ",".join(
                format_flag(flag)
                for flag in (
                    show_water_treatment_alert,
                    show_sparge_counter,
                    show_sparge_alert,
                    recipe.has_delay,
                    skip_start,
                )
            )
            + ",",
            recipe.name,
            ",".join(
                [
                    str(recipe.hop_stand_time),
                    str(len(recipe.boil_steps)),
                    format_flag(boil_power_mode),
                    format_flag(strike_temp_mode),
                ]
            ),
        ),
    )

    command = command.with_lines(*(f"{step.time}," for step in recipe.boil_steps))
    command = command.with_lines(
        *(f"{format_number(step.step_temperature)}:{step.step_time}," for step in recipe.mash_steps)
    )

    if recipe.has_delay:
        command = command.with_lines(f"{to_device_minutes(recipe.delay_minutes)},{recipe.delay_seconds},")

    return command
