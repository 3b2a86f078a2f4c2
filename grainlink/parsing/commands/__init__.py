"""
Command builder for the brewing controller.

This sub-package constructs the ASCII command lines sent to the controller.
Every line is padded with spaces to a fixed width; a command may span several
lines which have to be transmitted together and in order.
"""
from grainlink.parsing.commands.builder import (
    Command,
    PRESS_SET,
    SIMPLE_COMMANDS,
    build_custom_command,
    build_edit_stage,
    build_press_set,
    build_recipe_command,
    build_set_boil_time,
    build_set_delayed_heat,
    build_set_local_boil_temperature,
    build_set_new_timer,
    build_set_new_timer_with_seconds,
    build_set_sparge_progress,
    build_set_target_temperature,
    build_simple_command,
    build_skip_to_interaction,
    build_skip_to_step,
)

__all__ = [
    "Command",
    "PRESS_SET",
    "SIMPLE_COMMANDS",
    "build_custom_command",
    "build_edit_stage",
    "build_press_set",
    "build_recipe_command",
    "build_set_boil_time",
    "build_set_delayed_heat",
    "build_set_local_boil_temperature",
    "build_set_new_timer",
    "build_set_new_timer_with_seconds",
    "build_set_sparge_progress",
    "build_set_target_temperature",
    "build_simple_command",
    "build_skip_to_interaction",
    "build_skip_to_step",
]
