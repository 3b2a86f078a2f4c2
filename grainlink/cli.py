import argparse
import dataclasses
import json
import sys
from enum import Enum
from pathlib import Path
from typing import Optional, TextIO

from pydantic import ValidationError

from grainlink.domain.recipe import RecipeDetails
from grainlink.parsing.commands import build_recipe_command
from grainlink.parsing.notifications import NotificationDecodeError, decode_notification
from grainlink.parsing.notifications.model import AutoStatus
from grainlink.session import SessionContext, derive_session


def load_recipe(path: str) -> RecipeDetails:
    try:
        return RecipeDetails.model_validate_json(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise SystemExit(f"Could not load recipe '{path}': {exc}") from exc


def _record_dict(record) -> dict:
    data = {"type": type(record).__name__}
    for key, value in dataclasses.asdict(record).items():
        data[key] = value.name if isinstance(value, Enum) else value
    return data


def _emit(out: TextIO, payload: dict) -> None:
    out.write(json.dumps(payload, separators=(",", ":")) + "\n")


def decode_stream(lines, recipe: Optional[RecipeDetails], out: TextIO) -> int:
    """
    Replay captured notification lines and print records, snapshots and commands as JSON.

    Returns:
        The number of lines that could not be decoded.
    """
    context = SessionContext(recipe=recipe)
    failures = 0
    for raw in lines:
        line = raw.rstrip(b"\r\n") if isinstance(raw, bytes) else raw.rstrip("\r\n")
        if not line:
            continue
        try:
            result = decode_notification(line)
        except NotificationDecodeError as exc:
            failures += 1
            _emit(out, {"error": str(exc)})
            continue
        context = context.observe(result.record)
        _emit(out, {"record": _record_dict(result.record)})
        commands = list(result.commands)
        if isinstance(result.record, AutoStatus):
            update = derive_session(context, result.record)
            if update.fired_additions:
                context.recipe.mark_sent(update.fired_additions)
            _emit(out, {"session": update.snapshot.as_dict()})
            commands.extend(update.commands)
        for command in commands:
            _emit(out, {"command": command.name, "lines": list(command.lines)})
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(prog="grainlink", description="Brewing controller protocol tools.")
    sub = parser.add_subparsers(dest="action", required=True)

    decode = sub.add_parser("decode", help="Decode captured notification lines.")
    decode.add_argument("logfile", nargs="?", help="File with one notification per line (default: stdin).")
    decode.add_argument("--recipe", type=str, default=None, help="Recipe JSON used to follow the session.")

    recipe = sub.add_parser("recipe", help="Print the recipe command lines for a recipe JSON file.")
    recipe.add_argument("recipe", type=str)
    recipe.add_argument("--water-treatment-alert", action="store_true")
    recipe.add_argument("--no-sparge-counter", action="store_true")
    recipe.add_argument("--sparge-alert", action="store_true")
    recipe.add_argument("--skip-start", action="store_true")
    recipe.add_argument("--boil-power-mode", action="store_true")
    recipe.add_argument("--strike-temp-mode", action="store_true")
    recipe.add_argument("--padded", action="store_true", help="Show the padded wire lines.")

    args = parser.parse_args(argv)

    if args.action == "recipe":
        command = build_recipe_command(
            load_recipe(args.recipe),
            show_water_treatment_alert=args.water_treatment_alert,
            show_sparge_counter=not args.no_sparge_counter,
            show_sparge_alert=args.sparge_alert,
            skip_start=args.skip_start,
            boil_power_mode=args.boil_power_mode,
            strike_temp_mode=args.strike_temp_mode,
        )
        lines = [line.decode("ascii") for line in command.encode()] if args.padded else command.lines
        for line in lines:
            sys.stdout.write(f"{line}|\n" if args.padded else f"{line}\n")
        return 0

    recipe_details = load_recipe(args.recipe) if args.recipe else None
    if args.logfile:
        with open(args.logfile, "rb") as f:
            failures = decode_stream(f, recipe_details, sys.stdout)
    else:
        failures = decode_stream(sys.stdin.buffer, recipe_details, sys.stdout)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
