from grainlink.controller import BrewController
from grainlink.domain import BoilStep, MashStep, RecipeDetails
from grainlink.app import ControllerSettings
from grainlink.parsing.commands import Command, build_recipe_command, build_simple_command
from grainlink.parsing.notifications import decode_notification, NotificationDecodeError
from grainlink.session import SessionContext, SessionSnapshot, SessionState, derive_session
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "BrewController",
    "BoilStep",
    "MashStep",
    "RecipeDetails",
    "ControllerSettings",
    "Command",
    "build_recipe_command",
    "build_simple_command",
    "decode_notification",
    "NotificationDecodeError",
    "SessionContext",
    "SessionSnapshot",
    "SessionState",
    "derive_session",
]

try:
    __version__ = version("grainlink")
except PackageNotFoundError:
    __version__ = "0.0.0"
