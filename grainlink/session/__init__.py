"""
Brewing session tracking.

Turns the stream of status records into session snapshots and the commands
needed to advance the controller past stages that need no decision.
"""
from grainlink.session.context import SessionContext
from grainlink.session.machine import SessionUpdate, derive_session
from grainlink.session.model import PendingAddition, SessionSnapshot, SessionState

__all__ = [
    "PendingAddition",
    "SessionContext",
    "SessionSnapshot",
    "SessionState",
    "SessionUpdate",
    "derive_session",
]
