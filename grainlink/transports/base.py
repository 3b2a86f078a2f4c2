from __future__ import annotations

from abc import ABC, abstractmethod


class LineTransport(ABC):
    """
    The link to the controller.

    Implementations deliver whole lines in both directions, in order and one
    line per transmission. Connection handling is up to the implementation.
    """

    @abstractmethod
    async def write_line(self, line: bytes) -> None:
        """Transmit one encoded command line."""

    @abstractmethod
    async def read_line(self) -> str | bytes | None:
        """Wait for the next notification line; ``None`` once the link is closed."""
