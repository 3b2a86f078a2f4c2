"""
Decoder for notification lines sent by the brewing controller.

A notification is ``<type char><field>,<field>,...,``. The trailing comma
yields an empty last field which is discarded; the remaining fields are read
by position.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from grainlink.parsing.commands.builder import Command, build_press_set
from grainlink.parsing.notifications.model import (
    AlertDismissed,
    AutoStatus,
    BoilTemperature,
    FirmwareVersion,
    InteractionAck,
    PowerState,
    StatusRecord,
    Temperature,
    Timer,
    Units,
    UnknownNotification,
    Voltage,
    VoltageUnits,
)


class NotificationDecodeError(ValueError):
    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"Failed to decode notification {line!r}: {reason}")
        self.line = line
        self.reason = reason


@dataclass(frozen=True)
class DecodeResult:
    """
    The outcome of decoding one line.

    Attributes:
        record: The decoded status record.
        commands: Commands to send back to the controller because of this line.
    """
    record: StatusRecord
    commands: tuple[Command, ...] = field(default_factory=tuple)


def split_fields(line: str) -> list[str]:
    """
    >>> split_fields("T1,10,60,30,")
    ['1', '10', '60', '30']
    """
    return line[1:].split(",")[:-1]


def _parse_bool(value: str) -> bool:
    return value.strip() == "1"


def _decode_boil_temperature(fields: list[str]) -> BoilTemperature:
    return BoilTemperature(value=float(fields[0]))


def _decode_firmware_version(fields: list[str]) -> FirmwareVersion:
    return FirmwareVersion(value=fields[0])


def _decode_interaction(fields: list[str]) -> InteractionAck:
    return InteractionAck(code=fields[0])


def _decode_timer(fields: list[str]) -> Timer:
    return Timer(
        active=_parse_bool(fields[0]),
        minutes_left=int(fields[1]),
        total_start_minutes=int(fields[2]),
        seconds_left=int(fields[3]),
    )


def _decode_voltage_units(fields: list[str]) -> VoltageUnits:
    return VoltageUnits(voltage=Voltage(int(fields[0])), units=Units(int(fields[1])))


def _decode_power_state(fields: list[str]) -> PowerState:
    return PowerState(
        heat_output_percent=int(fields[0]),
        timer_paused=_parse_bool(fields[1]),
        step_mash_mode=_parse_bool(fields[2]),
        recipe_interrupted=_parse_bool(fields[3]),
        manual_power_mode=_parse_bool(fields[4]),
        sparge_alert_shown=_parse_bool(fields[5]),
    )


def _decode_temperature(fields: list[str]) -> Temperature:
    return Temperature(target=float(fields[0]), current=float(fields[1]))


def _decode_auto_status(fields: list[str]) -> AutoStatus:
    return AutoStatus(
        heat_on=_parse_bool(fields[0]),
        pump_on=_parse_bool(fields[1]),
        auto_mode_on=_parse_bool(fields[2]),
        ramping_to_target=_parse_bool(fields[3]),
        waiting_for_interaction=_parse_bool(fields[4]),
        interaction_code=int(fields[5]),
        stage_number=int(fields[6]),
        delayed_heat_active=_parse_bool(fields[7]),
    )


_DECODERS: dict[str, Callable[[list[str]], StatusRecord]] = {
    "C": _decode_boil_temperature,
    "F": _decode_firmware_version,
    "I": _decode_interaction,
    "T": _decode_timer,
    "V": _decode_voltage_units,
    "W": _decode_power_state,
    "X": _decode_temperature,
    "Y": _decode_auto_status,
}

NOTIFICATION_TYPES = frozenset(_DECODERS) | {"A"}


def decode_notification(line: str | bytes) -> DecodeResult:
    """
    Decode a single notification line.

    Args:
        line: The notification as text or ASCII bytes.

    Returns:
        A ``DecodeResult``. Unknown type characters give an
        ``UnknownNotification`` record and no commands. An ``A`` line always
        asks for a "press set" command, even when seen repeatedly.

    Raises:
        NotificationDecodeError: If a field is missing or cannot be parsed.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("ascii")
        except UnicodeDecodeError as exc:
            raise NotificationDecodeError(repr(line), f"not ASCII: {exc}") from exc

    tag = line[:1]
    if tag == "A":
        return DecodeResult(record=AlertDismissed(), commands=(build_press_set(),))

    decoder = _DECODERS.get(tag)
    if decoder is None:
        return DecodeResult(record=UnknownNotification(tag=tag, raw=line))

    try:
        record = decoder(split_fields(line))
    except IndexError as exc:
        raise NotificationDecodeError(line, "missing field") from exc
    except ValueError as exc:
        raise NotificationDecodeError(line, str(exc)) from exc
    return DecodeResult(record=record)
