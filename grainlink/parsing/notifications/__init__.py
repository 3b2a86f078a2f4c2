"""
Notification decoding for the brewing controller.

This sub-package turns single notification lines into typed status records.
"""
from grainlink.parsing.notifications.decode import (
    DecodeResult,
    NOTIFICATION_TYPES,
    NotificationDecodeError,
    decode_notification,
    split_fields,
)
from grainlink.parsing.notifications.model import (
    AlertDismissed,
    AutoStatus,
    BoilTemperature,
    FirmwareVersion,
    InteractionAck,
    InteractionCode,
    PowerState,
    StatusRecord,
    Temperature,
    Timer,
    Units,
    UnknownNotification,
    Voltage,
    VoltageUnits,
)

__all__ = [
    "AlertDismissed",
    "AutoStatus",
    "BoilTemperature",
    "DecodeResult",
    "FirmwareVersion",
    "InteractionAck",
    "InteractionCode",
    "NOTIFICATION_TYPES",
    "NotificationDecodeError",
    "PowerState",
    "StatusRecord",
    "Temperature",
    "Timer",
    "Units",
    "UnknownNotification",
    "Voltage",
    "VoltageUnits",
    "decode_notification",
    "split_fields",
]
