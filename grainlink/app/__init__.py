from grainlink.app.config import ControllerSettings, get_settings
from grainlink.app.logging import RingBufferHandler, create_logger

__all__ = ["ControllerSettings", "get_settings", "RingBufferHandler", "create_logger"]
