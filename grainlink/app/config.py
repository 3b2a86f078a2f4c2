from functools import lru_cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings


class ControllerSettings(BaseSettings):
    # The controller misbehaves when lines arrive back-to-back.
    inter_line_delay: float = Field(0.25, ge=0, validation_alias="INTER_LINE_DELAY")

    queue_max_size: int = Field(200, ge=0, validation_alias="QUEUE_MAX_SIZE")
    log_ring_size: int = Field(200, gt=0, validation_alias="LOG_RING_SIZE")

    enable_auto_advance: bool = Field(True, validation_alias="ENABLE_AUTO_ADVANCE")
    warn_on_long_lines: bool = Field(True, validation_alias="WARN_ON_LONG_LINES")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> ControllerSettings:
    return ControllerSettings()
