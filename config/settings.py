"""
Configuration management using Pydantic Settings.

Environment variables (prefix ORGCHART_):
- ORGCHART_DOUBLE_CLICK_DELAY_MS: Window in which a second click counts as a double-click
- ORGCHART_LONG_PRESS_DURATION_MS: Hold time before a long-press deletes a node
- ORGCHART_LONG_PRESS_TICK_MS: Progress update interval during a long-press
- ORGCHART_LONG_PRESS_MOVE_THRESHOLD_PX: Pointer travel that aborts a long-press
- ORGCHART_EDITABLE: Enable drag-and-drop and long-press deletion
- ORGCHART_REPARENT_CYCLE_POLICY: 'repair' or 'reject'
- ORGCHART_DUPLICATE_ID_POLICY: 'last_wins' or 'reject'
- ORGCHART_LOG_LEVEL: loguru level name
"""
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import (
    DOUBLE_CLICK_DELAY_MS,
    LONG_PRESS_DURATION_MS,
    LONG_PRESS_TICK_MS,
    LONG_PRESS_MOVE_THRESHOLD_PX,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ORGCHART_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Interaction timing
    double_click_delay_ms: int = Field(default=DOUBLE_CLICK_DELAY_MS, gt=0)
    long_press_duration_ms: int = Field(default=LONG_PRESS_DURATION_MS, gt=0)
    long_press_tick_ms: int = Field(default=LONG_PRESS_TICK_MS, gt=0)
    long_press_move_threshold_px: float = Field(default=LONG_PRESS_MOVE_THRESHOLD_PX, ge=0)

    # Editing
    editable: bool = True
    reparent_cycle_policy: Literal['repair', 'reject'] = 'repair'

    # Tree building
    duplicate_id_policy: Literal['last_wins', 'reject'] = 'last_wins'

    # Logging
    log_level: Literal['TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL'] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    def get_interaction_config(self) -> dict:
        """Get controller timing configuration in seconds/pixels."""
        return {
            'double_click_delay': self.double_click_delay_ms / 1000.0,
            'long_press_duration': self.long_press_duration_ms / 1000.0,
            'long_press_tick': self.long_press_tick_ms / 1000.0,
            'long_press_move_threshold': self.long_press_move_threshold_px,
            'editable': self.editable,
            'reparent_cycle_policy': self.reparent_cycle_policy,
        }

    def get_builder_config(self) -> dict:
        """Get tree builder configuration."""
        return {
            'duplicate_policy': self.duplicate_id_policy,
        }


# Global settings instance
settings = Settings()
