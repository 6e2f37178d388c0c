# src/fabricctl/config/models.py

from datetime import timedelta
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fabricctl.utils.duration import parse_duration


class FabricConfig(BaseModel):
    """Operator settings read from ``<home>/config.yaml``."""

    default_node_name: str = "default"

    # tcp-inlet create defaults
    default_connection_wait: str = "5s"
    default_retry_wait: str = "20s"
    request_timeout: str = "10s"

    # how often the progress reporter checks for completion
    progress_poll_interval_ms: int = Field(default=100, ge=10, le=1000)

    log_dir: Optional[Path] = None

    @field_validator("default_connection_wait", "default_retry_wait", "request_timeout")
    @classmethod
    def _valid_duration(cls, v: str) -> str:
        parse_duration(v)
        return v

    @field_validator("default_node_name")
    @classmethod
    def _non_empty_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("default_node_name must not be empty")
        return v

    def request_timeout_delta(self) -> timedelta:
        return parse_duration(self.request_timeout)

    def poll_interval_seconds(self) -> float:
        return self.progress_poll_interval_ms / 1000.0
