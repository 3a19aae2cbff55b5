"""
Settings for applications and tools built on streambind.

The core functions take no configuration; these settings only drive the
ambient layer (logging, metrics).
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_format: str = "text"
    metrics_enabled: bool = False
    metrics_port: int = 8080

    @staticmethod
    def from_env() -> "Settings":
        log_level = os.getenv("STREAMBIND_LOG_LEVEL", "INFO").upper()
        log_format = os.getenv("STREAMBIND_LOG_FORMAT", "text").lower()
        metrics_enabled = _env_bool("STREAMBIND_METRICS_ENABLED", "false")
        metrics_port = int(os.getenv("STREAMBIND_METRICS_PORT", "8080"))
        return Settings(
            log_level=log_level,
            log_format=log_format,
            metrics_enabled=metrics_enabled,
            metrics_port=metrics_port,
        )
