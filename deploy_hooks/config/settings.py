"""Process settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class HookSettings:
    log_level: str
    environment: Optional[str]

    @staticmethod
    def load() -> "HookSettings":
        level = os.environ.get("HOOKS_LOG_LEVEL", "INFO").strip().upper()
        if level not in _LOG_LEVELS:
            level = "INFO"

        return HookSettings(
            log_level=level,
            environment=os.environ.get("ENVIRONMENT") or None,
        )
