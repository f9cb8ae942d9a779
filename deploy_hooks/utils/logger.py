"""JSON logger utility for the hook helpers.

Emits one structured line per record with the helper name and environment
when available, so template renders can be grepped next to deploy logs.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from deploy_hooks.config.settings import HookSettings


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        env = getattr(record, "environment", None)
        if env:
            payload["environment"] = env
        helper = getattr(record, "helper", None)
        if helper:
            payload["helper"] = helper
        entity = getattr(record, "entity", None)
        if entity:
            payload["entity"] = entity
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload["timestamp"] = record.created
        return json.dumps(payload, ensure_ascii=False, default=str)


class _Adapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Dict[str, Any]):  # type: ignore[override]
        extra = self.extra.copy() if isinstance(self.extra, dict) else {}
        if "extra" in kwargs and isinstance(kwargs["extra"], dict):
            extra.update(kwargs["extra"])  # merge per-call extras
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str, helper: Optional[str] = None) -> logging.LoggerAdapter:
    """Return a JSON-formatted logger adapter tagged with the helper name."""
    settings = HookSettings.load()
    base = logging.getLogger(name)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        base.addHandler(handler)
    base.setLevel(getattr(logging, settings.log_level, logging.INFO))
    extras: Dict[str, Any] = {"environment": settings.environment}
    if helper:
        extras["helper"] = helper
    return _Adapter(base, extras)
