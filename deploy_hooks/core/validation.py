"""Validation primitives shared by the hook helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Tuple

from pydantic import ValidationError


class HookConfigError(ValueError):
    """Raised when a helper configuration is missing or malformed."""


def is_object(value: Any) -> bool:
    """Return True for plain mappings (not lists, strings or scalars)."""
    return isinstance(value, Mapping)


def is_provided(value: Any) -> bool:
    """Falsy scalars (None, False, 0, "") mean the option was left out.

    Mappings and sequences always count as provided, even when empty.
    """
    if isinstance(value, (Mapping, list, tuple)):
        return True
    return bool(value)


def require_non_empty_string(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value:
        raise HookConfigError(message)
    return value


def require_objects(entries: Iterable[Tuple[str, Any]], helper: str) -> None:
    """Check that every provided property bag is a plain object.

    Bags left out (see ``is_provided``) are accepted.
    """
    for label, properties in entries:
        if is_provided(properties) and not is_object(properties):
            raise HookConfigError(f"{label} Properties must be an Object with configuration in {helper}")


def describe_model_error(exc: ValidationError, helper: str, prefix: str = "") -> HookConfigError:
    """Translate the first pydantic error into a HookConfigError naming the field."""
    errors = exc.errors()
    if not errors:
        return HookConfigError(f"Invalid configuration in {helper}")
    first = errors[0]
    parts = [prefix] if prefix else []
    parts.extend(str(part) for part in first.get("loc", ()))
    field = ".".join(parts)
    return HookConfigError(f"{field} {first.get('msg', 'is invalid')} in {helper}")
