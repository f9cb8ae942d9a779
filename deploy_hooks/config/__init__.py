"""Configuration contracts, defaults and settings."""

from .settings import HookSettings

__all__ = ["HookSettings"]
