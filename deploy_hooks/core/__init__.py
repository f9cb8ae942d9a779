"""Naming, validation and hook merging utilities."""

from . import naming  # noqa: F401
from .hooks import MergedHooks, merge_hooks
from .validation import HookConfigError, is_object

__all__ = ["naming", "MergedHooks", "merge_hooks", "HookConfigError", "is_object"]
