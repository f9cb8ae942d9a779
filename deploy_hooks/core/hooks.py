"""Hook kinds and merging of hook lists by kind."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from deploy_hooks.config.types import Hook
from deploy_hooks.core.validation import HookConfigError

RESOURCE = "resource"
FUNCTION = "function"
IAM_STATEMENT = "iamStatement"
ENV_VARS = "envVars"

HOOK_KINDS = (RESOURCE, FUNCTION, IAM_STATEMENT, ENV_VARS)


@dataclass
class MergedHooks:
    resources: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    functions: List[Dict[str, Any]] = field(default_factory=list)
    iam_statements: List[Dict[str, Any]] = field(default_factory=list)
    env_vars: Dict[str, str] = field(default_factory=dict)


def merge_hooks(hooks: Iterable[Hook]) -> MergedHooks:
    """Group hooks by kind the way the templating tool consumes them.

    Resources are keyed by name (a later hook replaces an earlier one with the
    same name); env vars are merged into a single mapping.
    """
    merged = MergedHooks()
    for kind, payload in hooks:
        if kind == RESOURCE:
            merged.resources[payload["name"]] = payload["resource"]
        elif kind == FUNCTION:
            merged.functions.append(payload)
        elif kind == IAM_STATEMENT:
            merged.iam_statements.append(payload)
        elif kind == ENV_VARS:
            merged.env_vars.update(payload)
        else:
            raise HookConfigError(f"Unknown hook kind {kind!r}. Expected one of {', '.join(HOOK_KINDS)}")
    return merged
