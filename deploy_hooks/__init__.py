"""Builders that expand helper configs into deployment template hooks."""

from deploy_hooks.core.hooks import merge_hooks
from deploy_hooks.core.validation import HookConfigError
from deploy_hooks.helpers import event_listener, sns_helper, sqs_helper

__all__ = ["HookConfigError", "merge_hooks", "event_listener", "sns_helper", "sqs_helper"]
