"""Hook helpers: SQS queue groups, SNS topics and event listeners."""

from . import sns_helper, sqs_helper  # noqa: F401
from .event_listener_helper import event_listener

__all__ = ["sns_helper", "sqs_helper", "event_listener"]
