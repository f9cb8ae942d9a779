"""Default property values and placeholder tokens shared by the helpers.

Placeholders are resolved by the deployment templating tool, never here.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping

SERVICE_NAME = "${self:custom.serviceName}"
REGION = "${aws:region}"
ACCOUNT_ID = "${aws:accountId}"

SQS_BASE_ARN = f"arn:aws:sqs:{REGION}:{ACCOUNT_ID}"
SQS_BASE_URL = f"https://sqs.{REGION}.amazonaws.com/{ACCOUNT_ID}/"
SNS_BASE_ARN = f"arn:aws:sns:{REGION}:{ACCOUNT_ID}"

FIFO_SUFFIX = ".fifo"

CONSUMER_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {
        "timeout": 15,
        "batchSize": 1,
        "maximumBatchingWindow": 10,
    }
)

DLQ_CONSUMER_DEFAULTS: Mapping[str, Any] = MappingProxyType(dict(CONSUMER_DEFAULTS))

MAIN_QUEUE_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {
        "maxReceiveCount": 5,
        "receiveMessageWaitTimeSeconds": 20,
        "visibilityTimeout": 60,
    }
)

DELAY_QUEUE_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {
        **MAIN_QUEUE_DEFAULTS,
        "delaySeconds": 300,
    }
)

DLQ_QUEUE_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {
        "receiveMessageWaitTimeSeconds": 20,
        "visibilityTimeout": 60,
        "messageRetentionPeriod": 864000,  # 10 days
    }
)


def default_tags() -> List[Dict[str, str]]:
    """Return a fresh copy of the tags every generated queue carries."""
    return [
        {"Key": "Microservice", "Value": SERVICE_NAME},
        {"Key": "Stack", "Value": "${param:humanReadableStage}"},
    ]


def with_defaults(defaults: Mapping[str, Any], user_values: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Layer user supplied properties over a defaults mapping (user keys win)."""
    return {**defaults, **(user_values or {})}
