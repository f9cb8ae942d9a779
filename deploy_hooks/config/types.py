"""Typed configuration contracts for hook helper inputs and outputs."""

from __future__ import annotations

from typing import Any, Dict, List, NotRequired, Required, Tuple, TypedDict


class ConsumerProperties(TypedDict, total=False):
    """Consumer function settings for one queue tier."""

    timeout: int
    handler: str
    description: str
    prefixPath: str
    maximumBatchingWindow: int
    batchSize: int
    functionProperties: Dict[str, Any]
    rawProperties: Dict[str, Any]
    eventProperties: Dict[str, Any]
    useMainHandler: bool


class QueueProperties(TypedDict, total=False):
    """Queue resource settings for one queue tier.

    Keys not listed here are passed through into the queue ``Properties``.
    """

    maxReceiveCount: int
    receiveMessageWaitTimeSeconds: int
    visibilityTimeout: int
    messageRetentionPeriod: int
    delaySeconds: int
    fifoQueue: bool
    fifoThroughputLimit: str
    contentBasedDeduplication: bool
    deduplicationScope: str
    addTags: List[Dict[str, str]]
    generateEnvVars: bool


class SourceSnsTopic(TypedDict, total=False):
    name: Required[str]
    filterPolicy: NotRequired[Dict[str, Any]]


class SQSConfig(TypedDict, total=False):
    """Input of the SQS queue-group helper."""

    name: Required[str]
    consumerProperties: NotRequired[ConsumerProperties]
    mainQueueProperties: NotRequired[QueueProperties]
    delayConsumerProperties: NotRequired[ConsumerProperties]
    delayQueueProperties: NotRequired[QueueProperties]
    dlqConsumerProperties: NotRequired[ConsumerProperties]
    dlqQueueProperties: NotRequired[QueueProperties]
    sourceSnsTopic: NotRequired[SourceSnsTopic]


class SNSTopicConfig(TypedDict):
    name: str


class SNSConfig(TypedDict):
    """Input of the SNS topic helper."""

    topic: SNSTopicConfig


# ("resource" | "function" | "iamStatement" | "envVars", payload)
Hook = Tuple[str, Dict[str, Any]]
