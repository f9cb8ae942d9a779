"""SQS queue-group helper.

Expands one configuration object into the hooks of a full consumption setup:
main queue, optional delay queue, dead-letter queue, up to three consumer
functions and an optional SNS-to-SQS subscription.

Redrive chain: main -> delay -> dlq when the delay queue is enabled, otherwise
main -> dlq. Every call resolves its configuration into a frozen ``QueueGroup``
that is passed explicitly to the builders below.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from deploy_hooks.config.defaults import (
    CONSUMER_DEFAULTS,
    DELAY_QUEUE_DEFAULTS,
    DLQ_CONSUMER_DEFAULTS,
    DLQ_QUEUE_DEFAULTS,
    MAIN_QUEUE_DEFAULTS,
    SQS_BASE_ARN,
    default_tags,
    with_defaults,
)
from deploy_hooks.config.types import Hook, SQSConfig
from deploy_hooks.core.hooks import ENV_VARS, FUNCTION, IAM_STATEMENT, RESOURCE
from deploy_hooks.core.naming import (
    EntityNames,
    ResourceArns,
    generate_arns,
    generate_names,
    queue_physical_name,
    queue_url,
    split_words,
    topic_arn,
)
from deploy_hooks.core.validation import (
    HookConfigError,
    is_object,
    is_provided,
    require_non_empty_string,
    require_objects,
)
from deploy_hooks.utils.logger import get_logger

HELPER = "SQS helper"

logger = get_logger(__name__, helper="sqs")


class SQSType(str, Enum):
    MAIN = "Main"
    DELAY = "Delay"
    DLQ = "DLQ"


@dataclass(frozen=True)
class QueueGroup:
    """Validated and defaulted configuration of one queue group."""

    names: EntityNames
    arns: ResourceArns
    fifo_queue: bool
    use_delay_queue: bool
    consumer_properties: Dict[str, Any]
    main_queue_properties: Dict[str, Any]
    delay_consumer_properties: Dict[str, Any]
    delay_queue_properties: Dict[str, Any]
    dlq_consumer_properties: Optional[Dict[str, Any]]
    dlq_queue_properties: Dict[str, Any]
    source_sns_topic: Optional[Mapping[str, Any]]


def sqs_permissions() -> Hook:
    """IAM statement granting the service's functions access to its queues."""
    return (
        IAM_STATEMENT,
        {
            "action": [
                "sqs:SendMessage",
                "sqs:DeleteMessage",
                "sqs:ReceiveMessage",
                "sqs:GetQueueAttributes",
            ],
            "resource": f"{SQS_BASE_ARN}:*",
        },
    )


def get_env_var(queue_name: str, is_fifo_queue: bool = False) -> Dict[str, str]:
    """Env var with the main queue URL, without building the queue group."""
    names = generate_names(queue_name)
    return {f"{names.env_var_name}_SQS_QUEUE_URL": queue_url(names.main_queue, bool(is_fifo_queue))}


def build_hooks(configs: Optional[SQSConfig] = None, *, set_global_env_vars: bool = True) -> List[Hook]:
    configs = configs if configs is not None else {}

    validate_configs(configs)
    group = resolve_configs(configs)

    delay_hooks: List[Hook] = []
    if group.use_delay_queue:
        # the delay consumer bag always carries defaults, so it is consumed by
        # its own function unless it routes to the main handler
        if should_add_consumer(group.delay_consumer_properties):
            delay_hooks.append(build_consumer_function(group, group.delay_consumer_properties, SQSType.DELAY))
        delay_hooks.append(build_queue_resource(group, group.delay_queue_properties, SQSType.DELAY))

    dlq_consumer_hooks: List[Hook] = []
    if should_add_consumer(group.dlq_consumer_properties):
        dlq_consumer_hooks.append(build_consumer_function(group, group.dlq_consumer_properties, SQSType.DLQ))

    hooks: List[Hook] = [
        *(build_url_env_vars(group) if set_global_env_vars else []),
        build_consumer_function(group, group.consumer_properties, SQSType.MAIN),
        build_queue_resource(group, group.main_queue_properties, SQSType.MAIN),
        *delay_hooks,
        build_queue_resource(group, group.dlq_queue_properties, SQSType.DLQ),
        *dlq_consumer_hooks,
        *build_sns_publish_policy(group),
        *build_sns_to_sqs_subscription(group),
    ]

    logger.debug(
        "Built SQS queue group hooks",
        extra={"entity": group.names.title_name},
    )
    return hooks


def validate_configs(configs: Mapping[str, Any]) -> None:
    if not is_object(configs):
        raise HookConfigError(f"Configuration must be an Object in {HELPER}")

    name = require_non_empty_string(configs.get("name"), f"Missing or empty name hook configuration in {HELPER}")
    if not split_words(name):
        raise HookConfigError(f"name must contain letters or digits in {HELPER}. Received {name!r}")

    require_objects(
        [
            ("Main Consumer", configs.get("consumerProperties")),
            ("Main Queue", configs.get("mainQueueProperties")),
            ("Delay Consumer", configs.get("delayConsumerProperties")),
            ("Delay Queue", configs.get("delayQueueProperties")),
            ("DLQ Consumer", configs.get("dlqConsumerProperties")),
            ("DLQ Queue", configs.get("dlqQueueProperties")),
        ],
        HELPER,
    )

    source_sns_topic = configs.get("sourceSnsTopic")
    if is_provided(source_sns_topic):
        topic_name = source_sns_topic.get("name") if is_object(source_sns_topic) else None
        if not isinstance(topic_name, str):
            raise HookConfigError(f"sourceSnsTopic.name must be a String in {HELPER}. Received {topic_name!r}")

        filter_policy = source_sns_topic.get("filterPolicy")
        if is_provided(filter_policy) and not is_object(filter_policy):
            raise HookConfigError(
                f"sourceSnsTopic.filterPolicy must be an object in {HELPER}. Received {filter_policy!r}"
            )


def resolve_configs(user_configs: Mapping[str, Any]) -> QueueGroup:
    """Layer user properties over defaults and derive names and ARNs."""
    main_queue_input = user_configs.get("mainQueueProperties") or {}
    dlq_consumer_input = user_configs.get("dlqConsumerProperties")

    fifo_queue = bool(main_queue_input.get("fifoQueue"))
    names = generate_names(user_configs["name"])

    return QueueGroup(
        names=names,
        arns=generate_arns(names, fifo_queue),
        fifo_queue=fifo_queue,
        use_delay_queue=is_object(user_configs.get("delayQueueProperties")),
        consumer_properties=with_defaults(CONSUMER_DEFAULTS, user_configs.get("consumerProperties")),
        main_queue_properties=with_defaults(MAIN_QUEUE_DEFAULTS, main_queue_input),
        # delay consumer and queue use the main consumer defaults
        delay_consumer_properties=with_defaults(CONSUMER_DEFAULTS, user_configs.get("delayConsumerProperties")),
        delay_queue_properties=with_defaults(DELAY_QUEUE_DEFAULTS, user_configs.get("delayQueueProperties")),
        dlq_consumer_properties=(
            with_defaults(DLQ_CONSUMER_DEFAULTS, dlq_consumer_input) if is_object(dlq_consumer_input) else None
        ),
        dlq_queue_properties=with_defaults(DLQ_QUEUE_DEFAULTS, user_configs.get("dlqQueueProperties")),
        source_sns_topic=user_configs["sourceSnsTopic"] if is_provided(user_configs.get("sourceSnsTopic")) else None,
    )


def should_add_consumer(consumer_properties: Optional[Mapping[str, Any]]) -> bool:
    """True when the tier gets a dedicated function instead of the main handler."""
    return bool(consumer_properties) and not consumer_properties.get("useMainHandler")  # type: ignore[union-attr]


def _uses_main_handler(consumer_properties: Optional[Mapping[str, Any]]) -> bool:
    return bool(consumer_properties and consumer_properties.get("useMainHandler"))


def queue_has_consumer(group: QueueGroup, sqs_type: SQSType) -> bool:
    if sqs_type is SQSType.MAIN:
        return True

    consumer_properties = (
        group.delay_consumer_properties if sqs_type is SQSType.DELAY else group.dlq_consumer_properties
    )
    return should_add_consumer(consumer_properties) or _uses_main_handler(consumer_properties)


def build_url_env_vars(group: QueueGroup) -> List[Hook]:
    env_var_name = group.names.env_var_name
    global_env_vars: Dict[str, str] = {}

    if group.main_queue_properties.get("generateEnvVars"):
        global_env_vars[f"{env_var_name}_SQS_QUEUE_URL"] = queue_url(group.names.main_queue, group.fifo_queue)

    if group.delay_queue_properties.get("generateEnvVars"):
        global_env_vars[f"{env_var_name}_DELAY_QUEUE_URL"] = queue_url(group.names.delay_queue, group.fifo_queue)

    if group.dlq_queue_properties.get("generateEnvVars"):
        global_env_vars[f"{env_var_name}_DLQ_QUEUE_URL"] = queue_url(group.names.dlq, group.fifo_queue)

    if not global_env_vars:
        return []

    return [(ENV_VARS, global_env_vars)]


def build_consumer_function(group: QueueGroup, properties: Mapping[str, Any], sqs_type: SQSType) -> Hook:
    names, arns = group.names, group.arns
    function_name = names.title_name
    filename = names.filename

    if sqs_type is SQSType.MAIN:
        arn, depends_on = arns.main_queue, names.main_queue
    elif sqs_type is SQSType.DELAY:
        arn, depends_on = arns.delay_queue, names.delay_queue
        function_name = f"{function_name}Delay"
        filename = f"{filename}-delay"
    else:
        arn, depends_on = arns.dlq, names.dlq
        function_name = f"{function_name}DLQ"
        filename = f"{filename}-dlq"

    if properties.get("prefixPath"):
        filename = f"{properties['prefixPath']}/{filename}"

    events = [create_event_source(arn, properties)]
    if sqs_type is SQSType.MAIN:
        if _uses_main_handler(group.delay_consumer_properties):
            events.append(create_event_source(arns.delay_queue, group.delay_consumer_properties))
        if _uses_main_handler(group.dlq_consumer_properties):
            events.append(create_event_source(arns.dlq, group.dlq_consumer_properties))  # type: ignore[arg-type]

    return (
        FUNCTION,
        {
            "functionName": f"{function_name}QueueConsumer",
            "handler": properties.get("handler") or f"src/sqs-consumer/{filename}-consumer.handler",
            "description": properties.get("description") or f"{function_name} SQS Queue Consumer",
            "timeout": properties.get("timeout"),
            "rawProperties": {
                "dependsOn": [depends_on],
                **(properties.get("rawProperties") or {}),
            },
            "events": events,
            **(properties.get("functionProperties") or {}),
        },
    )


def create_event_source(arn: str, properties: Mapping[str, Any]) -> Dict[str, Any]:
    sqs_event: Dict[str, Any] = {
        "arn": arn,
        "functionResponseType": "ReportBatchItemFailures",
    }
    # absent or zero values are left to the platform defaults
    if properties.get("batchSize"):
        sqs_event["batchSize"] = properties["batchSize"]
    if properties.get("maximumBatchingWindow"):
        sqs_event["maximumBatchingWindow"] = properties["maximumBatchingWindow"]
    sqs_event.update(properties.get("eventProperties") or {})
    return {"sqs": sqs_event}


_CONSUMED_QUEUE_KEYS = (
    "maxReceiveCount",
    "receiveMessageWaitTimeSeconds",
    "visibilityTimeout",
    "messageRetentionPeriod",
    "delaySeconds",
    "fifoQueue",
    "fifoThroughputLimit",
    "contentBasedDeduplication",
    "deduplicationScope",
    "addTags",
    "generateEnvVars",
)


def build_queue_resource(group: QueueGroup, properties: Mapping[str, Any], sqs_type: SQSType) -> Hook:
    names, arns = group.names, group.arns
    dead_letter_target_arn: Optional[str] = None
    depends_on: Optional[str] = None

    if sqs_type is SQSType.MAIN:
        name = names.main_queue
        dead_letter_target_arn = arns.delay_queue if group.use_delay_queue else arns.dlq
        depends_on = names.delay_queue if group.use_delay_queue else names.dlq
    elif sqs_type is SQSType.DELAY:
        name = names.delay_queue
        dead_letter_target_arn = arns.dlq
        depends_on = names.dlq
    else:
        name = names.dlq

    queue_properties: Dict[str, Any] = {
        "QueueName": queue_physical_name(name, group.fifo_queue),
        "ReceiveMessageWaitTimeSeconds": properties.get("receiveMessageWaitTimeSeconds"),
        "VisibilityTimeout": properties.get("visibilityTimeout"),
    }

    if dead_letter_target_arn:
        queue_properties["RedrivePolicy"] = json.dumps(
            {
                "maxReceiveCount": properties.get("maxReceiveCount"),
                "deadLetterTargetArn": dead_letter_target_arn,
            },
            separators=(",", ":"),
        )

    if properties.get("messageRetentionPeriod"):
        queue_properties["MessageRetentionPeriod"] = properties["messageRetentionPeriod"]
    if properties.get("delaySeconds"):
        queue_properties["DelaySeconds"] = properties["delaySeconds"]

    if group.fifo_queue:
        queue_properties["FifoQueue"] = True
        if properties.get("fifoThroughputLimit"):
            queue_properties["FifoThroughputLimit"] = properties["fifoThroughputLimit"]
        if properties.get("deduplicationScope"):
            queue_properties["DeduplicationScope"] = properties["deduplicationScope"]
        if properties.get("contentBasedDeduplication"):
            queue_properties["ContentBasedDeduplication"] = True

    has_consumer = "true" if queue_has_consumer(group, sqs_type) else "false"
    queue_properties["Tags"] = [
        *default_tags(),
        {"Key": "ResourceSet", "Value": names.title_name},
        {"Key": "SQSType", "Value": sqs_type.value},
        {"Key": "HasConsumer", "Value": has_consumer},
        *(properties.get("addTags") or []),
    ]

    queue_properties.update({key: value for key, value in properties.items() if key not in _CONSUMED_QUEUE_KEYS})

    resource: Dict[str, Any] = {
        "Type": "AWS::SQS::Queue",
        "Properties": queue_properties,
    }
    if depends_on:
        resource["DependsOn"] = [depends_on]

    return (RESOURCE, {"name": name, "resource": resource})


def build_sns_publish_policy(group: QueueGroup) -> List[Hook]:
    if group.source_sns_topic is None:
        return []

    names = group.names
    return [
        (
            RESOURCE,
            {
                "name": names.main_queue_policy,
                "resource": {
                    "Type": "AWS::SQS::QueuePolicy",
                    "Properties": {
                        "Queues": [queue_url(names.main_queue, group.fifo_queue)],
                        "PolicyDocument": {
                            "Version": "2012-10-17",
                            "Statement": [
                                {
                                    "Effect": "Allow",
                                    "Action": "sqs:SendMessage",
                                    "Resource": group.arns.main_queue,
                                    "Principal": {"Service": "sns.amazonaws.com"},
                                    "Condition": {
                                        "ArnEquals": {
                                            "aws:SourceArn": topic_arn(group.source_sns_topic["name"]),
                                        },
                                    },
                                }
                            ],
                        },
                    },
                    "DependsOn": [names.main_queue],
                },
            },
        )
    ]


def build_sns_to_sqs_subscription(group: QueueGroup) -> List[Hook]:
    topic = group.source_sns_topic
    if topic is None:
        return []

    subscription_properties: Dict[str, Any] = {
        "Protocol": "sqs",
        "Endpoint": group.arns.main_queue,
        "RawMessageDelivery": True,
        "TopicArn": topic_arn(topic["name"]),
    }
    if is_provided(topic.get("filterPolicy")):
        subscription_properties["FilterPolicy"] = topic["filterPolicy"]

    return [
        (
            RESOURCE,
            {
                "name": f"SubSNS{topic['name']}SQS{group.names.title_name}",
                "resource": {
                    "Type": "AWS::SNS::Subscription",
                    "Properties": subscription_properties,
                    "DependsOn": [group.names.main_queue],
                },
            },
        )
    ]
