"""SNS topic helper: a topic resource plus its publish permission."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from deploy_hooks.config.defaults import SERVICE_NAME
from deploy_hooks.config.types import Hook, SNSConfig
from deploy_hooks.core.hooks import IAM_STATEMENT, RESOURCE
from deploy_hooks.core.naming import topic_arn, upper_snake_case
from deploy_hooks.core.validation import HookConfigError, describe_model_error, is_object
from deploy_hooks.utils.logger import get_logger

HELPER = "SNS helper"

logger = get_logger(__name__, helper="sns")


class TopicProperties(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    name: str

    @field_validator("name")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v


def validate_config(config: Mapping[str, Any] | None) -> TopicProperties:
    """Return the validated topic properties or raise HookConfigError."""
    topic = config.get("topic") if is_object(config) else None
    if not is_object(topic):
        raise HookConfigError(f"Missing or invalid topic hook configuration in {HELPER}")
    try:
        return TopicProperties.model_validate(dict(topic))
    except ValidationError as exc:
        raise describe_model_error(exc, HELPER, prefix="topic") from exc


def build_hooks(config: SNSConfig | None = None) -> List[Hook]:
    topic = validate_config(config)
    logger.debug("Building SNS topic hooks", extra={"entity": topic.name})
    return [
        build_topic(topic),
        build_topic_permissions(topic),
    ]


def get_env_var(topic_name: str) -> Dict[str, str]:
    return {f"{upper_snake_case(topic_name)}_SNS_TOPIC_ARN": topic_arn(topic_name)}


def build_topic(topic: TopicProperties) -> Hook:
    return (
        RESOURCE,
        {
            "name": f"{topic.name}Topic",
            "resource": {
                "Type": "AWS::SNS::Topic",
                "Properties": {
                    "TopicName": topic.name,
                    "DisplayName": f"{SERVICE_NAME} {topic.name}",
                },
            },
        },
    )


def build_topic_permissions(topic: TopicProperties) -> Hook:
    return (
        IAM_STATEMENT,
        {
            "action": ["sns:Publish"],
            "resource": topic_arn(topic.name),
        },
    )
