from aws_cdk import App, Stack
from aws_cdk.assertions import Match, Template

from deploy_hooks.constructs import HookResourcesConstruct
from deploy_hooks.helpers import sns_helper, sqs_helper
from tests.fixtures.hook_builders import build_sqs_config, expected_queue_arn, expected_topic_arn


def _synth(hooks) -> tuple[HookResourcesConstruct, Template]:
    app = App()
    stack = Stack(app, "HooksStack")
    construct = HookResourcesConstruct(stack, "Hooks", hooks)
    return construct, Template.from_stack(stack)


def test_queue_group_synthesizes_with_hook_logical_ids() -> None:
    """
    Given: 지연 큐와 SNS 구독이 포함된 SQS 훅
    When: CDK 스택으로 합성
    Then: 큐 3개, 큐 정책, 구독이 훅 이름 그대로의 논리 ID로 생성
    """
    hooks = sqs_helper.build_hooks(
        build_sqs_config(delayQueueProperties={}, sourceSnsTopic={"name": "OrderCreated"})
    )

    construct, template = _synth(hooks)

    template.resource_count_is("AWS::SQS::Queue", 3)
    template.resource_count_is("AWS::SQS::QueuePolicy", 1)
    template.resource_count_is("AWS::SNS::Subscription", 1)

    queues = template.find_resources("AWS::SQS::Queue")
    assert set(queues) == {"OrderQueue", "OrderDelayQueue", "OrderDLQ"}
    assert queues["OrderQueue"]["DependsOn"] == ["OrderDelayQueue"]
    assert queues["OrderDelayQueue"]["DependsOn"] == ["OrderDLQ"]
    assert "DependsOn" not in queues["OrderDLQ"]

    template.has_resource_properties(
        "AWS::SNS::Subscription",
        {
            "Protocol": "sqs",
            "Endpoint": expected_queue_arn("OrderQueue"),
            "RawMessageDelivery": True,
            "TopicArn": expected_topic_arn("OrderCreated"),
        },
    )
    template.has_resource_properties(
        "AWS::SQS::Queue",
        {
            "QueueName": "${self:custom.serviceName}OrderDLQ",
            "MessageRetentionPeriod": 864000,
            "RedrivePolicy": Match.absent(),
        },
    )

    assert [function["functionName"] for function in construct.functions] == [
        "OrderQueueConsumer",
        "OrderDelayQueueConsumer",
    ]


def test_iam_statement_hooks_become_policy_statements() -> None:
    hooks = [*sns_helper.build_hooks({"topic": {"name": "OrderCreated"}}), sqs_helper.sqs_permissions()]

    construct, template = _synth(hooks)

    template.resource_count_is("AWS::SNS::Topic", 1)
    statements = [statement.to_statement_json() for statement in construct.policy_statements]
    assert statements[0]["Action"] == "sns:Publish"
    assert statements[0]["Resource"] == expected_topic_arn("OrderCreated")
    assert statements[1]["Action"] == [
        "sqs:SendMessage",
        "sqs:DeleteMessage",
        "sqs:ReceiveMessage",
        "sqs:GetQueueAttributes",
    ]


def test_env_var_hooks_are_merged() -> None:
    hooks = sqs_helper.build_hooks(build_sqs_config(mainQueueProperties={"generateEnvVars": True}))

    construct, _ = _synth(hooks)

    assert list(construct.env_vars) == ["ORDER_SQS_QUEUE_URL"]
