"""CDK construct that renders resource hooks into a stack."""

from typing import Iterable, List

from aws_cdk import CfnResource, aws_iam as iam
from constructs import Construct

from deploy_hooks.config.types import Hook
from deploy_hooks.core.hooks import merge_hooks


class HookResourcesConstruct(Construct):
    """Construct materializing hook output as raw CloudFormation resources.

    Resource hooks become ``CfnResource`` nodes whose logical ids match the
    hook names, so ``DependsOn`` between hooks keeps working.
    IAM statement hooks are exposed as ``PolicyStatement`` objects, and
    function and env var hooks are kept for the templating tool.
    """

    def __init__(self, scope: Construct, construct_id: str, hooks: Iterable[Hook]) -> None:
        super().__init__(scope, construct_id)

        self.merged = merge_hooks(hooks)
        self.resources: dict[str, CfnResource] = {}
        self.policy_statements: List[iam.PolicyStatement] = []

        self._create_resources()
        self._create_policy_statements()

    @property
    def functions(self) -> list:
        return self.merged.functions

    @property
    def env_vars(self) -> dict:
        return self.merged.env_vars

    def _create_resources(self) -> None:
        for name, definition in self.merged.resources.items():
            resource = CfnResource(
                self,
                name,
                type=definition["Type"],
                properties=definition.get("Properties"),
            )
            resource.override_logical_id(name)
            depends_on = definition.get("DependsOn")
            if depends_on:
                resource.add_override("DependsOn", list(depends_on))
            self.resources[name] = resource

    def _create_policy_statements(self) -> None:
        for statement in self.merged.iam_statements:
            actions = statement.get("action") or []
            resources = statement.get("resource") or []
            self.policy_statements.append(
                iam.PolicyStatement(
                    actions=[actions] if isinstance(actions, str) else list(actions),
                    resources=[resources] if isinstance(resources, str) else list(resources),
                )
            )
