"""Event listener hook: adds an HTTP listener function to a service config."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from deploy_hooks.core.naming import kebab_case, start_case
from deploy_hooks.core.validation import HookConfigError, describe_model_error, is_object
from deploy_hooks.utils.logger import get_logger

HELPER = "eventListener hook"
INTEGRATION = "lambda"
AUTHORIZERS_FILE = "./serverless/functions/subtemplates/authorizers.yml"

# custom.* keys provided by the shared templates hook
_TEMPLATE_KEYS = ("apiRequestTemplate", "apiResponseTemplate", "apiOfflineResponseTemplate")

logger = get_logger(__name__, helper="event-listener")


class EventListenerParams(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    entity_name: Optional[str] = Field(default=None, alias="entityName")
    event_name: Optional[str] = Field(default=None, alias="eventName")
    must_have_client: bool = Field(default=False, alias="mustHaveClient")
    listeners_dir_name: str = Field(default="event-listeners", alias="listenersDirName")


def parse_params(hook_params: Mapping[str, Any] | None) -> EventListenerParams:
    try:
        params = EventListenerParams.model_validate(dict(hook_params or {}))
    except ValidationError as exc:
        raise describe_model_error(exc, HELPER) from exc

    if not params.entity_name:
        raise HookConfigError(f"Missing or empty entityName in {HELPER}.")
    if not params.event_name:
        raise HookConfigError(f"Missing or empty eventName in {HELPER}.")
    return params


def build_listener_function(params: EventListenerParams) -> Dict[str, Any]:
    entity_title = start_case(params.entity_name)
    entity_kebab = kebab_case(params.entity_name)
    event_title = start_case(params.event_name)
    event_kebab = kebab_case(params.event_name)

    authorizer = "ServiceAuthorizer" if params.must_have_client else "ServiceNoClientAuthorizer"
    listener_name = f"{entity_title}{event_title}Listener".replace(" ", "")

    return {
        listener_name: {
            "handler": f"src/{params.listeners_dir_name}/{entity_kebab}/{event_kebab}.handler",
            "description": f"{entity_title} {event_title} Listener",
            "events": [
                {
                    "http": {
                        "integration": INTEGRATION,
                        "path": f"/listener/{entity_kebab}/{event_kebab}",
                        "method": "post",
                        "authorizer": f"${{file({AUTHORIZERS_FILE}):{authorizer}}}",
                        "request": {"template": "${self:custom.apiRequestTemplate}"},
                        "response": "${self:custom.apiResponseTemplate}",
                        "responses": "${self:custom.apiOfflineResponseTemplate}",
                    }
                }
            ],
        }
    }


def _warn_missing_templates(service_config: Mapping[str, Any]) -> None:
    custom = service_config.get("custom")
    custom = custom if is_object(custom) else {}
    for key in _TEMPLATE_KEYS:
        if not custom.get(key):
            logger.warning(f"Missing custom.{key} property. Add templates hook first.")


def event_listener(service_config: Mapping[str, Any], hook_params: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return a copy of ``service_config`` with the listener function appended."""
    params = parse_params(hook_params)
    _warn_missing_templates(service_config)

    config = dict(service_config)
    functions = list(config.pop("functions", None) or [])
    return {
        **config,
        "functions": [*functions, build_listener_function(params)],
    }
