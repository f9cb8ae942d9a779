from .hook_resources import HookResourcesConstruct

__all__ = ["HookResourcesConstruct"]
