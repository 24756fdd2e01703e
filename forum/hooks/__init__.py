"""
Forum hook layer

Public API:
    HookRegistry   — host listener registry + dispatcher
    hook_registry  — process-wide default registry
    EventRelay     — fires the forum's named checkpoints
    RequestContext — HTTP method + payload seen by the request checkpoints
"""

from .registry import HookRegistry, Listener, hook_registry
from .relay import EventRelay
from .request import RequestContext

__all__ = ["EventRelay", "HookRegistry", "Listener", "RequestContext", "hook_registry"]
