"""
Developer diagnostics

Advisory messages for code that uses the forum hooks out of order or
relies on deprecated checkpoints. Diagnostics are never fatal: they log,
notify the host, and return.
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from forum.hooks.registry import HookRegistry

logger = logging.getLogger(__name__)

# Host action fired whenever a misuse diagnostic is raised
HOOK_DOING_IT_WRONG = "doing_it_wrong_run"


def doing_it_wrong(function: str, message: str, version: str, registry: HookRegistry | None = None) -> None:
    """
    Report that ``function`` was called incorrectly.

    Logs one WARNING and, when a registry is given, fires the host's
    ``doing_it_wrong_run`` action with ``(function, message, version)`` so
    debugging tools can surface it.
    """
    if registry is not None:
        registry.do_action(HOOK_DOING_IT_WRONG, function, message, version)
    logger.warning("%s was called incorrectly. %s (This message was added in version %s.)", function, message, version)


def deprecated_hook(hook: str, version: str, replacement: str | None = None, stacklevel: int = 3) -> None:
    """Emit a DeprecationWarning for a hook that still fires but should not be used."""
    message = f"Hook {hook} is deprecated since version {version}"
    if replacement:
        message += f"; use {replacement} instead"
    warnings.warn(message, DeprecationWarning, stacklevel=stacklevel)
