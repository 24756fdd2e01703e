"""
Hook wiring

Two tables connect the relay to the rest of the system:

HOST_ACTIONS / HOST_FILTERS
    Host hooks the relay piggy-backs on. When the host fires ``init`` the
    relay fires ``forum_init``, and so on.

SUB_ACTIONS
    The forum's own checkpoints that fan out into finer-grained ones, with
    fixed priorities so extensions can slot in between them (e.g. a
    listener at priority 5 on ``forum_loaded`` runs after constants and
    globals are bootstrapped but before includes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from forum.hooks import names

if TYPE_CHECKING:
    from forum.hooks.registry import HookRegistry
    from forum.hooks.relay import EventRelay

logger = logging.getLogger(__name__)


class Binding(NamedTuple):
    hook: str
    method: str
    priority: int = 10
    accepted_args: int = 1


# ── Host → relay ──────────────────────────────────────────────────────────────

HOST_ACTIONS: list[Binding] = [
    Binding("plugins_loaded", "loaded", 10, 0),
    Binding("init", "init", 0, 0),
    Binding("widgets_init", "widgets_init", 10, 0),
    Binding("set_current_user", "setup_current_user", 10, 0),
    Binding("setup_theme", "setup_theme", 10, 0),
    Binding("after_setup_theme", "after_setup_theme", 10, 0),
    Binding("enqueue_scripts", "enqueue_scripts", 10, 0),
    Binding("login_form_login", "login_form_login", 10, 0),
    Binding("profile_update", "profile_update", 10, 2),
    Binding("user_register", "user_register", 10, 1),
    # The host fires template_redirect with the current RequestContext
    Binding("template_redirect", "template_redirect", 8, 0),
    Binding("template_redirect", "post_request", 10, 1),
    Binding("template_redirect", "get_request", 10, 1),
]

HOST_FILTERS: list[Binding] = [
    Binding("plugin_locale", "plugin_locale", 10, 2),
    Binding("request", "request", 10, 1),
    Binding("template_include", "template_include", 10, 1),
    Binding("allowed_themes", "allowed_themes", 10, 1),
    Binding("map_meta_cap", "map_meta_caps", 10, 4),
]

# ── Forum checkpoint → finer checkpoints ──────────────────────────────────────

SUB_ACTIONS: dict[str, list[tuple[str, int]]] = {
    names.LOADED: [
        (names.CONSTANTS, 2),
        (names.BOOT_STRAP_GLOBALS, 4),
        (names.INCLUDES, 6),
        (names.SETUP_GLOBALS, 8),
        (names.REGISTER_THEME_PACKAGES, 14),
    ],
    names.INIT: [
        (names.REGISTER, 0),
        (names.LOAD_TEXTDOMAIN, 0),
        (names.ADD_REWRITE_TAGS, 20),
        (names.ADD_REWRITE_RULES, 30),
        (names.ADD_PERMASTRUCTS, 40),
        (names.READY, 999),
    ],
    names.REGISTER: [
        (names.REGISTER_POST_TYPES, 2),
        (names.REGISTER_POST_STATUSES, 4),
        (names.REGISTER_TAXONOMIES, 6),
        (names.REGISTER_VIEWS, 8),
        (names.REGISTER_SHORTCODES, 10),
    ],
}


def _sub_bindings(relay: EventRelay) -> list[Binding]:
    return [
        Binding(relay.hook_name(parent), child, priority, 0)
        for parent, children in SUB_ACTIONS.items()
        for child, priority in children
    ]


# ── Install / remove ──────────────────────────────────────────────────────────


def _attach(registry: HookRegistry, relay: EventRelay, bindings: list[Binding]) -> int:
    added = 0
    for binding in bindings:
        callback = getattr(relay, binding.method)
        if registry.listener_priority(binding.hook, callback) is not None:
            continue
        registry.add_action(binding.hook, callback, priority=binding.priority, accepted_args=binding.accepted_args)
        added += 1
    return added


def _detach(registry: HookRegistry, relay: EventRelay, bindings: list[Binding]) -> int:
    return sum(
        registry.remove_action(binding.hook, getattr(relay, binding.method), priority=binding.priority)
        for binding in bindings
    )


def attach_host_bindings(registry: HookRegistry, relay: EventRelay) -> int:
    """
    Connect the relay to host hooks.

    Safe to call repeatedly: bindings already present are skipped.

    Returns:
        Number of listeners added.
    """
    added = _attach(registry, relay, HOST_ACTIONS + HOST_FILTERS)
    logger.debug("Host bindings attached (%d added)", added)
    return added


def attach_sub_actions(registry: HookRegistry, relay: EventRelay) -> int:
    """Fan the relay's umbrella checkpoints out into their sub-checkpoints. Idempotent."""
    added = _attach(registry, relay, _sub_bindings(relay))
    logger.debug("Sub-actions attached (%d added)", added)
    return added


def detach_all(registry: HookRegistry, relay: EventRelay) -> int:
    """Remove every binding installed by the two attach functions."""
    return _detach(registry, relay, HOST_ACTIONS + HOST_FILTERS + _sub_bindings(relay))
