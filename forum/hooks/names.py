"""
Forum Checkpoint Names

Centralised catalog of the checkpoints the forum fires. Each checkpoint is
a bare name ("init", "template_include"); the full event name extensions
subscribe to is the checkpoint prefixed with the configured hook prefix
(``forum_init``, ``forum_template_include``).
"""

from __future__ import annotations

DEFAULT_PREFIX = "forum_"

# ── Activation ────────────────────────────────────────────────────────────────
ACTIVATION = "activation"
DEACTIVATION = "deactivation"
UNINSTALL = "uninstall"

# ── Main ──────────────────────────────────────────────────────────────────────
LOADED = "loaded"
CONSTANTS = "constants"
BOOT_STRAP_GLOBALS = "boot_strap_globals"
INCLUDES = "includes"
SETUP_GLOBALS = "setup_globals"
REGISTER = "register"
INIT = "init"
WIDGETS_INIT = "widgets_init"
SETUP_CURRENT_USER = "setup_current_user"

# ── Supplemental ──────────────────────────────────────────────────────────────
LOAD_TEXTDOMAIN = "load_textdomain"
REGISTER_POST_TYPES = "register_post_types"
REGISTER_POST_STATUSES = "register_post_statuses"
REGISTER_TAXONOMIES = "register_taxonomies"
REGISTER_VIEWS = "register_views"
REGISTER_SHORTCODES = "register_shortcodes"
ENQUEUE_SCRIPTS = "enqueue_scripts"
ADD_REWRITE_TAGS = "add_rewrite_tags"
ADD_REWRITE_RULES = "add_rewrite_rules"
ADD_PERMASTRUCTS = "add_permastructs"
LOGIN_FORM_LOGIN = "login_form_login"

# ── User ──────────────────────────────────────────────────────────────────────
PROFILE_UPDATE = "profile_update"
USER_REGISTER = "user_register"

# ── Final ─────────────────────────────────────────────────────────────────────
READY = "ready"

# ── Theme ─────────────────────────────────────────────────────────────────────
TEMPLATE_REDIRECT = "template_redirect"
REGISTER_THEME_PACKAGES = "register_theme_packages"
SETUP_THEME = "setup_theme"
AFTER_SETUP_THEME = "after_setup_theme"

# ── Request ───────────────────────────────────────────────────────────────────
POST_REQUEST = "post_request"
GET_REQUEST = "get_request"

# ── Deprecated ────────────────────────────────────────────────────────────────
GENERATE_REWRITE_RULES = "generate_rewrite_rules"

# ── Filters ───────────────────────────────────────────────────────────────────
PLUGIN_LOCALE = "plugin_locale"
REQUEST = "request"
TEMPLATE_INCLUDE = "template_include"
ALLOWED_THEMES = "allowed_themes"
MAP_META_CAPS = "map_meta_caps"

# ── Master lists ──────────────────────────────────────────────────────────────
ACTION_CHECKPOINTS: list[str] = [
    ACTIVATION,
    DEACTIVATION,
    UNINSTALL,
    LOADED,
    CONSTANTS,
    BOOT_STRAP_GLOBALS,
    INCLUDES,
    SETUP_GLOBALS,
    REGISTER,
    INIT,
    WIDGETS_INIT,
    SETUP_CURRENT_USER,
    LOAD_TEXTDOMAIN,
    REGISTER_POST_TYPES,
    REGISTER_POST_STATUSES,
    REGISTER_TAXONOMIES,
    REGISTER_VIEWS,
    REGISTER_SHORTCODES,
    ENQUEUE_SCRIPTS,
    ADD_REWRITE_TAGS,
    ADD_REWRITE_RULES,
    ADD_PERMASTRUCTS,
    LOGIN_FORM_LOGIN,
    PROFILE_UPDATE,
    USER_REGISTER,
    READY,
    TEMPLATE_REDIRECT,
    REGISTER_THEME_PACKAGES,
    SETUP_THEME,
    AFTER_SETUP_THEME,
    POST_REQUEST,
    GET_REQUEST,
    GENERATE_REWRITE_RULES,
]

FILTER_CHECKPOINTS: list[str] = [
    PLUGIN_LOCALE,
    REQUEST,
    TEMPLATE_INCLUDE,
    ALLOWED_THEMES,
    MAP_META_CAPS,
]

DEPRECATED_CHECKPOINTS: frozenset[str] = frozenset({GENERATE_REWRITE_RULES})

ALL_CHECKPOINTS: list[str] = ACTION_CHECKPOINTS + FILTER_CHECKPOINTS


def hook_name(checkpoint: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Return the full event name for ``checkpoint`` under ``prefix``."""
    return f"{prefix}{checkpoint}"


def is_checkpoint(checkpoint: str) -> bool:
    """
    Return True if ``checkpoint`` is one the forum fires.

    Besides the catalog this accepts the per-action request checkpoints
    (``post_request_<action>``, ``get_request_<action>``).
    """
    if checkpoint in ALL_CHECKPOINTS:
        return True
    for request_checkpoint in (POST_REQUEST, GET_REQUEST):
        action = checkpoint.removeprefix(f"{request_checkpoint}_")
        if action != checkpoint and action:
            return True
    return False
