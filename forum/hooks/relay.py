"""
Event Relay

EventRelay: the forum's catalog of lifecycle checkpoints.

Every method fires exactly one named event (two for the request
checkpoints) through the injected HookRegistry. Notification checkpoints
return None; filter checkpoints return whatever the listener chain
produces, which is the input itself when nobody is listening.

Mirroring host hooks under forum-specific names lets extensions depend on
the forum: a listener on ``forum_init`` only ever runs when the forum is
active, whereas one on the host's ``init`` would run regardless.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from forum.config import Settings, get_settings
from forum.diagnostics import deprecated_hook, doing_it_wrong
from forum.exceptions import InvalidHookError
from forum.hooks import names
from forum.hooks.registry import HookRegistry, hook_registry
from forum.utils.sanitize import sanitize_key

if TYPE_CHECKING:
    from forum.hooks.request import RequestContext

logger = logging.getLogger(__name__)

# Version the diagnostics below were introduced in
_DIAGNOSTIC_VERSION = "1.0.0"


class EventRelay:
    """
    Fires the forum's named checkpoints.

    Args:
        registry:       Listener registry to dispatch through. Defaults to the
                        process-wide ``hook_registry``.
        prefix:         Namespace prepended to every checkpoint name.
                        Defaults to ``settings.hook_prefix``.
        is_customizing: Callable reporting whether the host's live customizer
                        is active. The customizer sets up the current user
                        early on purpose, so no diagnostic is raised then.
        settings:       Application settings. Defaults to ``get_settings()``.
    """

    def __init__(
        self,
        registry: HookRegistry | None = None,
        prefix: str | None = None,
        is_customizing: Callable[[], bool] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.registry = registry if registry is not None else hook_registry
        self.prefix = prefix if prefix is not None else self.settings.hook_prefix
        if not self.prefix:
            # Unprefixed names would collide with the host hooks the relay listens on
            raise InvalidHookError("Hook prefix must not be empty", hook_name=self.prefix)
        self._is_customizing = is_customizing or (lambda: False)

    # ── Generic shapes ────────────────────────────────────────────────────────

    def hook_name(self, checkpoint: str) -> str:
        return names.hook_name(checkpoint, self.prefix)

    def notify(self, checkpoint: str, *args: Any) -> None:
        """Fire notification ``checkpoint`` with ``args``."""
        self.registry.do_action(self.hook_name(checkpoint), *args)

    def filter(self, checkpoint: str, value: Any, *args: Any) -> Any:
        """Pass ``value`` through filter ``checkpoint`` and return the result."""
        return self.registry.apply_filters(self.hook_name(checkpoint), value, *args)

    # ── Activation ────────────────────────────────────────────────────────────

    def activation(self) -> None:
        """Runs when the forum is activated."""
        self.notify(names.ACTIVATION)

    def deactivation(self) -> None:
        """Runs when the forum is deactivated."""
        self.notify(names.DEACTIVATION)

    def uninstall(self) -> None:
        """Runs when the forum is uninstalled."""
        self.notify(names.UNINSTALL)

    # ── Main ──────────────────────────────────────────────────────────────────

    def loaded(self) -> None:
        """Main checkpoint responsible for constants, globals and includes."""
        self.notify(names.LOADED)

    def constants(self) -> None:
        self.notify(names.CONSTANTS)

    def boot_strap_globals(self) -> None:
        """Set up globals before includes."""
        self.notify(names.BOOT_STRAP_GLOBALS)

    def includes(self) -> None:
        self.notify(names.INCLUDES)

    def setup_globals(self) -> None:
        """Set up globals after includes."""
        self.notify(names.SETUP_GLOBALS)

    def register(self) -> None:
        """Register any objects before anything is initialized."""
        self.notify(names.REGISTER)

    def init(self) -> None:
        """Initialize anything that needs everything else loaded first."""
        self.notify(names.INIT)

    def widgets_init(self) -> None:
        self.notify(names.WIDGETS_INIT)

    def setup_current_user(self) -> None:
        """
        Set up the currently logged-in user.

        Setting up the user before the host's reference checkpoint has fired
        leads to hard-to-debug role and capability issues, so an advisory
        diagnostic is raised first. The customizer loads the user early on
        purpose and is exempt. The event fires either way.
        """
        reference = self.settings.reference_checkpoint
        if not self._is_customizing() and not self.registry.did_action(reference):
            doing_it_wrong(
                f"{type(self).__name__}.setup_current_user",
                f"The current user is being initialized before the host '{reference}' action.",
                _DIAGNOSTIC_VERSION,
                registry=self.registry,
            )
        self.notify(names.SETUP_CURRENT_USER)

    # ── Supplemental ──────────────────────────────────────────────────────────

    def load_textdomain(self) -> None:
        """Load translations for the current language."""
        self.notify(names.LOAD_TEXTDOMAIN)

    def register_post_types(self) -> None:
        self.notify(names.REGISTER_POST_TYPES)

    def register_post_statuses(self) -> None:
        self.notify(names.REGISTER_POST_STATUSES)

    def register_taxonomies(self) -> None:
        self.notify(names.REGISTER_TAXONOMIES)

    def register_views(self) -> None:
        self.notify(names.REGISTER_VIEWS)

    def register_shortcodes(self) -> None:
        self.notify(names.REGISTER_SHORTCODES)

    def enqueue_scripts(self) -> None:
        """Enqueue forum-specific CSS and JS."""
        self.notify(names.ENQUEUE_SCRIPTS)

    def add_rewrite_tags(self) -> None:
        self.notify(names.ADD_REWRITE_TAGS)

    def add_rewrite_rules(self) -> None:
        self.notify(names.ADD_REWRITE_RULES)

    def add_permastructs(self) -> None:
        self.notify(names.ADD_PERMASTRUCTS)

    def login_form_login(self) -> None:
        self.notify(names.LOGIN_FORM_LOGIN)

    # ── User ──────────────────────────────────────────────────────────────────

    def profile_update(self, user_id: int = 0, old_user_data: dict[str, Any] | None = None) -> None:
        """
        Fires when a user account is updated.

        Args:
            user_id:       ID of the user being edited.
            old_user_data: The user's data before the update.
        """
        self.notify(names.PROFILE_UPDATE, user_id, old_user_data if old_user_data is not None else {})

    def user_register(self, user_id: int = 0) -> None:
        """Fires when a user registers."""
        self.notify(names.USER_REGISTER, user_id)

    # ── Final ─────────────────────────────────────────────────────────────────

    def ready(self) -> None:
        """The forum has loaded and initialized everything."""
        self.notify(names.READY)

    # ── Theme ─────────────────────────────────────────────────────────────────

    def template_redirect(self) -> None:
        """Redirect theme actions the current user is not permitted to perform."""
        self.notify(names.TEMPLATE_REDIRECT)

    def register_theme_packages(self) -> None:
        self.notify(names.REGISTER_THEME_PACKAGES)

    def setup_theme(self) -> None:
        """Runs before the theme has been set up."""
        self.notify(names.SETUP_THEME)

    def after_setup_theme(self) -> None:
        """Runs after the theme has been set up."""
        self.notify(names.AFTER_SETUP_THEME)

    # ── Request ───────────────────────────────────────────────────────────────

    def post_request(self, request: RequestContext) -> None:
        """
        Handle a theme-side POST request.

        Does nothing unless ``request`` is a POST carrying a non-empty
        ``action`` form field. Otherwise fires ``post_request_<action>``
        followed by ``post_request`` with the action as its argument.
        """
        if not request.is_post():
            return
        self._relay_request(names.POST_REQUEST, request.action("form"))

    def get_request(self, request: RequestContext) -> None:
        """
        Handle a theme-side GET request.

        Same contract as ``post_request`` for GET requests and the
        ``action`` query parameter.
        """
        if not request.is_get():
            return
        self._relay_request(names.GET_REQUEST, request.action("query"))

    def _relay_request(self, checkpoint: str, raw_action: Any) -> None:
        if not raw_action:
            return

        action = sanitize_key(raw_action)
        if not action:
            logger.debug("Ignoring %s with unusable action %r", checkpoint, raw_action)
            return

        # Scoped to this action: listeners need not check it themselves.
        self.notify(f"{checkpoint}_{action}")
        # Generic: listeners receive the action and filter on it.
        self.notify(checkpoint, action)

    # ── Deprecated ────────────────────────────────────────────────────────────

    def generate_rewrite_rules(self, rewrite: Any) -> None:
        """
        Generate forum-specific rewrite rules.

        Deprecated: use ``add_rewrite_rules`` instead. Listeners receive the
        caller's ``rewrite`` object itself and mutate it in place.
        """
        hook = self.hook_name(names.GENERATE_REWRITE_RULES)
        if self.settings.warn_on_deprecated:
            deprecated_hook(hook, _DIAGNOSTIC_VERSION, self.hook_name(names.ADD_REWRITE_RULES))
        self.registry.do_action_ref_array(hook, [rewrite])

    # ── Filters ───────────────────────────────────────────────────────────────

    def plugin_locale(self, locale: str = "", domain: str = "") -> str:
        """Filter the locale used to load translations for ``domain``."""
        return self.filter(names.PLUGIN_LOCALE, locale, domain)

    def locale(self) -> str:
        """Return the locale to load the forum's ``text_domain`` translations in, after filtering."""
        return self.plugin_locale(self.settings.locale, self.settings.text_domain)

    def request(self, query_vars: dict[str, Any] | None = None) -> dict[str, Any]:
        """Filter the host's parsed query variables."""
        return self.filter(names.REQUEST, query_vars if query_vars is not None else {})

    def template_include(self, template: str = "") -> str:
        """Filter the template file used to render the current page."""
        return self.filter(names.TEMPLATE_INCLUDE, template)

    def allowed_themes(self, themes: dict[str, Any]) -> dict[str, Any]:
        """Filter the list of themes allowed for the forum."""
        return self.filter(names.ALLOWED_THEMES, themes)

    def map_meta_caps(
        self,
        caps: list[str] | None = None,
        cap: str = "",
        user_id: int = 0,
        args: list[Any] | None = None,
    ) -> list[str]:
        """Map forum, topic and reply capabilities onto host capabilities."""
        return self.filter(
            names.MAP_META_CAPS,
            caps if caps is not None else [],
            cap,
            user_id,
            args if args is not None else [],
        )
