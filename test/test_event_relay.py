"""
Event relay tests

Test classes:
    TestRelayConstruction   — prefix and registry injection
    TestNotifyCheckpoints   — every argument-less notification checkpoint
    TestUserCheckpoints     — profile_update / user_register payloads
    TestFilterCheckpoints   — identity law + listener transformation
    TestSetupCurrentUser    — out-of-order advisory diagnostic
    TestGenerateRewriteRules — deprecated shared-reference checkpoint
"""

from __future__ import annotations

import logging

import pytest

from forum.diagnostics import HOOK_DOING_IT_WRONG
from forum.exceptions import InvalidHookError
from forum.hooks import names
from forum.hooks.relay import EventRelay

_SPECIAL = {
    names.SETUP_CURRENT_USER,
    names.PROFILE_UPDATE,
    names.USER_REGISTER,
    names.POST_REQUEST,
    names.GET_REQUEST,
    names.GENERATE_REWRITE_RULES,
}
PLAIN_NOTIFICATIONS = [c for c in names.ACTION_CHECKPOINTS if c not in _SPECIAL]


def _diagnostics(caplog) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "forum.diagnostics"]


class TestRelayConstruction:
    def test_default_prefix_from_settings(self, relay):
        assert relay.prefix == "forum_"
        assert relay.hook_name("init") == "forum_init"

    def test_custom_prefix(self, registry, settings, recorder):
        relay = EventRelay(registry=registry, prefix="board_", settings=settings)
        cb = recorder()
        registry.add_action("board_init", cb)
        relay.init()
        assert len(cb.calls) == 1

    def test_empty_prefix_rejected(self, registry, settings):
        with pytest.raises(InvalidHookError):
            EventRelay(registry=registry, prefix="", settings=settings)

    def test_registry_is_injected(self, relay, registry):
        assert relay.registry is registry


class TestCheckpointNames:
    @pytest.mark.parametrize(
        "checkpoint",
        ["init", "map_meta_caps", "generate_rewrite_rules", "post_request_reply", "get_request_subscribe"],
    )
    def test_known(self, checkpoint):
        assert names.is_checkpoint(checkpoint)

    @pytest.mark.parametrize("checkpoint", ["", "forum_init", "post_reqest_reply", "post_request_", "get_request_"])
    def test_unknown(self, checkpoint):
        assert not names.is_checkpoint(checkpoint)


class TestNotifyCheckpoints:
    @pytest.mark.parametrize("checkpoint", PLAIN_NOTIFICATIONS)
    def test_no_listeners_no_effect(self, relay, registry, checkpoint):
        assert getattr(relay, checkpoint)() is None
        assert registry.did_action(f"forum_{checkpoint}") == 1

    @pytest.mark.parametrize("checkpoint", PLAIN_NOTIFICATIONS)
    def test_listener_invoked_exactly_once(self, relay, registry, recorder, checkpoint):
        cb = recorder()
        registry.add_action(f"forum_{checkpoint}", cb)
        getattr(relay, checkpoint)()
        assert cb.calls == [()]

    def test_generic_notify(self, relay, registry, recorder):
        cb = recorder()
        registry.add_action("forum_custom", cb, accepted_args=2)
        relay.notify("custom", 1, 2)
        assert cb.calls == [(1, 2)]

    def test_listener_error_propagates(self, relay, registry):
        def boom():
            raise RuntimeError("extension bug")

        registry.add_action("forum_ready", boom, accepted_args=0)
        with pytest.raises(RuntimeError, match="extension bug"):
            relay.ready()


class TestUserCheckpoints:
    def test_profile_update_payload(self, relay, registry, recorder):
        cb = recorder()
        registry.add_action("forum_profile_update", cb, accepted_args=2)
        relay.profile_update(42, {"display_name": "old"})
        assert cb.calls == [(42, {"display_name": "old"})]

    def test_profile_update_defaults(self, relay, registry, recorder):
        cb = recorder()
        registry.add_action("forum_profile_update", cb, accepted_args=2)
        relay.profile_update()
        assert cb.calls == [(0, {})]

    def test_user_register_payload(self, relay, registry, recorder):
        cb = recorder()
        registry.add_action("forum_user_register", cb)
        relay.user_register(7)
        assert cb.calls == [(7,)]


class TestFilterCheckpoints:
    def test_plugin_locale_identity(self, relay):
        assert relay.plugin_locale("fr_FR", "forum") == "fr_FR"

    def test_request_identity(self, relay):
        query_vars = {"forum": "general"}
        assert relay.request(query_vars) is query_vars

    def test_request_default(self, relay):
        assert relay.request() == {}

    def test_template_include_identity(self, relay):
        assert relay.template_include("theme/page.html") == "theme/page.html"

    def test_allowed_themes_identity(self, relay):
        themes = {"classic": True}
        assert relay.allowed_themes(themes) is themes

    def test_map_meta_caps_identity(self, relay):
        caps = ["edit_posts"]
        assert relay.map_meta_caps(caps, "edit_topic", 3, [99]) is caps

    def test_map_meta_caps_defaults(self, relay):
        assert relay.map_meta_caps() == []

    def test_plugin_locale_listener(self, relay, registry):
        registry.add_filter(
            "forum_plugin_locale", lambda locale, domain: "de_DE" if domain == "forum" else locale, accepted_args=2
        )
        assert relay.plugin_locale("en_US", "forum") == "de_DE"
        assert relay.plugin_locale("en_US", "other") == "en_US"

    def test_locale_defaults_from_settings(self, relay):
        assert relay.locale() == "en_US"

    def test_locale_filtered_for_text_domain(self, registry, settings, recorder):
        settings.locale = "fr_FR"
        settings.text_domain = "forum-extra"
        relay = EventRelay(registry=registry, settings=settings)
        cb = recorder(returns="fr_CA")
        registry.add_filter("forum_plugin_locale", cb, accepted_args=2)
        assert relay.locale() == "fr_CA"
        assert cb.calls == [("fr_FR", "forum-extra")]

    def test_template_include_listener(self, relay, registry):
        registry.add_filter("forum_template_include", lambda template: "forum/topic.html")
        assert relay.template_include("page.html") == "forum/topic.html"

    def test_map_meta_caps_listener_receives_all_args(self, relay, registry, recorder):
        cb = recorder(returns=["moderate"])
        registry.add_filter("forum_map_meta_caps", cb, accepted_args=4)
        assert relay.map_meta_caps(["edit_posts"], "edit_topic", 3, [99]) == ["moderate"]
        assert cb.calls == [(["edit_posts"], "edit_topic", 3, [99])]

    def test_request_listener_invoked_once(self, relay, registry, recorder):
        cb = recorder(returns={"paged": 2})
        registry.add_filter("forum_request", cb)
        assert relay.request({"paged": 1}) == {"paged": 2}
        assert len(cb.calls) == 1


class TestSetupCurrentUser:
    def test_out_of_order_emits_one_diagnostic(self, relay, registry, recorder, caplog):
        cb = recorder()
        registry.add_action("forum_setup_current_user", cb)
        with caplog.at_level(logging.WARNING):
            relay.setup_current_user()
        records = _diagnostics(caplog)
        assert len(records) == 1
        assert "setup_current_user" in records[0].getMessage()
        assert cb.calls == [()]

    def test_diagnostic_fires_host_action(self, relay, registry, recorder):
        cb = recorder()
        registry.add_action(HOOK_DOING_IT_WRONG, cb, accepted_args=3)
        relay.setup_current_user()
        assert len(cb.calls) == 1
        function, message, version = cb.calls[0]
        assert function == "EventRelay.setup_current_user"
        assert "after_setup_theme" in message

    def test_diagnostic_precedes_event(self, relay, registry, recorder):
        order: list[str] = []
        registry.add_action(HOOK_DOING_IT_WRONG, recorder(log=order, label="diagnostic"))
        registry.add_action("forum_setup_current_user", recorder(log=order, label="event"))
        relay.setup_current_user()
        assert order == ["diagnostic", "event"]

    def test_no_diagnostic_after_reference_checkpoint(self, relay, registry, caplog):
        registry.do_action("after_setup_theme")
        with caplog.at_level(logging.WARNING):
            relay.setup_current_user()
        assert _diagnostics(caplog) == []
        assert registry.did_action("forum_setup_current_user") == 1

    def test_no_diagnostic_while_customizing(self, registry, settings, caplog):
        relay = EventRelay(registry=registry, settings=settings, is_customizing=lambda: True)
        with caplog.at_level(logging.WARNING):
            relay.setup_current_user()
        assert _diagnostics(caplog) == []

    def test_reference_checkpoint_configurable(self, registry, settings, caplog):
        settings.reference_checkpoint = "init"
        relay = EventRelay(registry=registry, settings=settings)
        registry.do_action("after_setup_theme")
        with caplog.at_level(logging.WARNING):
            relay.setup_current_user()
        assert len(_diagnostics(caplog)) == 1


class TestGenerateRewriteRules:
    def test_listener_mutates_caller_object(self, relay, registry):
        class Rewrite:
            def __init__(self):
                self.rules: dict[str, str] = {}

        rewrite = Rewrite()

        def add_rules(target):
            target.rules["forums/?$"] = "index.php?post_type=forum"

        registry.add_action("forum_generate_rewrite_rules", add_rules)
        with pytest.warns(DeprecationWarning):
            assert relay.generate_rewrite_rules(rewrite) is None
        assert rewrite.rules == {"forums/?$": "index.php?post_type=forum"}

    def test_listener_receives_same_object(self, relay, registry, recorder):
        cb = recorder()
        registry.add_action("forum_generate_rewrite_rules", cb)
        rewrite = object()
        with pytest.warns(DeprecationWarning, match="forum_add_rewrite_rules"):
            relay.generate_rewrite_rules(rewrite)
        assert cb.calls[0][0] is rewrite

    def test_warning_can_be_disabled(self, registry, settings, recorder, recwarn):
        settings.warn_on_deprecated = False
        relay = EventRelay(registry=registry, settings=settings)
        relay.generate_rewrite_rules({})
        assert not [w for w in recwarn if issubclass(w.category, DeprecationWarning)]
        assert registry.did_action("forum_generate_rewrite_rules") == 1

    def test_warning_version_matches_diagnostic_version(self, relay, registry, recorder):
        cb = recorder()
        registry.add_action(HOOK_DOING_IT_WRONG, cb, accepted_args=3)
        relay.setup_current_user()
        version = cb.calls[0][2]
        with pytest.warns(DeprecationWarning, match=f"deprecated since version {version}"):
            relay.generate_rewrite_rules({})
