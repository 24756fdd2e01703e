"""
Hook Registry

HookRegistry: the host's generic listener registry and dispatcher.

Listeners are stored per hook name and invoked serially in ascending
priority order; listeners sharing a priority run in registration order.
Dispatch is synchronous and exceptions raised by a listener propagate to
the caller unchanged. The registry never catches or retries them.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from forum.exceptions import InvalidHookError

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


@dataclass(frozen=True)
class Listener:
    """A registered callback together with its dispatch options."""

    callback: Callable[..., Any]
    priority: int = DEFAULT_PRIORITY
    accepted_args: int = 1

    def invoke(self, args: tuple[Any, ...] | list[Any]) -> Any:
        return self.callback(*args[: self.accepted_args])


class HookRegistry:
    """
    In-process registry of action and filter listeners.

    Actions and filters share one namespace, as they do in the host: a
    filter is an action whose listeners return the next value.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        self._action_counts: Counter[str] = Counter()
        self._filter_counts: Counter[str] = Counter()
        self._stack: list[str] = []

    # ── Registration ──────────────────────────────────────────────────────────

    def add_action(
        self,
        name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """Register ``callback`` to run whenever action ``name`` fires."""
        self._validate(name, callback, accepted_args)
        bucket = self._listeners[name]
        bucket.append(Listener(callback=callback, priority=priority, accepted_args=accepted_args))
        # list.sort is stable: equal priorities keep registration order
        bucket.sort(key=lambda listener: listener.priority)
        logger.debug("Listener added: %s (priority=%d)", name, priority)

    def add_filter(
        self,
        name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """Register ``callback`` to transform the value passed through filter ``name``."""
        self.add_action(name, callback, priority=priority, accepted_args=accepted_args)

    def remove_action(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> bool:
        """
        Remove the first listener matching ``callback`` and ``priority``.

        Returns:
            True if a listener was removed, False if none matched.
        """
        bucket = self._listeners.get(name)
        if not bucket:
            return False
        for index, listener in enumerate(bucket):
            if listener.callback == callback and listener.priority == priority:
                del bucket[index]
                if not bucket:
                    del self._listeners[name]
                return True
        return False

    remove_filter = remove_action

    def remove_all(self, name: str) -> None:
        """Drop every listener registered against ``name``."""
        self._listeners.pop(name, None)

    # ── Lookup ────────────────────────────────────────────────────────────────

    def has_listeners(self, name: str) -> bool:
        return bool(self._listeners.get(name))

    def listener_priority(self, name: str, callback: Callable[..., Any]) -> int | None:
        """Return the priority ``callback`` is registered at on ``name``, or None."""
        for listener in self._listeners.get(name, ()):
            if listener.callback == callback:
                return listener.priority
        return None

    def listeners(self, name: str) -> list[Listener]:
        """Return a snapshot of the listeners for ``name`` in dispatch order."""
        return list(self._listeners.get(name, ()))

    def hook_names(self) -> list[str]:
        return sorted(self._listeners)

    def did_action(self, name: str) -> int:
        """Return how many times action ``name`` has fired."""
        return self._action_counts[name]

    def did_filter(self, name: str) -> int:
        """Return how many times filter ``name`` has been applied."""
        return self._filter_counts[name]

    def current_action(self) -> str | None:
        """Return the name of the innermost hook being dispatched, if any."""
        return self._stack[-1] if self._stack else None

    def doing_action(self, name: str | None = None) -> bool:
        """
        Report whether a hook is being dispatched.

        With no ``name``, True while any hook is running; otherwise True
        while ``name`` is anywhere on the dispatch stack.
        """
        if name is None:
            return bool(self._stack)
        return name in self._stack

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def do_action(self, name: str, *args: Any) -> None:
        """Fire action ``name``, forwarding ``args`` positionally to each listener."""
        self._action_counts[name] += 1
        with self._dispatching(name):
            for listener in self.listeners(name):
                listener.invoke(args)

    def do_action_ref_array(self, name: str, args: list[Any]) -> None:
        """
        Fire action ``name`` with the elements of ``args`` as arguments.

        The elements are forwarded as-is, so every listener receives the
        caller's own objects and may mutate them in place.
        """
        self.do_action(name, *args)

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """
        Thread ``value`` through every listener of filter ``name``.

        Each listener receives the current value followed by ``args`` and
        returns the next value. With no listeners ``value`` is returned
        unchanged.
        """
        self._filter_counts[name] += 1
        with self._dispatching(name):
            for listener in self.listeners(name):
                value = listener.invoke((value, *args))
        return value

    # ── Internals ─────────────────────────────────────────────────────────────

    @contextmanager
    def _dispatching(self, name: str) -> Iterator[None]:
        self._stack.append(name)
        logger.debug("Dispatching hook %s", name)
        try:
            yield
        finally:
            self._stack.pop()

    @staticmethod
    def _validate(name: Any, callback: Any, accepted_args: Any) -> None:
        if not isinstance(name, str) or not name:
            raise InvalidHookError("Hook name must be a non-empty string", hook_name=name)
        if not callable(callback):
            raise InvalidHookError(f"Listener for {name} is not callable", hook_name=name)
        if not isinstance(accepted_args, int) or accepted_args < 0:
            raise InvalidHookError(f"accepted_args for {name} must be a non-negative integer", hook_name=name)


# ── Global default ────────────────────────────────────────────────────────────
# The host's process-wide registry. Relays and tests may inject their own.
hook_registry = HookRegistry()
