"""
Extension Registry

ExtensionRegistry: stores the extensions set up against a relay, keyed by
name, and tears them down again on request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from forum.exceptions import ExtensionNotFoundError

if TYPE_CHECKING:
    from forum.extensions.base import ExtensionBase
    from forum.hooks.relay import EventRelay

logger = logging.getLogger(__name__)


class ExtensionRegistry:
    """In-process registry of active forum extensions."""

    def __init__(self) -> None:
        self._extensions: dict[str, ExtensionBase] = {}

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, extension: ExtensionBase) -> None:
        """Record an extension that has been set up."""
        self._extensions[extension.meta.name] = extension
        logger.info("Extension registered: %s v%s", extension.meta.name, extension.meta.version)

    def unregister(self, name: str, relay: EventRelay) -> ExtensionBase:
        """
        Tear down and forget the extension called ``name``.

        Raises:
            ExtensionNotFoundError: if no such extension is registered.
        """
        extension = self._extensions.pop(name, None)
        if extension is None:
            raise ExtensionNotFoundError(name)
        extension.teardown(relay)
        logger.info("Extension unregistered: %s", name)
        return extension

    def teardown_all(self, relay: EventRelay) -> list[str]:
        """
        Tear down every extension, most recently registered first.

        A failing ``teardown`` is logged and does not stop the rest; the
        extension is forgotten either way.

        Returns:
            Names of the extensions whose teardown raised.
        """
        failed: list[str] = []
        for name in reversed(list(self._extensions)):
            try:
                self.unregister(name, relay)
            except Exception:
                logger.exception("Error tearing down extension %s", name)
                failed.append(name)
        return failed

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, name: str) -> ExtensionBase | None:
        """Return the extension with the given name, or None if not registered."""
        return self._extensions.get(name)

    def all_extensions(self) -> list[ExtensionBase]:
        """Return all registered extensions in registration order."""
        return list(self._extensions.values())

    def is_registered(self, name: str) -> bool:
        return name in self._extensions


# ── Global singleton ──────────────────────────────────────────────────────────
extension_registry = ExtensionRegistry()
