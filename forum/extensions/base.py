"""
Extension Base Classes

ExtensionMeta: declarative metadata for an extension (name, version, hooks).
ExtensionBase: abstract base class all forum extensions must subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from forum.hooks.relay import EventRelay


@dataclass
class ExtensionMeta:
    """
    Declarative metadata describing an extension.

    Attributes:
        name:        Machine-readable slug, e.g. "akismet", "signatures".
        version:     Semver string, e.g. "1.0.0".
        description: Human-readable description.
        author:      Extension author (defaults to "Forum Community").
        hooks:       Checkpoints the extension listens on, without prefix.
                     Loading fails if any of them is not a forum checkpoint.
    """

    name: str
    version: str
    description: str
    author: str = "Forum Community"
    hooks: list[str] = field(default_factory=list)


class ExtensionBase(ABC):
    """
    Abstract base class for forum extensions.

    Subclasses implement ``meta`` and attach their listeners in ``setup``
    through ``relay.registry`` and ``relay.hook_name``. ``teardown`` has a
    default no-op implementation.
    """

    @property
    @abstractmethod
    def meta(self) -> ExtensionMeta:
        """Return the extension's metadata."""
        ...

    @abstractmethod
    def setup(self, relay: EventRelay, config: dict[str, Any]) -> None:
        """
        Attach listeners to the relay's checkpoints.

        Args:
            relay:  The relay whose checkpoints to listen on.
            config: The extension's persisted config dict.
        """

    def teardown(self, relay: EventRelay) -> None:  # noqa: B027
        """Detach listeners when the extension is disabled or the forum deactivates."""
