"""
Extension Loader

Reads and writes extension configuration from a JSON file and sets up every
enabled extension at application startup.

Config format::

    {
        "signatures": {"enabled": true, "path": "signatures.ext:SignaturesExtension", "max_length": 200}
    }

``path`` is a ``module:ClassName`` import path; every other key is passed
to the extension's ``setup`` untouched.
"""

from __future__ import annotations

import importlib
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from forum.config import get_settings
from forum.exceptions import ExtensionLoadError
from forum.extensions.base import ExtensionBase
from forum.hooks import names

if TYPE_CHECKING:
    from forum.extensions.registry import ExtensionRegistry
    from forum.hooks.relay import EventRelay

logger = logging.getLogger(__name__)


def _config_path(path: Path | str | None) -> Path:
    return Path(path) if path is not None else Path(get_settings().extensions_config_file)


# ── Config I/O ────────────────────────────────────────────────────────────────


def load_extensions_config(path: Path | str | None = None) -> dict[str, dict[str, Any]]:
    """
    Load extension configuration from disk.

    Returns an empty config if the file does not exist or cannot be parsed.
    """
    config_file = _config_path(path)
    if config_file.exists():
        try:
            return json.loads(config_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read extensions config %s: %s", config_file, exc)
    return {}


def save_extensions_config(config: dict[str, dict[str, Any]], path: Path | str | None = None) -> None:
    """Persist extension configuration to disk."""
    config_file = _config_path(path)
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(
        json.dumps(config, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


# ── Import ────────────────────────────────────────────────────────────────────


def import_extension(path: str) -> ExtensionBase:
    """
    Import and instantiate the extension class at ``module:ClassName``.

    Raises:
        ExtensionLoadError: if the path is malformed, the import fails, or
            the target is not an ExtensionBase subclass.
    """
    module_name, _, class_name = path.partition(":")
    if not module_name or not class_name:
        raise ExtensionLoadError(path, "expected 'module:ClassName'")

    try:
        extension_class = getattr(importlib.import_module(module_name), class_name)
    except (ImportError, AttributeError) as exc:
        raise ExtensionLoadError(path, str(exc)) from exc

    if not (isinstance(extension_class, type) and issubclass(extension_class, ExtensionBase)):
        raise ExtensionLoadError(path, "not an ExtensionBase subclass")
    return extension_class()


# ── Startup initialisation ────────────────────────────────────────────────────


def initialize_extensions(
    registry: ExtensionRegistry,
    relay: EventRelay,
    config: dict[str, dict[str, Any]] | None = None,
) -> list[ExtensionBase]:
    """
    Set up and register every enabled extension.

    Entries are processed in config order; entries without ``enabled: true``
    or without a ``path`` are skipped.

    Raises:
        ExtensionLoadError: if an extension cannot be imported or its
            ``meta.hooks`` names a checkpoint the forum never fires.

    Returns:
        The extensions that were set up.
    """
    if config is None:
        config = load_extensions_config()

    loaded: list[ExtensionBase] = []
    for name, entry in config.items():
        if not entry.get("enabled", False):
            logger.debug("Extension %s is disabled, skipping", name)
            continue
        path = entry.get("path")
        if not path:
            logger.warning("Extension %s has no import path, skipping", name)
            continue

        extension = import_extension(path)
        unknown = [hook for hook in extension.meta.hooks if not names.is_checkpoint(hook)]
        if unknown:
            raise ExtensionLoadError(path, f"unknown checkpoints: {', '.join(unknown)}")
        options = {key: value for key, value in entry.items() if key not in ("enabled", "path")}
        extension.setup(relay, options)
        registry.register(extension)
        loaded.append(extension)

    logger.info("Extension initialisation complete, %d extensions loaded", len(loaded))
    return loaded
