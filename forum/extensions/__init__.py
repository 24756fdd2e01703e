"""
Forum Extension System

Public API:
    ExtensionMeta      — extension metadata dataclass
    ExtensionBase      — abstract base class for all extensions
    ExtensionRegistry  — registry of active extensions
    extension_registry — global singleton registry instance
"""

from .base import ExtensionBase, ExtensionMeta
from .registry import ExtensionRegistry, extension_registry

__all__ = ["ExtensionBase", "ExtensionMeta", "ExtensionRegistry", "extension_registry"]
