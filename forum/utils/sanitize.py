"""
Input Sanitization Utilities

Restricts user-supplied identifiers (request actions) to a safe character
set before they are used to build hook names.
"""

import re
from typing import Any

# Characters allowed in a sanitized key
_UNSAFE_KEY_CHARS = re.compile(r"[^a-z0-9_\-]")


def sanitize_key(value: Any) -> str:
    """
    Sanitize a string key used to build a hook name.

    The value is lowercased and every character outside ``a-z``, ``0-9``,
    ``_`` and ``-`` dropped. Nothing is escaped or expanded, so distinct
    inputs only collide when they differ in dropped characters alone.
    Non-string input yields "".

    Examples:
        >>> sanitize_key("New-Reply")
        'new-reply'
        >>> sanitize_key("edit&reply")
        'editreply'
    """
    if not isinstance(value, str):
        return ""

    return _UNSAFE_KEY_CHARS.sub("", value.lower())
