"""
Custom Exception Classes for the forum hook layer

Listener errors are never wrapped by these classes; they propagate to the
caller exactly as the listener raised them. The classes below cover misuse
of the registry and extension loading only.
"""

from typing import Any

from fastapi import status


class ForumError(Exception):
    """Base exception class for all forum-related exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Hook Registry Exceptions
# ============================================================================


class InvalidHookError(ForumError):
    """Raised when a hook name or listener cannot be registered"""

    def __init__(self, message: str = "Invalid hook registration", hook_name: Any | None = None):
        details = {"hook_name": hook_name} if hook_name is not None else {}
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


# ============================================================================
# Extension Exceptions
# ============================================================================


class ExtensionNotFoundError(ForumError):
    """Raised when an extension is not registered"""

    def __init__(self, name: str):
        super().__init__(
            message=f"Extension not found: {name}",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"extension": name},
        )


class ExtensionLoadError(ForumError):
    """Raised when an extension cannot be imported or instantiated"""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Failed to load extension '{path}': {reason}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"path": path, "reason": reason},
        )
