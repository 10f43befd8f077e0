# prompt_context/exceptions.py
"""
Exceptions raised by prompt_context.

Every exception carries an ErrorCode so callers that prefer result codes
can branch on ``err.code`` instead of the exception type.
"""

from __future__ import annotations

from prompt_context.models.enums import ErrorCode


class ContextWindowError(Exception):
    """Base class for all context window errors."""

    code: ErrorCode = ErrorCode.SUCCESS


class MissingArgumentError(ContextWindowError, ValueError):
    """A required window or argument was None."""

    code = ErrorCode.NULL_OR_MISSING_HANDLE


class InvalidParameterError(ContextWindowError, ValueError):
    """A configuration parameter failed validation."""

    code = ErrorCode.INVALID_PARAMETER


class WindowFullError(ContextWindowError):
    """A message alone is larger than the window capacity."""

    code = ErrorCode.FULL

    def __init__(self, tokens: int, max_tokens: int):
        self.tokens = tokens
        self.max_tokens = max_tokens
        super().__init__(f"Message ({tokens} tokens) exceeds window capacity ({max_tokens} tokens)")


class MessageNotFoundError(ContextWindowError, LookupError):
    """The message to remove is not in the window."""

    code = ErrorCode.NOT_FOUND


class PersistenceError(ContextWindowError, OSError):
    """Saving, loading or exporting a window failed."""

    code = ErrorCode.IO


class WindowLockedError(ContextWindowError):
    """The window lock could not be acquired within lock_timeout."""

    code = ErrorCode.LOCKED
