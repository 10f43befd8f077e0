# prompt_context/models/enums.py
"""Enums and constants for the context window."""

from enum import IntEnum

# =============================================================================
# Enums
# =============================================================================


class MessageKind(IntEnum):
    """
    Who produced a message.

    Integer values are the codes used by the text persistence format.
    """

    USER = 0
    ASSISTANT = 1
    SYSTEM = 2
    TOOL = 3

    @property
    def label(self) -> str:
        """Human-readable name used in transcripts ("User", "Tool", ...)."""
        return self.name.capitalize()


class Priority(IntEnum):
    """
    Retention rank of a message.

    Lower ranks are compressed away first. CRITICAL is never touched by
    staged compression, only by forced eviction.
    """

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class CompressionStrategy(IntEnum):
    """How the window frees space before falling back to forced eviction."""

    NONE = 0  # Forced eviction only
    LOW_PRIORITY_FIRST = 1  # Staged LOW -> NORMAL -> HIGH
    SUMMARIZE = 2  # Reserved, not implemented
    AGGRESSIVE = 3  # Staged, keeping min_tokens_reserve free


class ErrorCode(IntEnum):
    """Result codes carried by every ContextWindowError."""

    SUCCESS = 0
    NULL_OR_MISSING_HANDLE = -1
    INVALID_PARAMETER = -2
    OUT_OF_MEMORY = -3
    FULL = -4
    NOT_FOUND = -5
    IO = -6
    LOCKED = -7


# =============================================================================
# Constants
# =============================================================================

# Compression stages, in the order they are applied
COMPRESSION_STAGES: tuple[Priority, ...] = (Priority.LOW, Priority.NORMAL, Priority.HIGH)

# Upper bound for max_tokens, half the signed 32-bit range
MAX_TOKENS_CEILING = 2**30
