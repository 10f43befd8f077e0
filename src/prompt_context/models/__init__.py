# prompt_context/models/__init__.py
"""Data models for the context window."""

from prompt_context.models.enums import (
    COMPRESSION_STAGES,
    MAX_TOKENS_CEILING,
    CompressionStrategy,
    ErrorCode,
    MessageKind,
    Priority,
)
from prompt_context.models.message import Message
from prompt_context.models.config import WindowConfig
from prompt_context.models.stats import WindowMetrics, WindowStats

__all__ = [
    # Enums
    "CompressionStrategy",
    "ErrorCode",
    "MessageKind",
    "Priority",
    # Constants
    "COMPRESSION_STAGES",
    "MAX_TOKENS_CEILING",
    # Models
    "Message",
    "WindowConfig",
    "WindowMetrics",
    "WindowStats",
]
