# prompt_context/__init__.py
"""
Prompt Context Controller.

Keeps a growing conversation inside a fixed token budget:
- Token accounting: character-count estimate per message
- Priority-aware eviction: LOW, then NORMAL, then HIGH messages are
  compressed away before anything else; CRITICAL messages only leave
  through last-resort forced eviction
- Validated, re-appliable configuration
- Optional metrics
- Text persistence and a one-way JSON export
"""

from prompt_context.models import (
    MAX_TOKENS_CEILING,
    CompressionStrategy,
    ErrorCode,
    Message,
    MessageKind,
    Priority,
    WindowConfig,
    WindowMetrics,
    WindowStats,
)
from prompt_context.exceptions import (
    ContextWindowError,
    InvalidParameterError,
    MessageNotFoundError,
    MissingArgumentError,
    PersistenceError,
    WindowFullError,
    WindowLockedError,
)
from prompt_context.tokens import estimate_tokens
from prompt_context.validation import is_valid_config, validate_config
from prompt_context.store import MessageStore
from prompt_context.eviction import EvictionEngine, EvictionReport
from prompt_context.formatter import ContextFormatter, FormatterConfig, format_context
from prompt_context.window import ContextWindow
from prompt_context.persistence import (
    FORMAT_HEADER,
    export_json,
    load_window,
    save_window,
    window_to_json,
)
from prompt_context.version import __version__, version_at_least

__all__ = [
    # Enums
    "CompressionStrategy",
    "ErrorCode",
    "MessageKind",
    "Priority",
    # Models
    "Message",
    "WindowConfig",
    "WindowMetrics",
    "WindowStats",
    # Errors
    "ContextWindowError",
    "InvalidParameterError",
    "MessageNotFoundError",
    "MissingArgumentError",
    "PersistenceError",
    "WindowFullError",
    "WindowLockedError",
    # Core
    "ContextWindow",
    "EvictionEngine",
    "EvictionReport",
    "MessageStore",
    "estimate_tokens",
    "is_valid_config",
    "validate_config",
    # Formatting
    "ContextFormatter",
    "FormatterConfig",
    "format_context",
    # Persistence
    "FORMAT_HEADER",
    "export_json",
    "load_window",
    "save_window",
    "window_to_json",
    # Constants
    "MAX_TOKENS_CEILING",
    "__version__",
    "version_at_least",
]
