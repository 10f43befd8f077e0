# prompt_context/persistence.py
"""
Persistence codec for context windows.

Text format (UTF-8, "\\n" line breaks, one field per line)::

    PCC_CONTEXT_V1
    <max_tokens>
    <message_count>
    <kind code>        -+
    <priority code>     | one block
    <token_count>       | per message,
    <content>          -+ oldest first

Content is written verbatim: a message containing a line break does not
round-trip. Loading restores messages directly with their stored token
counts, without running eviction, so a file over its own budget loads
as-is.

The JSON export is one-way; there is no JSON import.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from prompt_context.exceptions import (
    InvalidParameterError,
    MissingArgumentError,
    PersistenceError,
)
from prompt_context.models import Message, MessageKind, Priority
from prompt_context.window import ContextWindow

logger = logging.getLogger(__name__)

FORMAT_HEADER = "PCC_CONTEXT_V1"

# Lines per message block: kind, priority, token_count, content
_BLOCK_LINES = 4

# =============================================================================
# Text format
# =============================================================================


def dumps_window(window: ContextWindow) -> str:
    """Serialize a window to the text format."""
    if window is None:
        raise MissingArgumentError("window is required")

    # Header and blocks must come from one consistent state
    with window._guard():
        max_tokens = window.max_tokens
        messages = window.messages()

    lines = [FORMAT_HEADER, str(max_tokens), str(len(messages))]
    for message in messages:
        if "\n" in message.content or "\r" in message.content:
            logger.warning("Message content contains a line break and will not load back correctly")
        lines.extend(
            [
                str(int(message.kind)),
                str(int(message.priority)),
                str(message.token_count),
                message.content,
            ]
        )
    return "\n".join(lines) + "\n"


def save_window(window: ContextWindow, path: str | Path) -> None:
    """
    Write ``window`` to ``path``, replacing any existing file.

    Not transactional: a failure part-way leaves a partial file.
    Raises PersistenceError if the file cannot be written.
    """
    text = dumps_window(window)
    try:
        with Path(path).open("w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise PersistenceError(f"Failed to save context window to {path}: {e}") from e

    logger.info("Saved context window to %s", path)


def _parse_int(value: str, field: str, line_no: int) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise PersistenceError(f"Line {line_no}: invalid {field} {value!r}") from e


def loads_window(text: str) -> ContextWindow:
    """Rebuild a window from the text format."""
    lines = text.split("\n")
    if not lines or lines[0] != FORMAT_HEADER:
        raise PersistenceError(f"Unrecognized format header (expected {FORMAT_HEADER})")
    if len(lines) < 3:
        raise PersistenceError("Truncated header")

    max_tokens = _parse_int(lines[1], "max_tokens", 2)
    message_count = _parse_int(lines[2], "message_count", 3)
    if message_count < 0:
        raise PersistenceError(f"Line 3: invalid message_count {message_count}")
    if len(lines) < 3 + message_count * _BLOCK_LINES:
        raise PersistenceError(f"Truncated file: expected {message_count} messages")

    messages: list[Message] = []
    for i in range(message_count):
        start = 3 + i * _BLOCK_LINES
        kind_code, priority_code, tokens, content = lines[start : start + _BLOCK_LINES]
        try:
            messages.append(
                Message(
                    kind=MessageKind(_parse_int(kind_code, "kind", start + 1)),
                    priority=Priority(_parse_int(priority_code, "priority", start + 2)),
                    token_count=_parse_int(tokens, "token_count", start + 3),
                    content=content,
                )
            )
        except (ValueError, ValidationError) as e:
            raise PersistenceError(f"Invalid message block {i} at line {start + 1}: {e}") from e

    try:
        window = ContextWindow(max_tokens)
    except InvalidParameterError as e:
        raise PersistenceError(f"Invalid stored max_tokens {max_tokens}") from e

    window._restore(messages)

    if window.total_tokens > window.max_tokens:
        logger.warning(
            "Loaded window is over budget (%d/%d tokens)",
            window.total_tokens,
            window.max_tokens,
        )
    return window


def load_window(path: str | Path) -> ContextWindow:
    """
    Load a window saved with save_window().

    Raises PersistenceError if the file cannot be read or is malformed.
    """
    try:
        with Path(path).open("r", encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceError(f"Failed to load context window from {path}: {e}") from e

    window = loads_window(text)
    logger.info("Loaded %d messages from %s", window.message_count, path)
    return window


# =============================================================================
# JSON export
# =============================================================================


class MessageExport(BaseModel):
    """One message in the JSON export."""

    kind: str
    priority: str
    content: str
    tokens: int


class WindowExport(BaseModel):
    """Top-level JSON export document."""

    max_tokens: int
    total_tokens: int
    message_count: int
    messages: list[MessageExport] = Field(default_factory=list)


def window_to_json(window: ContextWindow | None) -> str:
    """JSON export of ``window``; an empty string for None."""
    if window is None:
        return ""

    with window._guard():
        max_tokens = window.max_tokens
        messages = window.messages()
        window._record_json_retrieval()

    document = WindowExport(
        max_tokens=max_tokens,
        total_tokens=sum(m.token_count for m in messages),
        message_count=len(messages),
        messages=[
            MessageExport(
                kind=m.kind.label,
                priority=m.priority.label,
                content=m.content,
                tokens=m.token_count,
            )
            for m in messages
        ],
    )
    return document.model_dump_json(indent=2)


def export_json(window: ContextWindow, path: str | Path) -> None:
    """Write the JSON export of ``window`` to ``path``."""
    if window is None:
        raise MissingArgumentError("window is required")
    text = window_to_json(window)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"Failed to export context window to {path}: {e}") from e

    logger.info("Exported context window to %s", path)
