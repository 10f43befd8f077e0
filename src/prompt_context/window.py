# prompt_context/window.py
"""
ContextWindow - the public entry point.

Owns a MessageStore, a validated WindowConfig and (optionally) a
WindowMetrics record. Every insertion runs the token accountant, checks
the budget, lets the EvictionEngine make room, then appends and updates
metrics.

Design principles:
- Transactional: a rejected insert or a failed reconfiguration leaves the
  window exactly as it was
- Owned data: callers only ever see frozen messages and fresh strings
- Optional locking: thread_safe=True holds an RLock for the whole call

Usage::

    window = ContextWindow(max_tokens=1000)
    window.add_message(MessageKind.SYSTEM, Priority.CRITICAL, "You are helpful.")
    window.add_message(MessageKind.USER, Priority.NORMAL, "Hi!")
    prompt = window.get_context()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Any, ContextManager

from prompt_context.eviction import EvictionEngine, EvictionReport
from prompt_context.exceptions import (
    ContextWindowError,
    InvalidParameterError,
    MessageNotFoundError,
    MissingArgumentError,
    WindowFullError,
    WindowLockedError,
)
from prompt_context.formatter import ContextFormatter
from prompt_context.models import (
    Message,
    MessageKind,
    Priority,
    WindowConfig,
    WindowMetrics,
    WindowStats,
)
from prompt_context.store import MessageStore
from prompt_context.tokens import estimate_tokens
from prompt_context.validation import validate_config

logger = logging.getLogger(__name__)


class ContextWindow:
    """
    A token-bounded, priority-aware sequence of conversation messages.

    After any successful insert ``total_tokens <= max_tokens`` holds. A
    message is only refused when it alone is larger than the window.
    """

    def __init__(
        self,
        max_tokens: int | None = None,
        *,
        config: WindowConfig | dict[str, Any] | None = None,
    ) -> None:
        """
        Create a window from a token limit, a full configuration, or both
        (``max_tokens`` then overrides the configuration's limit).

        Raises InvalidParameterError if the resulting configuration is invalid.
        """
        if config is None:
            data: dict[str, Any] = WindowConfig.default().model_dump()
        elif isinstance(config, WindowConfig):
            data = config.model_dump()
        else:
            data = dict(config)
        if max_tokens is not None:
            data["max_tokens"] = max_tokens

        self._config = validate_config(data)
        self._store = MessageStore()
        self._engine = EvictionEngine()
        self._lock = threading.RLock()
        self._metrics: WindowMetrics | None = WindowMetrics() if self._config.metrics_enabled else None

        logger.debug("Created context window with max_tokens=%d", self._config.max_tokens)

    @classmethod
    def from_config(cls, config: WindowConfig | dict[str, Any]) -> ContextWindow:
        """Create a window from a full configuration."""
        return cls(config=config)

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    @contextmanager
    def _locked(self) -> Iterator[None]:
        timeout = self._config.lock_timeout
        acquired = self._lock.acquire(timeout=timeout) if timeout is not None else self._lock.acquire()
        if not acquired:
            raise WindowLockedError(f"Could not acquire window lock within {timeout}s")
        try:
            yield
        finally:
            self._lock.release()

    def _guard(self) -> ContextManager[None]:
        """Lock for the duration of a public operation when thread_safe is on."""
        if self._config.thread_safe:
            return self._locked()
        return nullcontext()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, kind: MessageKind, priority: Priority, content: str) -> Message:
        """
        Insert a message, evicting older ones if needed.

        Returns the stored message. Raises MissingArgumentError for
        ``content=None`` and WindowFullError when the message alone exceeds
        max_tokens; in both cases the window is unchanged.
        """
        with self._guard():
            if content is None:
                raise MissingArgumentError("Message content cannot be None")
            if not isinstance(content, str):
                raise InvalidParameterError(f"Message content must be a string, not {type(content).__name__}")

            try:
                kind = MessageKind(kind)
                priority = Priority(priority)
            except ValueError as e:
                raise InvalidParameterError(str(e)) from e

            message = Message(
                kind=kind,
                priority=priority,
                content=content,
                token_count=estimate_tokens(content, self._config.token_ratio),
            )

            if message.token_count > self._config.max_tokens:
                raise WindowFullError(message.token_count, self._config.max_tokens)

            report = self._engine.make_room(self._store, message.token_count, self._config)
            self._store.append(message)

            if self._metrics is not None:
                self._record_evictions(report)
                self._metrics.record_added(message.token_count)
                self._metrics.observe(self._store.total_tokens, self._config.max_tokens)

            logger.debug(
                "Added %s/%s message (%d tokens, %d evicted)",
                message.kind.label,
                message.priority.label,
                message.token_count,
                report.count,
            )
            return message

    def add_message(self, kind: MessageKind, priority: Priority, content: str) -> bool:
        """Insert a message. Returns False instead of raising when it is refused."""
        try:
            self.insert(kind, priority, content)
        except ContextWindowError as e:
            logger.warning("Message rejected: %s", e)
            return False
        return True

    def remove(self, content: str) -> Message:
        """
        Remove the oldest message whose content matches exactly.

        Raises MessageNotFoundError if there is none.
        """
        with self._guard():
            if content is None:
                raise MissingArgumentError("Content to remove cannot be None")
            handle = self._store.find(content)
            if handle is None:
                raise MessageNotFoundError("No message with matching content")
            return self._store.remove(handle)

    def remove_message(self, content: str) -> bool:
        """Remove the first message matching ``content``. Returns False if absent."""
        try:
            self.remove(content)
        except ContextWindowError:
            return False
        return True

    def clear(self) -> None:
        """Remove every message. Metrics are left alone."""
        with self._guard():
            dropped = self._store.clear()
            logger.debug("Cleared %d messages", dropped)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> WindowConfig:
        """Copy of the active configuration."""
        return self._config.model_copy()

    def apply_config(self, config: WindowConfig | dict[str, Any]) -> None:
        """
        Validate and switch to a new configuration.

        A smaller max_tokens immediately re-runs compression and forced
        eviction against the new limit. Raises InvalidParameterError (and
        changes nothing) if the configuration is invalid.
        """
        with self._guard():
            new_config = validate_config(config)
            old_config = self._config
            self._config = new_config

            if new_config.metrics_enabled != old_config.metrics_enabled:
                self._set_metrics(new_config.metrics_enabled)

            if new_config.max_tokens < old_config.max_tokens:
                report = self._engine.make_room(self._store, 0, new_config)
                if self._metrics is not None:
                    self._record_evictions(report)
                logger.info(
                    "Shrunk max_tokens %d -> %d, evicted %d messages",
                    old_config.max_tokens,
                    new_config.max_tokens,
                    report.count,
                )
            else:
                logger.info("Applied configuration (max_tokens=%d)", new_config.max_tokens)

            if self._metrics is not None:
                self._metrics.observe(self._store.total_tokens, new_config.max_tokens)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        with self._guard():
            return len(self._store)

    @property
    def message_count(self) -> int:
        with self._guard():
            return len(self._store)

    @property
    def total_tokens(self) -> int:
        with self._guard():
            return self._store.total_tokens

    @property
    def max_tokens(self) -> int:
        with self._guard():
            return self._config.max_tokens

    @property
    def remaining_tokens(self) -> int:
        """Tokens that can still be added without eviction."""
        with self._guard():
            return max(0, self._config.max_tokens - self._store.total_tokens)

    @property
    def utilization(self) -> float:
        """Token utilization as a percentage."""
        with self._guard():
            return 100.0 * self._store.total_tokens / self._config.max_tokens

    def is_empty(self) -> bool:
        with self._guard():
            return len(self._store) == 0

    def is_full(self) -> bool:
        with self._guard():
            return self._store.total_tokens >= self._config.max_tokens

    def messages(self) -> list[Message]:
        """Stored messages, oldest first."""
        with self._guard():
            return list(self._store)

    def get_context(self) -> str:
        """Transcript of the window, one ``Kind: content`` line per message."""
        with self._guard():
            if self._metrics is not None:
                self._metrics.record_retrieval()
            return ContextFormatter().format_messages(self._store)

    def to_json(self) -> str:
        """JSON export of the window."""
        from prompt_context.persistence import window_to_json

        return window_to_json(self)

    def get_stats(self) -> WindowStats:
        """Point-in-time statistics."""
        with self._guard():
            stats = WindowStats(
                message_count=self.message_count,
                total_tokens=self.total_tokens,
                max_tokens=self.max_tokens,
                remaining_tokens=self.remaining_tokens,
                utilization=self.utilization,
            )
            for message in self._store:
                stats.messages_by_priority[message.priority] += 1
                stats.messages_by_kind[message.kind] += 1
            return stats

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    @property
    def metrics(self) -> WindowMetrics | None:
        """Snapshot of the metrics record, or None when metrics are disabled."""
        with self._guard():
            return self._metrics.model_copy() if self._metrics is not None else None

    @property
    def metrics_enabled(self) -> bool:
        return self._metrics is not None

    def reset_metrics(self) -> None:
        """Replace the metrics record with a fresh one (no-op when disabled)."""
        with self._guard():
            if self._metrics is not None:
                self._metrics = WindowMetrics()

    def enable_metrics(self, enabled: bool = True) -> None:
        """Turn metrics on (always a fresh record) or off (record discarded)."""
        with self._guard():
            self._config = self._config.model_copy(update={"metrics_enabled": enabled})
            self._metrics = WindowMetrics() if enabled else None

    def _set_metrics(self, enabled: bool) -> None:
        if enabled:
            if self._metrics is None:
                self._metrics = WindowMetrics()
        else:
            self._metrics = None

    def _record_evictions(self, report: EvictionReport) -> None:
        if report.compressed:
            self._metrics.record_compression()
        for message in report.evicted:
            self._metrics.record_eviction(message.token_count)

    def _record_json_retrieval(self) -> None:
        if self._metrics is not None:
            self._metrics.record_retrieval()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> None:
        """Save to the text format (overwrites ``path``)."""
        from prompt_context.persistence import save_window

        save_window(self, path)

    @classmethod
    def load(cls, path: str | Path) -> ContextWindow:
        """Load a window saved with save()."""
        from prompt_context.persistence import load_window

        return load_window(path)

    def export_json(self, path: str | Path) -> None:
        """Write the one-way JSON export to ``path``."""
        from prompt_context.persistence import export_json

        export_json(self, path)

    def _restore(self, messages: list[Message]) -> None:
        """Append messages as-is, bypassing eviction and metrics."""
        with self._guard():
            for message in messages:
                self._store.append(message)
