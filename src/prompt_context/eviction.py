# prompt_context/eviction.py
"""
Eviction policy engine for the context window.

Restores the token budget when an incoming message (or a smaller
max_tokens) would overflow the window. Two separate mechanisms run in
strict order:

1. Staged compression: remove every LOW message, then every NORMAL, then
   every HIGH, re-checking the budget between stages. CRITICAL messages
   are never a compression stage.
2. Forced eviction: remove the oldest messages, whatever their priority,
   until the incoming cost fits or the store is empty. This is the only
   way a CRITICAL message can leave the window.

Within a stage and during forced eviction the oldest message goes first.

Usage::

    engine = EvictionEngine()
    report = engine.make_room(store, incoming_tokens=60, config=config)
    for message in report.evicted:
        ...
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from prompt_context.models import (
    COMPRESSION_STAGES,
    CompressionStrategy,
    Message,
    Priority,
    WindowConfig,
)
from prompt_context.store import MessageStore

logger = logging.getLogger(__name__)

# =============================================================================
# Models
# =============================================================================


class EvictionReport(BaseModel):
    """What a make_room() call removed."""

    evicted: list[Message] = Field(default_factory=list, description="Removed messages, in removal order")
    stages_run: list[Priority] = Field(default_factory=list, description="Compression stages that removed messages")
    compressed: bool = Field(default=False, description="Whether a compression pass was invoked")
    forced: int = Field(default=0, description="Messages removed by forced eviction")

    @property
    def tokens_freed(self) -> int:
        return sum(m.token_count for m in self.evicted)

    @property
    def count(self) -> int:
        return len(self.evicted)


# =============================================================================
# Engine
# =============================================================================


class EvictionEngine:
    """
    Staged compression followed by forced eviction.

    Stateless apart from remembering that the unimplemented SUMMARIZE
    strategy has already been reported.
    """

    def __init__(self) -> None:
        self._summarize_warned = False

    def make_room(
        self,
        store: MessageStore,
        incoming_tokens: int,
        config: WindowConfig,
    ) -> EvictionReport:
        """
        Evict until ``store.total_tokens + incoming_tokens <= config.max_tokens``.

        The caller must already have rejected an incoming cost larger than
        max_tokens; with that precondition the budget always holds on return.
        """
        report = EvictionReport()
        max_tokens = config.max_tokens

        if store.total_tokens + incoming_tokens <= max_tokens:
            return report

        if config.auto_compress and config.compression != CompressionStrategy.NONE:
            self._compress(store, incoming_tokens, config, report)

        if store.total_tokens + incoming_tokens > max_tokens:
            self._force_evict(store, incoming_tokens, max_tokens, report)

        return report

    def _compression_target(self, config: WindowConfig) -> int:
        if config.compression == CompressionStrategy.AGGRESSIVE:
            return config.max_tokens - config.min_tokens_reserve
        if config.compression == CompressionStrategy.SUMMARIZE and not self._summarize_warned:
            logger.warning("SUMMARIZE compression is not implemented; using LOW_PRIORITY_FIRST")
            self._summarize_warned = True
        return config.max_tokens

    def _compress(
        self,
        store: MessageStore,
        incoming_tokens: int,
        config: WindowConfig,
        report: EvictionReport,
    ) -> None:
        report.compressed = True
        target = self._compression_target(config)

        for priority in COMPRESSION_STAGES:
            if store.total_tokens + incoming_tokens <= target:
                break

            # Collect first, remove second: never mutate the sequence mid-scan
            handles = [handle for handle, message in store.items() if message.priority == priority]
            if not handles:
                continue

            for handle in handles:
                report.evicted.append(store.remove(handle))
            report.stages_run.append(priority)
            logger.debug(
                "Compression stage %s removed %d messages (total now %d)",
                priority.name,
                len(handles),
                store.total_tokens,
            )

    def _force_evict(
        self,
        store: MessageStore,
        incoming_tokens: int,
        max_tokens: int,
        report: EvictionReport,
    ) -> None:
        before = report.count
        critical = 0

        while store.total_tokens + incoming_tokens > max_tokens:
            handle = store.oldest()
            if handle is None:
                break
            message = store.remove(handle)
            if message.priority == Priority.CRITICAL:
                critical += 1
            report.evicted.append(message)

        report.forced = report.count - before
        logger.warning(
            "Forced eviction removed %d messages (%d critical) to fit %d tokens into %d",
            report.forced,
            critical,
            incoming_tokens,
            max_tokens,
        )
