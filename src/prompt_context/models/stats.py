# prompt_context/models/stats.py
"""Metrics and statistics models."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from prompt_context.models.enums import MessageKind, Priority

# =============================================================================
# Metrics
# =============================================================================


class WindowMetrics(BaseModel):
    """
    Counters layered on top of window mutations.

    A fresh record is allocated whenever metrics are enabled or reset;
    nothing carries over from a previous record.
    """

    messages_added: int = Field(default=0)
    messages_evicted: int = Field(default=0)
    tokens_added: int = Field(default=0)
    tokens_evicted: int = Field(default=0)
    compressions: int = Field(default=0, description="Compression passes invoked")
    context_retrievals: int = Field(default=0, description="Transcript and JSON reads")
    peak_utilization: float = Field(default=0.0, description="Highest total/max ratio observed")
    start_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def uptime_seconds(self) -> float:
        """Seconds since this record was allocated."""
        return (datetime.now(timezone.utc) - self.start_time).total_seconds()

    def record_added(self, tokens: int) -> None:
        """Record a successful insertion."""
        self.messages_added += 1
        self.tokens_added += tokens

    def record_eviction(self, tokens: int) -> None:
        """Record one evicted message."""
        self.messages_evicted += 1
        self.tokens_evicted += tokens

    def record_compression(self) -> None:
        """Record a compression pass."""
        self.compressions += 1

    def record_retrieval(self) -> None:
        """Record a transcript or JSON retrieval."""
        self.context_retrievals += 1

    def observe(self, total_tokens: int, max_tokens: int) -> None:
        """Update peak utilization."""
        if max_tokens <= 0:
            return
        self.peak_utilization = max(self.peak_utilization, total_tokens / max_tokens)


# =============================================================================
# Stats
# =============================================================================


class WindowStats(BaseModel):
    """Point-in-time statistics for a window."""

    message_count: int = Field(default=0)
    total_tokens: int = Field(default=0)
    max_tokens: int = Field(default=0)
    remaining_tokens: int = Field(default=0)
    utilization: float = Field(default=0.0, description="Token utilization (percent)")
    messages_by_priority: dict[Priority, int] = Field(default_factory=lambda: dict.fromkeys(Priority, 0))
    messages_by_kind: dict[MessageKind, int] = Field(default_factory=lambda: dict.fromkeys(MessageKind, 0))
