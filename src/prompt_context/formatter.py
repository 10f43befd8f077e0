# prompt_context/formatter.py
"""
Context Formatter.

Renders a window into the transcript string handed to the model, and
renders statistics and metrics into human-readable reports.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from prompt_context.models import Message, WindowMetrics, WindowStats

if TYPE_CHECKING:
    from prompt_context.window import ContextWindow


class FormatterConfig(BaseModel):
    """Configuration for transcript formatting."""

    line_separator: str = Field(default="\n")

    # Terminate the last line too ("User: hi\n" instead of "User: hi")
    trailing_newline: bool = False


class ContextFormatter(BaseModel):
    """Formats messages as ``<Kind>: <content>`` lines, oldest first."""

    config: FormatterConfig = Field(default_factory=FormatterConfig)

    def format_messages(self, messages: Iterable[Message]) -> str:
        lines = [message.render() for message in messages]
        if not lines:
            return ""
        text = self.config.line_separator.join(lines)
        if self.config.trailing_newline:
            text += self.config.line_separator
        return text

    def format_stats(self, stats: WindowStats) -> str:
        """Statistics report for a window."""
        lines = [
            "Context Window Statistics:",
            f"  Total messages: {stats.message_count}",
            f"  Total tokens: {stats.total_tokens}/{stats.max_tokens} ({stats.utilization:.1f}% full)",
            f"  Tokens remaining: {stats.remaining_tokens}",
        ]
        by_priority = ", ".join(f"{p.label}={n}" for p, n in stats.messages_by_priority.items())
        lines.append(f"  By priority: {by_priority}")
        return "\n".join(lines)

    def format_metrics(self, metrics: WindowMetrics | None) -> str:
        """Metrics report; a single line when metrics are disabled."""
        if metrics is None:
            return "Metrics disabled"
        return "\n".join(
            [
                "Context Window Metrics:",
                f"  Messages added: {metrics.messages_added}",
                f"  Messages evicted: {metrics.messages_evicted}",
                f"  Tokens added: {metrics.tokens_added}",
                f"  Tokens evicted: {metrics.tokens_evicted}",
                f"  Compressions: {metrics.compressions}",
                f"  Context retrievals: {metrics.context_retrievals}",
                f"  Peak utilization: {metrics.peak_utilization * 100:.1f}%",
                f"  Uptime: {metrics.uptime_seconds:.1f}s",
            ]
        )


def format_context(window: ContextWindow | None) -> str:
    """Transcript of ``window``; an empty string for None."""
    if window is None:
        return ""
    return window.get_context()


def format_stats(window: ContextWindow | None) -> str:
    """Statistics report of ``window``; an empty string for None."""
    if window is None:
        return ""
    return ContextFormatter().format_stats(window.get_stats())


def format_metrics(window: ContextWindow | None) -> str:
    """Metrics report of ``window``; an empty string for None."""
    if window is None:
        return ""
    return ContextFormatter().format_metrics(window.metrics)
