# prompt_context/models/message.py
"""Message model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from prompt_context.models.enums import MessageKind, Priority


class Message(BaseModel):
    """
    A single conversation message held by a window.

    Frozen: the token count is computed once at insertion and a message
    handed back to a caller can never change what the window stores.
    """

    model_config = {"frozen": True}

    kind: MessageKind = Field(..., description="Who produced the message")
    priority: Priority = Field(default=Priority.NORMAL, description="Retention rank")
    content: str = Field(..., description="Message text")
    token_count: int = Field(default=0, ge=0, description="Cached token estimate")

    def render(self) -> str:
        """Transcript line for this message."""
        return f"{self.kind.label}: {self.content}"
