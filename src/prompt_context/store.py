# prompt_context/store.py
"""
Message Store for the context window.

An arena of messages addressed by stable integer handles. Sequence order is
the insertion order of the handle -> message mapping, so:

- append at the newest end is O(1)
- removal of any message by handle is O(1)
- iteration runs oldest to newest in O(n)

Running totals are updated in the same call as every append/remove and are
never recomputed from scratch.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator

from prompt_context.exceptions import MessageNotFoundError
from prompt_context.models import Message


class MessageStore:
    """Ordered, owned sequence of messages with token bookkeeping."""

    def __init__(self) -> None:
        self._messages: dict[int, Message] = {}
        self._handles = itertools.count()
        self._total_tokens = 0

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages.values()))

    def __contains__(self, handle: object) -> bool:
        return handle in self._messages

    @property
    def total_tokens(self) -> int:
        """Sum of token_count over all stored messages."""
        return self._total_tokens

    def append(self, message: Message) -> int:
        """Append a message at the newest end. Returns its handle."""
        handle = next(self._handles)
        self._messages[handle] = message
        self._total_tokens += message.token_count
        return handle

    def remove(self, handle: int) -> Message:
        """
        Remove the message with the given handle.

        Raises MessageNotFoundError for unknown handles.
        """
        message = self._messages.pop(handle, None)
        if message is None:
            raise MessageNotFoundError(f"No message with handle {handle}")
        self._total_tokens -= message.token_count
        return message

    def get(self, handle: int) -> Message | None:
        return self._messages.get(handle)

    def oldest(self) -> int | None:
        """Handle of the oldest message, or None when empty."""
        return next(iter(self._messages), None)

    def items(self) -> list[tuple[int, Message]]:
        """(handle, message) pairs, oldest first. A snapshot, safe to mutate against."""
        return list(self._messages.items())

    def find(self, content: str) -> int | None:
        """Handle of the first (oldest) message whose content matches exactly."""
        for handle, message in self._messages.items():
            if message.content == content:
                return handle
        return None

    def clear(self) -> int:
        """Drop every message. Returns how many were dropped."""
        count = len(self._messages)
        self._messages.clear()
        self._total_tokens = 0
        return count
