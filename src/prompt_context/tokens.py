# prompt_context/tokens.py
"""
Token accounting.

A character-count heuristic, not a model tokenizer: cost is the text
length divided by a characters-per-token ratio, rounded up.
"""

from __future__ import annotations

DEFAULT_TOKEN_RATIO = 4


def estimate_tokens(text: str | None, ratio: int = DEFAULT_TOKEN_RATIO) -> int:
    """
    Estimate the token cost of a text.

    ``ratio`` is not validated here; callers pass a validated
    WindowConfig.token_ratio.
    """
    if not text:
        return 0
    return (len(text) + ratio - 1) // ratio
