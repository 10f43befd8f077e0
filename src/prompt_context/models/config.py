# prompt_context/models/config.py
"""Window configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from prompt_context.config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_METRICS_ENABLED,
    DEFAULT_TOKEN_RATIO,
)
from prompt_context.models.enums import MAX_TOKENS_CEILING, CompressionStrategy


class WindowConfig(BaseModel):
    """
    Operating parameters for a ContextWindow.

    Field constraints are enforced by pydantic on construction only;
    model_copy() and attribute assignment skip them, so windows always
    re-check a config through validation.validate_config().
    """

    max_tokens: int = Field(
        default=DEFAULT_MAX_TOKENS,
        ge=1,
        le=MAX_TOKENS_CEILING,
        description="Token capacity of the window",
    )
    min_tokens_reserve: int = Field(
        default=0,
        ge=0,
        description="Headroom kept free by the AGGRESSIVE strategy",
    )
    compression: CompressionStrategy = Field(default=CompressionStrategy.LOW_PRIORITY_FIRST)
    metrics_enabled: bool = Field(default=DEFAULT_METRICS_ENABLED)
    thread_safe: bool = Field(default=False, description="Guard every public operation with a lock")
    token_ratio: int = Field(default=DEFAULT_TOKEN_RATIO, ge=1, description="Characters per token")
    auto_compress: bool = Field(default=True, description="Run staged compression before forced eviction")
    lock_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for the lock before raising WindowLockedError",
    )

    @model_validator(mode="after")
    def _check_reserve(self) -> WindowConfig:
        if self.min_tokens_reserve >= self.max_tokens:
            raise ValueError(
                f"min_tokens_reserve ({self.min_tokens_reserve}) must be less than max_tokens ({self.max_tokens})"
            )
        return self

    @classmethod
    def default(cls) -> WindowConfig:
        """Default configuration."""
        return cls()
