# prompt_context/validation.py
"""Configuration validation."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from prompt_context.exceptions import InvalidParameterError
from prompt_context.models import WindowConfig

logger = logging.getLogger(__name__)


def validate_config(config: WindowConfig | dict[str, Any]) -> WindowConfig:
    """
    Validate a configuration and return a fresh, checked copy.

    Raises InvalidParameterError if any parameter is out of range.
    """
    if config is None:
        raise InvalidParameterError("configuration is required")
    data = config.model_dump() if isinstance(config, WindowConfig) else config
    try:
        return WindowConfig.model_validate(data)
    except ValidationError as e:
        logger.debug("Rejected configuration: %s", e)
        raise InvalidParameterError(str(e)) from e


def is_valid_config(config: WindowConfig | dict[str, Any]) -> bool:
    """Check a configuration without raising."""
    try:
        validate_config(config)
    except InvalidParameterError:
        return False
    return True
