from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Process-wide defaults for new windows: can be overridden by environment variable
DEFAULT_MAX_TOKENS = int(os.getenv("PCC_MAX_TOKENS", "2048"))
DEFAULT_TOKEN_RATIO = int(os.getenv("PCC_TOKEN_RATIO", "4"))
DEFAULT_METRICS_ENABLED = _env_bool("PCC_METRICS_ENABLED", True)
