# prompt_context/version.py
"""Version information for PCC (Prompt Context Controller)."""

VERSION_MAJOR = 1
VERSION_MINOR = 0
VERSION_PATCH = 0

__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"

# Format: 0xMMNNPP
VERSION_PACKED = (VERSION_MAJOR << 16) | (VERSION_MINOR << 8) | VERSION_PATCH

LIBRARY_NAME = "PCC"
LIBRARY_DESCRIPTION = "Prompt Context Controller"


def version_at_least(major: int, minor: int = 0, patch: int = 0) -> bool:
    """True if this library is at least version major.minor.patch."""
    return VERSION_PACKED >= ((major << 16) | (minor << 8) | patch)
