# tests/conftest.py
"""
Shared pytest fixtures and configuration for prompt_context tests.
"""

import logging

import pytest

from prompt_context import ContextWindow, MessageKind, Priority, WindowConfig

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)
logging.getLogger("prompt_context").setLevel(logging.DEBUG)


@pytest.fixture
def window():
    """A default-sized window."""
    return ContextWindow(1000)


@pytest.fixture
def small_window():
    """A 100-token window."""
    return ContextWindow(100)


@pytest.fixture
def populated_window():
    """A window holding one message of each kind and priority."""
    w = ContextWindow(2000)
    w.add_message(MessageKind.SYSTEM, Priority.CRITICAL, "You are a helpful AI assistant.")
    w.add_message(MessageKind.USER, Priority.HIGH, "How do I allocate memory?")
    w.add_message(MessageKind.ASSISTANT, Priority.NORMAL, "Use malloc(), calloc() or realloc().")
    w.add_message(MessageKind.TOOL, Priority.LOW, "tool output: 42")
    return w


@pytest.fixture
def thread_safe_config():
    return WindowConfig(max_tokens=500, thread_safe=True)


# Test markers
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
