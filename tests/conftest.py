"""Pytest configuration and fixtures."""

import os
from typing import Callable

import httpx
import pytest

# Set test environment
os.environ["KITE_BASE_URL"] = "http://kite.test"
os.environ["KITE_API_KEY"] = "test-api-key"
os.environ["KITE_LOG_LEVEL"] = "debug"
os.environ["KITE_TIMEOUT"] = "5000"

from kite_custody.client import KiteClient
from kite_custody.config import get_settings

BASE_URL = "http://kite.test"
API_KEY = "test-api-key"


@pytest.fixture(autouse=True)
def reset_settings():
    """Clear cached settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def log_records() -> list[tuple[str, str]]:
    """Captured (level, message) pairs from the SDK logger."""
    return []


@pytest.fixture
def make_client(log_records) -> Callable[..., KiteClient]:
    """Factory for clients backed by a mock transport."""

    def factory(handler: Callable, **kwargs) -> KiteClient:
        kwargs.setdefault("log_level", "debug")
        kwargs.setdefault("timeout", 5000)
        return KiteClient(
            base_url=BASE_URL,
            api_key=API_KEY,
            log_sink=lambda level, message: log_records.append((level, message)),
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return factory
