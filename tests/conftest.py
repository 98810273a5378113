"""Top-level pytest configuration for wirebox."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

# Import for side effects so every error code is registered
import wirebox.config.errors
import wirebox.injection.errors
from wirebox.config import clear_settings_cache
from wirebox.injection import GlobalAccessor


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test without WIREBOX_* variables and with fresh settings."""
    for name in (
        "WIREBOX_ENV",
        "WIREBOX_REGISTRY_PATH",
        "WIREBOX_VALIDATE_IMPLEMENTATIONS",
        "ENVIRONMENT",
        "ENV",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_global_services() -> Iterator[None]:
    """Forget the default provider between tests."""
    GlobalAccessor.reset()
    yield
    GlobalAccessor.reset()


@pytest.fixture(autouse=True)
def suppress_logging() -> Iterator[None]:
    """Suppress wirebox log output during tests."""
    logging.disable(logging.CRITICAL)
    yield
    logging.disable(logging.NOTSET)
