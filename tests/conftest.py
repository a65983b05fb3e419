"""Shared test fixtures."""

import pytest

from shoprank.settings import get_settings
from shoprank.stores.shops import reset_memory_repository


@pytest.fixture(autouse=True)
def memory_backend(monkeypatch: pytest.MonkeyPatch):
    """Run every test against the in-memory backend with default priors."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.delenv("PRIOR_ALPHA", raising=False)
    monkeypatch.delenv("PRIOR_BETA", raising=False)
    get_settings.cache_clear()
    reset_memory_repository()
    yield
    get_settings.cache_clear()
    reset_memory_repository()
