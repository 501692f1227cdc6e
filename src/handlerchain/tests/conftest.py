"""Shared fixtures for chain tests."""

import pytest

from handlerchain import clear_settings_cache


@pytest.fixture(autouse=True)
def fresh_settings() -> object:
    """Reload settings from the environment for every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
